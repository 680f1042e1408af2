# stats.py
# Per-team and per-player stat pages: totals plus a match-by-match history.

from typing import Dict, List

from sqlmodel import Session, select

from scrimhub_backend.core.exceptions import NotFound
from scrimhub_backend.core.scoring_config import AVG_PLACEMENT_DECIMALS
from scrimhub_backend.models.match_model import Match, MatchTeamStats, MatchPlayerStats
from scrimhub_backend.models.player_model import Player
from scrimhub_backend.models.scrim_model import Scrim
from scrimhub_backend.models.team_model import Team
from scrimhub_backend.services.leaderboard import safe_average


def _match_context(session: Session, match_ids: List[int]) -> Dict[int, dict]:
    """match_id -> {match_number, map_name, scrim_id, scrim_name}"""
    if not match_ids:
        return {}

    rows = session.exec(
        select(Match, Scrim)
        .join(Scrim, Scrim.id == Match.scrim_id)
        .where(Match.id.in_(match_ids))
    ).all()

    return {
        match.id: {
            "match_number": match.match_number,
            "map_name": match.map_name,
            "scrim_id": scrim.id,
            "scrim_name": scrim.name,
            "played_at": match.created_at,
        }
        for match, scrim in rows
    }


def get_team_summary(session: Session, team_id: int) -> dict:
    """
    Totals for one team across every saved match:
    matches, kills, points, booyahs and average placement (1 decimal, 0 when no matches).
    """
    team = session.get(Team, team_id)
    if not team:
        raise NotFound("Team", team_id)

    stats = session.exec(
        select(MatchTeamStats)
        .where(MatchTeamStats.team_id == team_id)
        .order_by(MatchTeamStats.match_id)
    ).all()

    total_matches = len(stats)
    context = _match_context(session, [s.match_id for s in stats])

    return {
        "team_id": team.id,
        "team_name": team.name,
        "total_matches": total_matches,
        "total_kills": sum(s.team_kills for s in stats),
        "total_points": sum(s.total_points for s in stats),
        "booyahs": sum(1 for s in stats if s.is_booyah),
        "avg_placement": safe_average(sum(s.placement for s in stats), total_matches, AVG_PLACEMENT_DECIMALS),
        "matches": [
            {
                "match_id": s.match_id,
                **context.get(s.match_id, {}),
                "placement": s.placement,
                "placement_points": s.placement_points,
                "team_kills": s.team_kills,
                "total_points": s.total_points,
                "is_booyah": s.is_booyah,
            }
            for s in stats
        ],
    }


def get_player_summary(session: Session, player_id: int) -> dict:
    """
    Totals for one player. kd is kills per match played (no death tracking),
    booyahs count matches where the team the player played for finished first.
    """
    player = session.get(Player, player_id)
    if not player:
        raise NotFound("Player", player_id)

    stats = session.exec(
        select(MatchPlayerStats)
        .where(MatchPlayerStats.player_id == player_id)
        .order_by(MatchPlayerStats.match_id)
    ).all()

    matches_played = len(stats)
    total_kills = sum(s.kills for s in stats)

    booyah_keys = set()
    if stats:
        booyah_rows = session.exec(
            select(MatchTeamStats).where(
                MatchTeamStats.match_id.in_([s.match_id for s in stats]),
                MatchTeamStats.is_booyah == True,  # noqa: E712
            )
        ).all()
        booyah_keys = {(row.match_id, row.team_id) for row in booyah_rows}

    context = _match_context(session, [s.match_id for s in stats])

    return {
        "player_id": player.id,
        "username": player.username,
        "team_id": player.team_id,
        "matches_played": matches_played,
        "total_kills": total_kills,
        "kd": safe_average(total_kills, matches_played),
        "booyahs": sum(1 for s in stats if (s.match_id, s.team_id) in booyah_keys),
        "matches": [
            {
                "match_id": s.match_id,
                **context.get(s.match_id, {}),
                "team_id": s.team_id,
                "kills": s.kills,
                "is_booyah": (s.match_id, s.team_id) in booyah_keys,
            }
            for s in stats
        ],
    }

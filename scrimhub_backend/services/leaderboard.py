# leaderboard.py
# Global team and player rankings, recomputed from the full stats history on
# every request. Nothing here is persisted.

from typing import Dict, Iterable, List, Mapping, Optional

from sqlmodel import Session, select
from sqlmodel.ext.asyncio.session import AsyncSession

from scrimhub_backend.core.scoring_config import FREE_AGENT_LABEL, AVERAGE_DECIMALS
from scrimhub_backend.models.match_model import MatchTeamStats, MatchPlayerStats
from scrimhub_backend.models.player_model import Player
from scrimhub_backend.models.team_model import Team
from scrimhub_backend.services import storage


def safe_average(total: float, count: int, decimals: int = AVERAGE_DECIMALS) -> float:
    """total / count rounded, or 0.0 when there is nothing to average."""
    if not count or count <= 0:
        return 0.0
    return round(total / count, decimals)


def _apply_rank(rows: List[dict], limit: Optional[int]) -> List[dict]:
    for position, row in enumerate(rows, start=1):
        row["rank"] = position
    if limit is not None:
        return rows[:max(0, limit)]
    return rows


# =========================================
# TEAM RANKINGS
# =========================================
def build_team_rankings(
    team_stats: Iterable[MatchTeamStats],
    team_names: Mapping[int, str],
    limit: Optional[int] = None,
) -> List[dict]:
    """
    Fold MatchTeamStats rows into one row per team.

    Sort order (all descending unless noted):
    1) total points
    2) booyahs
    3) total kills
    4) placement in the team's most recent match, ascending (teams without one last)
    5) first match played, ascending
    6) team id, ascending

    Rows for teams missing from team_names are skipped.
    """
    table: Dict[int, dict] = {}

    for stat in team_stats:
        if stat.team_id not in team_names:
            continue

        row = table.get(stat.team_id)
        if row is None:
            row = table[stat.team_id] = {
                "team_id": stat.team_id,
                "team_name": team_names[stat.team_id],
                "matches_played": 0,
                "total_kills": 0,
                "total_points": 0,
                "booyahs": 0,
                "placement_sum": 0,
                "recent_placement": None,
                "_latest_match_id": None,
                "_first_match_id": None,
            }

        row["matches_played"] += 1
        row["total_kills"] += stat.team_kills or 0
        row["total_points"] += stat.total_points or 0
        row["placement_sum"] += stat.placement or 0
        if stat.is_booyah:
            row["booyahs"] += 1

        # Match ids grow in creation order, so the highest id is the latest match
        if row["_latest_match_id"] is None or stat.match_id > row["_latest_match_id"]:
            row["_latest_match_id"] = stat.match_id
            row["recent_placement"] = stat.placement
        if row["_first_match_id"] is None or stat.match_id < row["_first_match_id"]:
            row["_first_match_id"] = stat.match_id

    def sort_key(row: dict):
        recent = row["recent_placement"]
        return (
            -row["total_points"],
            -row["booyahs"],
            -row["total_kills"],
            recent is None,
            recent if recent is not None else 0,
            row["_first_match_id"],
            row["team_id"],
        )

    ranked = []
    for row in sorted(table.values(), key=sort_key):
        ranked.append({
            "team_id": row["team_id"],
            "team_name": row["team_name"],
            "matches_played": row["matches_played"],
            "total_kills": row["total_kills"],
            "total_points": row["total_points"],
            "booyahs": row["booyahs"],
            "avg_kills": safe_average(row["total_kills"], row["matches_played"]),
            "avg_placement": safe_average(row["placement_sum"], row["matches_played"]),
            "recent_placement": row["recent_placement"],
        })

    return _apply_rank(ranked, limit)


# =========================================
# PLAYER RANKINGS
# =========================================
def build_player_rankings(
    player_stats: Iterable[MatchPlayerStats],
    players: Iterable[Player],
    team_names: Mapping[int, str],
    team_stats: Iterable[MatchTeamStats] = (),
    limit: Optional[int] = None,
) -> List[dict]:
    """
    Fold MatchPlayerStats rows into one row per player.

    The displayed team is the player's CURRENT team, while booyahs are counted
    against the team the player actually played for in each match.

    Sort order: total kills desc, average kills desc, matches played asc, player id asc.
    """
    player_index = {player.id: player for player in players}
    booyah_keys = {(stat.match_id, stat.team_id) for stat in team_stats if stat.is_booyah}

    table: Dict[int, dict] = {}
    for stat in player_stats:
        player = player_index.get(stat.player_id)
        if player is None:
            continue

        row = table.get(stat.player_id)
        if row is None:
            row = table[stat.player_id] = {
                "player_id": player.id,
                "username": player.username,
                "team_id": player.team_id,
                "team_name": team_names.get(player.team_id, FREE_AGENT_LABEL),
                "matches_played": 0,
                "total_kills": 0,
                "booyahs": 0,
            }

        row["matches_played"] += 1
        row["total_kills"] += stat.kills or 0
        if (stat.match_id, stat.team_id) in booyah_keys:
            row["booyahs"] += 1

    for row in table.values():
        row["avg_kills"] = safe_average(row["total_kills"], row["matches_played"])

    ranked = sorted(
        table.values(),
        key=lambda row: (-row["total_kills"], -row["avg_kills"], row["matches_played"], row["player_id"]),
    )
    return _apply_rank(ranked, limit)
# =========================================
# READERS (used by the leaderboard routes)
# =========================================
# The full scans live in storage; the async routes run them through
# AsyncSession.run_sync so there is a single scan path.
def _team_names(session: Session) -> Dict[int, str]:
    return {team.id: team.name for team in session.exec(select(Team)).all()}


def load_team_leaderboard(session: Session, limit: Optional[int] = None) -> List[dict]:
    """Scan every MatchTeamStats row and rank teams."""
    return build_team_rankings(storage.get_all_team_stats(session), _team_names(session), limit=limit)


def load_player_leaderboard(session: Session, limit: Optional[int] = None) -> List[dict]:
    """Scan every MatchPlayerStats row and rank players."""
    player_stats = storage.get_all_player_stats(session)

    player_ids = {stat.player_id for stat in player_stats}
    players = []
    if player_ids:
        players = session.exec(select(Player).where(Player.id.in_(list(player_ids)))).all()

    return build_player_rankings(
        player_stats,
        players,
        _team_names(session),
        team_stats=[stat for stat in storage.get_all_team_stats(session) if stat.is_booyah],
        limit=limit,
    )


async def get_team_leaderboard(db: AsyncSession, limit: Optional[int] = None) -> List[dict]:
    return await db.run_sync(load_team_leaderboard, limit)


async def get_player_leaderboard(db: AsyncSession, limit: Optional[int] = None) -> List[dict]:
    return await db.run_sync(load_player_leaderboard, limit)

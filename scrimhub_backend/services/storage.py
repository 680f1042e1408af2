# storage.py
# Record-level reads and writes used by the scoring services.
# None of these commit: callers own the transaction boundary.

from datetime import datetime
from typing import List, Optional, Dict, Any
from sqlmodel import Session, select

from scrimhub_backend.core.exceptions import NotFound
from scrimhub_backend.models.scrim_model import Scrim, ScrimTeam, ScrimPlayer
from scrimhub_backend.models.match_model import Match, MatchTeamStats, MatchPlayerStats


# =========================================
# SCRIMS & MATCHES
# =========================================
def get_scrim_by_id(session: Session, scrim_id: int) -> Optional[Scrim]:
    return session.get(Scrim, scrim_id)


def get_match_by_id(session: Session, match_id: int) -> Optional[Match]:
    return session.get(Match, match_id)


def get_matches_by_scrim_id(session: Session, scrim_id: int) -> List[Match]:
    return session.exec(
        select(Match)
        .where(Match.scrim_id == scrim_id)
        .order_by(Match.match_number)
    ).all()


def update_match(session: Session, match_id: int, fields: Dict[str, Any]) -> Match:
    """Apply a partial update to a match. Unknown field names raise AttributeError."""
    match = session.get(Match, match_id)
    if match is None:
        raise NotFound("Match", match_id)

    for key, value in fields.items():
        if not hasattr(match, key):
            raise AttributeError(f"Match has no field '{key}'")
        setattr(match, key, value)

    session.add(match)
    return match


# =========================================
# PARTICIPATION & ROSTERS
# =========================================
def get_scrim_teams(session: Session, scrim_id: int) -> List[ScrimTeam]:
    return session.exec(
        select(ScrimTeam)
        .where(ScrimTeam.scrim_id == scrim_id)
        .order_by(ScrimTeam.joined_at, ScrimTeam.id)
    ).all()


def get_scrim_players(session: Session, scrim_id: int) -> List[ScrimPlayer]:
    """Roster snapshot for every team of the scrim."""
    return session.exec(
        select(ScrimPlayer)
        .where(ScrimPlayer.scrim_id == scrim_id)
        .order_by(ScrimPlayer.team_id, ScrimPlayer.id)
    ).all()


def save_scrim_player(session: Session, scrim_id: int, team_id: int, player_id: int) -> ScrimPlayer:
    entry = ScrimPlayer(scrim_id=scrim_id, team_id=team_id, player_id=player_id)
    session.add(entry)
    return entry


def delete_scrim_player(session: Session, scrim_id: int, player_id: int) -> None:
    entries = session.exec(
        select(ScrimPlayer).where(
            ScrimPlayer.scrim_id == scrim_id,
            ScrimPlayer.player_id == player_id,
        )
    ).all()
    for entry in entries:
        session.delete(entry)


# =========================================
# MATCH STATS (upsert keyed on match + team / match + player)
# =========================================
def save_match_team_stats(session: Session, record: MatchTeamStats) -> MatchTeamStats:
    """
    Insert or overwrite the stats row for (record.match_id, record.team_id).
    An existing row keeps its id and created_at.
    """
    existing = session.exec(
        select(MatchTeamStats).where(
            MatchTeamStats.match_id == record.match_id,
            MatchTeamStats.team_id == record.team_id,
        )
    ).first()

    if existing is None:
        session.add(record)
        return record

    existing.placement = record.placement
    existing.placement_points = record.placement_points
    existing.team_kills = record.team_kills
    existing.total_points = record.total_points
    existing.is_booyah = record.is_booyah
    existing.updated_at = datetime.utcnow()
    session.add(existing)
    return existing


def save_match_player_stats(session: Session, record: MatchPlayerStats) -> MatchPlayerStats:
    """Insert or overwrite the stats row for (record.match_id, record.player_id)."""
    existing = session.exec(
        select(MatchPlayerStats).where(
            MatchPlayerStats.match_id == record.match_id,
            MatchPlayerStats.player_id == record.player_id,
        )
    ).first()

    if existing is None:
        session.add(record)
        return record

    existing.team_id = record.team_id
    existing.kills = record.kills
    existing.updated_at = datetime.utcnow()
    session.add(existing)
    return existing


def delete_stale_player_stats(session: Session, match_id: int, team_id: int, keep_player_ids) -> int:
    """
    Remove player rows of (match, team) whose player is not in keep_player_ids.
    Used when a corrected submission drops a player, so the team's kill total
    and its player rows stay in sync. Returns the number of rows removed.
    """
    stale = session.exec(
        select(MatchPlayerStats).where(
            MatchPlayerStats.match_id == match_id,
            MatchPlayerStats.team_id == team_id,
            MatchPlayerStats.player_id.not_in(list(keep_player_ids)),
        )
    ).all()
    for row in stale:
        session.delete(row)
    return len(stale)


def get_match_team_stats(session: Session, match_id: int) -> List[MatchTeamStats]:
    return session.exec(
        select(MatchTeamStats)
        .where(MatchTeamStats.match_id == match_id)
        .order_by(MatchTeamStats.placement, MatchTeamStats.id)
    ).all()


def get_match_player_stats_by_match_id(session: Session, match_id: int) -> List[MatchPlayerStats]:
    return session.exec(
        select(MatchPlayerStats)
        .where(MatchPlayerStats.match_id == match_id)
        .order_by(MatchPlayerStats.team_id, MatchPlayerStats.id)
    ).all()


# =========================================
# FULL SCANS (leaderboards)
# =========================================
def get_all_team_stats(session: Session) -> List[MatchTeamStats]:
    return session.exec(select(MatchTeamStats).order_by(MatchTeamStats.id)).all()


def get_all_player_stats(session: Session) -> List[MatchPlayerStats]:
    return session.exec(select(MatchPlayerStats).order_by(MatchPlayerStats.id)).all()

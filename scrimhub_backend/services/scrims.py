# scrims.py
# Scrim setup: create the session with its matches, enter teams, and keep
# each team's roster for the scrim.

from typing import Iterable, List, Optional
from datetime import datetime

from sqlmodel import Session, select

from scrimhub_backend.core.exceptions import ValidationError, NotFound, InvalidReference
from scrimhub_backend.core.logger import setup_logger
from scrimhub_backend.models.match_model import Match, MatchStatus
from scrimhub_backend.models.player_model import Player
from scrimhub_backend.models.scrim_model import Scrim, ScrimTeam, ScrimStatus
from scrimhub_backend.models.team_model import Team
from scrimhub_backend.services import storage

logger = setup_logger(__name__)


def create_scrim(
    session: Session,
    name: str,
    match_count: int,
    host_team_id: Optional[int] = None,
    start_time: Optional[datetime] = None,
    room_id: Optional[str] = None,
    room_password: Optional[str] = None,
) -> Scrim:
    """
    Creates a scrim plus one pending Match per configured match (numbered from 1).
    """
    if not name or not name.strip():
        raise ValidationError("Scrim name is required.")
    if match_count < 1:
        raise ValidationError("A scrim needs at least one match.")
    if host_team_id is not None and not session.get(Team, host_team_id):
        raise NotFound("Team", host_team_id)

    scrim = Scrim(
        name=name.strip(),
        host_team_id=host_team_id,
        match_count=match_count,
        status=ScrimStatus.UPCOMING,
        start_time=start_time,
        room_id=room_id,
        room_password=room_password,
    )
    session.add(scrim)
    session.flush()

    for number in range(1, match_count + 1):
        session.add(Match(scrim_id=scrim.id, match_number=number, status=MatchStatus.PENDING))

    session.commit()
    session.refresh(scrim)

    logger.info(f"Created scrim {scrim.id} '{scrim.name}' with {match_count} matches")
    return scrim


def add_team_to_scrim(session: Session, scrim_id: int, team_id: int, slot: Optional[int] = None) -> ScrimTeam:
    """Enter a team into a scrim, snapshotting its current name."""
    if not storage.get_scrim_by_id(session, scrim_id):
        raise NotFound("Scrim", scrim_id)

    team = session.get(Team, team_id)
    if not team:
        raise NotFound("Team", team_id)

    already_in = any(st.team_id == team_id for st in storage.get_scrim_teams(session, scrim_id))
    if already_in:
        raise ValidationError("Team already added to this scrim.")

    scrim_team = ScrimTeam(scrim_id=scrim_id, team_id=team_id, team_name=team.name, slot=slot)
    session.add(scrim_team)
    session.commit()
    session.refresh(scrim_team)

    logger.info(f"Team {team_id} ({team.name}) joined scrim {scrim_id}")
    return scrim_team


def set_team_roster(session: Session, scrim_id: int, team_id: int, player_ids: Iterable[int]) -> List[int]:
    """
    Replace a team's roster for a scrim with player_ids.
    Missing players are added, players no longer listed are removed.
    Removing a roster entry never touches stats already saved.

    Returns the roster (player ids) after the update.
    """
    if not storage.get_scrim_by_id(session, scrim_id):
        raise NotFound("Scrim", scrim_id)

    scrim_team_ids = {st.team_id for st in storage.get_scrim_teams(session, scrim_id)}
    if team_id not in scrim_team_ids:
        raise InvalidReference(f"Team {team_id} is not part of this scrim.")

    wanted = list(dict.fromkeys(player_ids))

    if wanted:
        players = session.exec(select(Player).where(Player.id.in_(wanted))).all()
        found = {player.id: player for player in players}
        missing = [pid for pid in wanted if pid not in found]
        if missing:
            raise NotFound("Player", missing[0])
        outsiders = [pid for pid in wanted if found[pid].team_id != team_id]
        if outsiders:
            raise InvalidReference(f"Player {outsiders[0]} is not a member of team {team_id}.")

    roster = storage.get_scrim_players(session, scrim_id)
    current = [entry.player_id for entry in roster if entry.team_id == team_id]
    taken_elsewhere = {entry.player_id: entry.team_id for entry in roster if entry.team_id != team_id}

    for pid in wanted:
        if pid in taken_elsewhere:
            raise InvalidReference(
                f"Player {pid} is already on team {taken_elsewhere[pid]}'s roster for this scrim."
            )

    to_add = [pid for pid in wanted if pid not in current]
    to_remove = [pid for pid in current if pid not in wanted]

    for pid in to_add:
        storage.save_scrim_player(session, scrim_id, team_id, pid)
    for pid in to_remove:
        storage.delete_scrim_player(session, scrim_id, pid)

    session.commit()

    logger.info(
        f"Roster for team {team_id} in scrim {scrim_id}: +{len(to_add)} / -{len(to_remove)}"
    )
    return [pid for pid in current if pid not in to_remove] + to_add


def get_roster(session: Session, scrim_id: int) -> List[dict]:
    """Every roster entry of the scrim with player usernames."""
    if not storage.get_scrim_by_id(session, scrim_id):
        raise NotFound("Scrim", scrim_id)

    roster = storage.get_scrim_players(session, scrim_id)
    player_ids = [entry.player_id for entry in roster]
    usernames = {
        player.id: player.username
        for player in session.exec(select(Player).where(Player.id.in_(player_ids))).all()
    } if player_ids else {}

    return [
        {
            "scrim_id": entry.scrim_id,
            "team_id": entry.team_id,
            "player_id": entry.player_id,
            "username": usernames.get(entry.player_id),
        }
        for entry in roster
    ]

# match_results.py
# Turns an admin's result entry (placement per team, kills per player) into the
# authoritative MatchTeamStats / MatchPlayerStats rows of a match.

import threading
from typing import Dict, List, Iterable, Optional, Union, Mapping, Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from scrimhub_backend.core.exceptions import ValidationError, NotFound, InvalidReference, PartialWriteFailure
from scrimhub_backend.core.logger import setup_logger
from scrimhub_backend.core.points import compute_points, is_booyah
from scrimhub_backend.core.config import TEST_MODE
from scrimhub_backend.models.match_model import (
    MatchStatus, MatchTeamStats, MatchPlayerStats, TeamResultEntry
)
from scrimhub_backend.models.player_model import Player
from scrimhub_backend.models.team_model import Team
from scrimhub_backend.services import storage

logger = setup_logger(__name__)

TeamResultInput = Union[TeamResultEntry, Mapping[str, Any]]

# ---------------------------------------------
# Per-match write locks
# ---------------------------------------------
# Two admins saving the same match must not interleave their upserts.
_match_locks: Dict[int, threading.Lock] = {}
_match_locks_guard = threading.Lock()


def get_match_lock(match_id: int) -> threading.Lock:
    with _match_locks_guard:
        lock = _match_locks.get(match_id)
        if lock is None:
            lock = threading.Lock()
            _match_locks[match_id] = lock
        return lock


# ---------------------------------------------
# Input validation (runs before any write)
# ---------------------------------------------
def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_team_results(teams: Iterable[TeamResultInput]) -> List[TeamResultEntry]:
    """
    Accepts TeamResultEntry objects or plain dicts and returns validated entries.

    Rules:
    - at least one team
    - placement is an integer >= 1
    - every kill count is an integer >= 0
    - a team appears once and a player is listed under one team only
    """
    if teams is None:
        raise ValidationError("At least one team result is required.")

    entries: List[TeamResultEntry] = []
    for raw in teams:
        if isinstance(raw, TeamResultEntry):
            entries.append(raw)
            continue
        try:
            entries.append(TeamResultEntry.model_validate(raw))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(f"Invalid team result ({field}): {first.get('msg')}") from exc

    if not entries:
        raise ValidationError("At least one team result is required.")

    seen_teams = set()
    player_owner: Dict[int, int] = {}

    for entry in entries:
        if not _is_int(entry.team_id):
            raise ValidationError("Team id is required for every result.")
        if entry.team_id in seen_teams:
            raise ValidationError(f"Team {entry.team_id} is listed more than once.")
        seen_teams.add(entry.team_id)

        if not _is_int(entry.placement):
            raise ValidationError(f"Placement for team {entry.team_id} must be a whole number.")
        if entry.placement < 1:
            raise ValidationError(f"Placement for team {entry.team_id} must be 1 or higher.")

        for player_id, kills in entry.players.items():
            if not _is_int(player_id):
                raise ValidationError(f"Player id {player_id!r} for team {entry.team_id} is invalid.")
            if not _is_int(kills) or kills < 0:
                raise ValidationError(f"Kills for player {player_id} must be a whole number of 0 or more.")
            if player_id in player_owner:
                raise ValidationError(
                    f"Player {player_id} is listed for both team {player_owner[player_id]} and team {entry.team_id}."
                )
            player_owner[player_id] = entry.team_id

    return entries


# =========================================
# SAVE MATCH RESULTS
# =========================================
def save_match_results(
    session: Session,
    match_id: int,
    teams: Iterable[TeamResultInput],
    map_name: Optional[str] = None,
) -> dict:
    """
    Save (or re-save) the results of a match.

    - Team kills are the sum of the submitted player kills.
    - Placement + team kills go through the points table; placement 1 is a Booyah.
    - Rows are upserted on (match, team) and (match, player), so submitting
      again with corrected numbers overwrites instead of duplicating.
    - Marking the match completed is the last write, and everything is
      committed in one transaction: on a storage error nothing is kept and
      PartialWriteFailure is raised.
    """
    entries = parse_team_results(teams)

    # Matches are never deleted, so a lock is only ever created for a real match
    match = storage.get_match_by_id(session, match_id)
    if not match:
        raise NotFound("Match", match_id)

    with get_match_lock(match_id):
        # 1️⃣ Scrim participation (re-read the match now that we hold its lock)
        session.refresh(match)

        scrim_team_ids = {st.team_id for st in storage.get_scrim_teams(session, match.scrim_id)}
        for entry in entries:
            if entry.team_id not in scrim_team_ids:
                logger.warning(f"Rejected results for match {match_id}: team {entry.team_id} not in scrim {match.scrim_id}")
                raise InvalidReference(f"Team {entry.team_id} is not part of this scrim.")

        # 2️⃣ Roster check: unrostered players are saved but flagged
        roster = {(sp.team_id, sp.player_id) for sp in storage.get_scrim_players(session, match.scrim_id)}
        orphaned_player_ids = [
            player_id
            for entry in entries
            for player_id in entry.players
            if (entry.team_id, player_id) not in roster
        ]
        if orphaned_player_ids:
            logger.warning(
                f"Match {match_id}: saving kills for players not on their scrim roster: {orphaned_player_ids}"
            )

        # 3️⃣ A player already saved for a team left out of this submission would
        # move teams without that team's kill total being recomputed
        submitted_team_ids = {entry.team_id for entry in entries}
        submitted_player_ids = {player_id for entry in entries for player_id in entry.players}
        for row in storage.get_match_player_stats_by_match_id(session, match_id):
            if row.player_id in submitted_player_ids and row.team_id not in submitted_team_ids:
                logger.warning(
                    f"Rejected results for match {match_id}: player {row.player_id} "
                    f"is already saved for team {row.team_id}, which is not in this submission"
                )
                raise ValidationError(
                    f"Player {row.player_id} is already recorded for team {row.team_id} in this match. "
                    f"Include team {row.team_id} in the submission to move them."
                )

        # 4️⃣ Batched upserts, then the status transition, then one commit
        previous_status = match.status
        team_rows: List[MatchTeamStats] = []
        player_rows: List[MatchPlayerStats] = []
        try:
            for entry in entries:
                team_kills = sum(entry.players.values())
                points = compute_points(entry.placement, team_kills)

                team_rows.append(storage.save_match_team_stats(session, MatchTeamStats(
                    match_id=match_id,
                    team_id=entry.team_id,
                    placement=entry.placement,
                    placement_points=points.placement_points,
                    team_kills=team_kills,
                    total_points=points.total_points,
                    is_booyah=is_booyah(entry.placement),
                )))

                if TEST_MODE:
                    logger.info(
                        f"   Team {entry.team_id}: #{entry.placement} -> {points.placement_points} pts "
                        f"+ {team_kills} kills = {points.total_points}"
                    )

                removed = storage.delete_stale_player_stats(session, match_id, entry.team_id, entry.players.keys())
                if removed:
                    logger.info(f"Match {match_id}: dropped {removed} player rows no longer listed for team {entry.team_id}")

                for player_id, kills in entry.players.items():
                    player_rows.append(storage.save_match_player_stats(session, MatchPlayerStats(
                        match_id=match_id,
                        player_id=player_id,
                        team_id=entry.team_id,
                        kills=kills,
                    )))

            session.flush()

            match_fields = {"status": MatchStatus.COMPLETED}
            if map_name is not None:
                match_fields["map_name"] = map_name
            storage.update_match(session, match_id, match_fields)

            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception(f"Saving results for match {match_id} failed; match left as {previous_status}")
            raise PartialWriteFailure(match_id, str(exc)) from exc

        for row in team_rows + player_rows:
            session.refresh(row)
        session.refresh(match)

    logger.info(
        f"Saved results for match {match_id} (scrim {match.scrim_id}): "
        f"{len(team_rows)} teams, {len(player_rows)} players"
    )

    return {
        "match_id": match.id,
        "scrim_id": match.scrim_id,
        "status": match.status,
        "map_name": match.map_name,
        "teams": [
            {
                "id": row.id,
                "team_id": row.team_id,
                "placement": row.placement,
                "placement_points": row.placement_points,
                "team_kills": row.team_kills,
                "total_points": row.total_points,
                "is_booyah": row.is_booyah,
            }
            for row in sorted(team_rows, key=lambda r: (r.placement, r.team_id))
        ],
        "players": [
            {"id": row.id, "player_id": row.player_id, "team_id": row.team_id, "kills": row.kills}
            for row in player_rows
        ],
        "orphaned_player_ids": orphaned_player_ids,
    }


# =========================================
# READ RESULTS
# =========================================
def get_match_results(session: Session, match_id: int) -> dict:
    """
    Saved results of a match, best placement first, with team names.
    """
    match = storage.get_match_by_id(session, match_id)
    if not match:
        raise NotFound("Match", match_id)

    team_stats = storage.get_match_team_stats(session, match_id)
    team_ids = [row.team_id for row in team_stats]
    team_names = {
        team.id: team.name
        for team in session.exec(select(Team).where(Team.id.in_(team_ids))).all()
    } if team_ids else {}

    return {
        "match_id": match.id,
        "scrim_id": match.scrim_id,
        "match_number": match.match_number,
        "map_name": match.map_name,
        "status": match.status,
        "results": [
            {
                "team_id": row.team_id,
                "team_name": team_names.get(row.team_id),
                "placement": row.placement,
                "placement_points": row.placement_points,
                "team_kills": row.team_kills,
                "total_points": row.total_points,
                "is_booyah": row.is_booyah,
            }
            for row in team_stats
        ],
    }


def get_result_sheet(session: Session, match_id: int) -> dict:
    """
    Pre-filled result entry form for a match.
    Lists every team entered in the scrim with its roster; existing values are
    filled in, anything not yet saved shows placement 0 / kills 0.
    """
    match = storage.get_match_by_id(session, match_id)
    if not match:
        raise NotFound("Match", match_id)

    scrim_teams = storage.get_scrim_teams(session, match.scrim_id)
    roster = storage.get_scrim_players(session, match.scrim_id)
    existing_team_stats = {row.team_id: row for row in storage.get_match_team_stats(session, match_id)}
    existing_kills = {
        row.player_id: row.kills
        for row in storage.get_match_player_stats_by_match_id(session, match_id)
    }

    player_ids = [entry.player_id for entry in roster]
    usernames = {
        player.id: player.username
        for player in session.exec(select(Player).where(Player.id.in_(player_ids))).all()
    } if player_ids else {}

    teams_payload = []
    for scrim_team in scrim_teams:
        team_stat = existing_team_stats.get(scrim_team.team_id)
        teams_payload.append({
            "team_id": scrim_team.team_id,
            "team_name": scrim_team.team_name,
            "placement": team_stat.placement if team_stat else 0,
            "players": [
                {
                    "player_id": entry.player_id,
                    "username": usernames.get(entry.player_id),
                    "kills": existing_kills.get(entry.player_id, 0),
                }
                for entry in roster
                if entry.team_id == scrim_team.team_id
            ],
        })

    return {
        "match_id": match.id,
        "match_number": match.match_number,
        "map_name": match.map_name,
        "status": match.status,
        "teams": teams_payload,
    }

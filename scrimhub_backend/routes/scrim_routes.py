# scrim_routes.py
# Scrim setup: create scrims, enter teams and manage each team's roster.

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from scrimhub_backend.core.database import get_session
from scrimhub_backend.core.exceptions import NotFound
from scrimhub_backend.models.match_model import MatchRead
from scrimhub_backend.models.scrim_model import (
    ScrimCreate, ScrimRead, ScrimTeamAdd, ScrimTeamRead, RosterUpdate, RosterEntryRead
)
from scrimhub_backend.services import scrims as scrim_service
from scrimhub_backend.services import storage

router = APIRouter()


@router.post("", response_model=ScrimRead, status_code=201)
def create_scrim(data: ScrimCreate, session: Session = Depends(get_session)):
    return scrim_service.create_scrim(
        session,
        name=data.name,
        match_count=data.match_count,
        host_team_id=data.host_team_id,
        start_time=data.start_time,
        room_id=data.room_id,
        room_password=data.room_password,
    )


@router.get("/{scrim_id}", response_model=ScrimRead)
def get_scrim(scrim_id: int, session: Session = Depends(get_session)):
    scrim = storage.get_scrim_by_id(session, scrim_id)
    if not scrim:
        raise NotFound("Scrim", scrim_id)
    return scrim


@router.get("/{scrim_id}/matches", response_model=List[MatchRead])
def list_scrim_matches(scrim_id: int, session: Session = Depends(get_session)):
    if not storage.get_scrim_by_id(session, scrim_id):
        raise NotFound("Scrim", scrim_id)
    return storage.get_matches_by_scrim_id(session, scrim_id)


# ============================================
# TEAMS IN A SCRIM
# ============================================
@router.post("/{scrim_id}/teams", response_model=ScrimTeamRead, status_code=201)
def add_team(scrim_id: int, data: ScrimTeamAdd, session: Session = Depends(get_session)):
    return scrim_service.add_team_to_scrim(session, scrim_id, data.team_id, data.slot)


@router.get("/{scrim_id}/teams", response_model=List[ScrimTeamRead])
def list_scrim_teams(scrim_id: int, session: Session = Depends(get_session)):
    if not storage.get_scrim_by_id(session, scrim_id):
        raise NotFound("Scrim", scrim_id)
    return storage.get_scrim_teams(session, scrim_id)


# ============================================
# ROSTERS
# ============================================
@router.get("/{scrim_id}/roster", response_model=List[RosterEntryRead])
def get_roster(scrim_id: int, session: Session = Depends(get_session)):
    return scrim_service.get_roster(session, scrim_id)


@router.put("/{scrim_id}/teams/{team_id}/roster")
def set_roster(scrim_id: int, team_id: int, data: RosterUpdate, session: Session = Depends(get_session)):
    """Replace the team's roster for this scrim. Returns the resulting player ids."""
    player_ids = scrim_service.set_team_roster(session, scrim_id, team_id, data.player_ids)
    return {"scrim_id": scrim_id, "team_id": team_id, "player_ids": player_ids}

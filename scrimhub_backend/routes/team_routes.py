# team_routes.py
# Team registration, lookup and stats page.

from fastapi import APIRouter, Depends
from sqlmodel import Session

from scrimhub_backend.core.database import get_session
from scrimhub_backend.models.team_model import TeamCreate, TeamRead
from scrimhub_backend.services import teams as team_service
from scrimhub_backend.services.stats import get_team_summary

router = APIRouter()


@router.post("", response_model=TeamRead, status_code=201)
def register_team(data: TeamCreate, session: Session = Depends(get_session)):
    return team_service.create_team(session, data)


@router.get("/{team_id}", response_model=TeamRead)
def get_team(team_id: int, session: Session = Depends(get_session)):
    return team_service.get_team(session, team_id)


@router.get("/{team_id}/stats")
def get_team_stats(team_id: int, session: Session = Depends(get_session)):
    """Totals and match-by-match history for one team."""
    return get_team_summary(session, team_id)

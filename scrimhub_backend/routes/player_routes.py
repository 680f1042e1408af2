from fastapi import APIRouter, Depends
from sqlmodel import Session

from scrimhub_backend.core.database import get_session
from scrimhub_backend.models.player_model import PlayerCreate, PlayerRead, PlayerTeamUpdate
from scrimhub_backend.services import teams as team_service
from scrimhub_backend.services.stats import get_player_summary

router = APIRouter()


@router.post("", response_model=PlayerRead, status_code=201)
def register_player(data: PlayerCreate, session: Session = Depends(get_session)):
    return team_service.create_player(session, data)


@router.get("/{player_id}", response_model=PlayerRead)
def get_player(player_id: int, session: Session = Depends(get_session)):
    return team_service.get_player(session, player_id)


@router.patch("/{player_id}/team", response_model=PlayerRead)
def change_player_team(player_id: int, data: PlayerTeamUpdate, session: Session = Depends(get_session)):
    """
    Move a player to another team, or send null to make them a free agent.
    Kills already recorded stay with the team they were scored for.
    """
    return team_service.set_player_team(session, player_id, data.team_id)


@router.get("/{player_id}/stats")
def get_player_stats(player_id: int, session: Session = Depends(get_session)):
    return get_player_summary(session, player_id)

# scrimhub_backend/models/player_model.py
from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import SQLModel, Field


class PlayerStatus(str, Enum):
    """Approval state of a player's membership in their current team"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PlayerRole(str, Enum):
    """In-game role"""
    IGL = "IGL"              # In-Game Leader
    RUSHER = "Rusher"
    SNIPER = "Sniper"
    SUPPORTER = "Supporter"
    FLANKER = "Flanker"


class Player(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    email: str = Field(unique=True, index=True)

    # Current team. Match stats keep their own team snapshot, so changing this
    # never reattributes past kills.
    team_id: Optional[int] = Field(default=None, foreign_key="team.id", index=True)

    status: PlayerStatus = Field(default=PlayerStatus.PENDING)
    role: Optional[PlayerRole] = None
    in_game_name: Optional[str] = None
    game_uid: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------
from pydantic import BaseModel


class PlayerCreate(BaseModel):
    """Player sign-up payload. join_code attaches the player to a team right away."""
    username: str = Field(min_length=3, max_length=30)
    email: str = Field(max_length=255)
    role: Optional[PlayerRole] = None
    in_game_name: Optional[str] = None
    game_uid: Optional[str] = None
    join_code: Optional[str] = None


class PlayerTeamUpdate(BaseModel):
    """Move a player to another team (or none for free agent)."""
    team_id: Optional[int] = None


class PlayerRead(BaseModel):
    id: int
    username: str
    email: str
    team_id: Optional[int] = None
    status: PlayerStatus
    role: Optional[PlayerRole] = None
    in_game_name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

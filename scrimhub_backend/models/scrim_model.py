# scrim_model.py
# Defines Scrim (a practice session of several matches) plus the two
# participation tables: ScrimTeam (team entered in the scrim) and
# ScrimPlayer (a team's roster for that scrim).

from typing import Optional, List
from datetime import datetime
from enum import Enum
from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from pydantic import BaseModel


class ScrimStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class Scrim(SQLModel, table=True):
    """
    A scrim session. Creating one also creates `match_count` pending matches.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    host_team_id: Optional[int] = Field(default=None, foreign_key="team.id")
    match_count: int = Field(default=1, ge=1)
    status: ScrimStatus = Field(default=ScrimStatus.UPCOMING)

    # Lobby details shared with participating teams
    start_time: Optional[datetime] = None
    room_id: Optional[str] = None
    room_password: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)


class ScrimTeam(SQLModel, table=True):
    """
    Binds a Team to a Scrim. team_name is a snapshot taken when the team joined.
    """
    __table_args__ = (UniqueConstraint("scrim_id", "team_id", name="uq_scrim_team"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    scrim_id: int = Field(foreign_key="scrim.id", index=True)
    team_id: int = Field(foreign_key="team.id", index=True)
    team_name: str
    slot: Optional[int] = None
    joined_at: datetime = Field(default_factory=datetime.utcnow)


class ScrimPlayer(SQLModel, table=True):
    """
    Roster entry: this player plays for this team in this scrim.
    Only rostered players are expected to receive match stats.
    """
    __table_args__ = (UniqueConstraint("scrim_id", "player_id", name="uq_scrim_player"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    scrim_id: int = Field(foreign_key="scrim.id", index=True)
    team_id: int = Field(foreign_key="team.id", index=True)
    player_id: int = Field(foreign_key="player.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------
class ScrimCreate(BaseModel):
    name: str
    match_count: int = Field(default=1, ge=1, le=20)
    host_team_id: Optional[int] = None
    start_time: Optional[datetime] = None
    room_id: Optional[str] = None
    room_password: Optional[str] = None


class ScrimRead(BaseModel):
    id: int
    name: str
    host_team_id: Optional[int] = None
    match_count: int
    status: ScrimStatus
    start_time: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ScrimTeamAdd(BaseModel):
    team_id: int
    slot: Optional[int] = None


class ScrimTeamRead(BaseModel):
    id: int
    scrim_id: int
    team_id: int
    team_name: str
    slot: Optional[int] = None
    joined_at: datetime

    class Config:
        from_attributes = True


class RosterUpdate(BaseModel):
    """Full roster for one team in a scrim. Players not listed are removed."""
    player_ids: List[int]


class RosterEntryRead(BaseModel):
    scrim_id: int
    team_id: int
    player_id: int
    username: Optional[str] = None

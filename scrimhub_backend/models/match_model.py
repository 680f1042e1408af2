# match_model.py
# Defines the Match model (one game round inside a scrim) and the two result
# tables written when an admin saves match results: MatchTeamStats and
# MatchPlayerStats.

from typing import Optional, List, Dict
from datetime import datetime
from enum import Enum
from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from pydantic import BaseModel, StrictInt


class MatchStatus(str, Enum):
    PENDING = "pending"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class Match(SQLModel, table=True):
    """
    Represents a single match of a scrim.
    Created together with its scrim; never deleted.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    scrim_id: int = Field(foreign_key="scrim.id", index=True)
    match_number: int                                      # 1..scrim.match_count
    map_name: Optional[str] = None                         # Set when results are saved
    status: MatchStatus = Field(default=MatchStatus.PENDING)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class MatchTeamStats(SQLModel, table=True):
    """
    Result of one team in one match.
    total_points is always placement_points + team_kills and
    is_booyah is always placement == 1.
    """
    __table_args__ = (UniqueConstraint("match_id", "team_id", name="uq_match_team_stats"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    team_id: int = Field(foreign_key="team.id", index=True)

    placement: int
    placement_points: int = 0
    team_kills: int = 0
    total_points: int = 0
    is_booyah: bool = False

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class MatchPlayerStats(SQLModel, table=True):
    """
    Kills of one player in one match.
    team_id is the team the player played for in that match, not their current team.
    """
    __table_args__ = (UniqueConstraint("match_id", "player_id", name="uq_match_player_stats"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    player_id: int = Field(foreign_key="player.id", index=True)
    team_id: int = Field(foreign_key="team.id", index=True)
    kills: int = Field(default=0, ge=0)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------
class MatchRead(BaseModel):
    id: int
    scrim_id: int
    match_number: int
    map_name: Optional[str] = None
    status: MatchStatus
    created_at: datetime

    class Config:
        from_attributes = True


class TeamResultEntry(BaseModel):
    """Placement of one team plus kills per rostered player (player_id -> kills)."""
    team_id: StrictInt
    placement: StrictInt
    players: Dict[int, StrictInt] = {}


class MatchResultSubmission(BaseModel):
    """Schema for saving the results of a match"""
    map_name: Optional[str] = None
    teams: List[TeamResultEntry]

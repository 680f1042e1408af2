# team_model.py
# Defines the Team model (a registered esports squad) and its API schemas.

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


class Team(SQLModel, table=True):
    """Database model representing a registered Free Fire team."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    email: str = Field(unique=True, index=True)

    # Code players enter to join this team
    join_code: str = Field(unique=True, index=True)

    country: Optional[str] = None
    logo_url: Optional[str] = None
    is_verified: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------
class TeamCreate(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: str = Field(max_length=255)
    country: Optional[str] = Field(default=None, max_length=100)
    logo_url: Optional[str] = None


class TeamRead(BaseModel):
    id: int
    name: str
    email: str
    join_code: str
    country: Optional[str] = None
    logo_url: Optional[str] = None
    is_verified: bool
    created_at: datetime

    class Config:
        from_attributes = True

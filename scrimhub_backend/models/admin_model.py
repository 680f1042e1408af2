# admin_model.py
# Admin accounts and their login sessions.

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


class Admin(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    password_hash: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class AdminSession(SQLModel, table=True):
    """Opaque bearer token issued on login."""
    id: Optional[int] = Field(default=None, primary_key=True)
    admin_id: int = Field(foreign_key="admin.id", index=True)
    token: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class AdminRegister(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(min_length=6, max_length=72)


class AdminLogin(BaseModel):
    email: str
    password: str

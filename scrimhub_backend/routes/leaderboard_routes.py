from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from scrimhub_backend.core.database import get_db
from scrimhub_backend.services.leaderboard import get_team_leaderboard, get_player_leaderboard

router = APIRouter()


@router.get("/teams")
async def team_leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="Only return the top N teams"),
    db: AsyncSession = Depends(get_db),
):
    return await get_team_leaderboard(db, limit=limit)


@router.get("/players")
async def player_leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="Only return the top N players"),
    db: AsyncSession = Depends(get_db),
):
    return await get_player_leaderboard(db, limit=limit)

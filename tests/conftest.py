"""Shared fixtures: throwaway databases and a small seeded scrim."""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel, Session, create_engine

from scrimhub_backend import models  # noqa: F401  (registers every table)
from scrimhub_backend.models.player_model import Player
from scrimhub_backend.models.team_model import Team
from scrimhub_backend.services import scrims as scrim_service
from scrimhub_backend.services import storage


@pytest.fixture
def engine():
    """In-memory SQLite shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


def make_team(session, name, join_code):
    team = Team(name=name, email=f"{name.lower().replace(' ', '')}@example.com", join_code=join_code)
    session.add(team)
    session.commit()
    session.refresh(team)
    return team


def make_player(session, username, team_id=None):
    player = Player(username=username, email=f"{username}@example.com", team_id=team_id)
    session.add(player)
    session.commit()
    session.refresh(player)
    return player


def seed_scrim(session):
    """
    One scrim with two matches and two rostered teams:
    Team Alpha (a1, a2, a3) and Team Bravo (b1, b2).
    """
    alpha = make_team(session, "Team Alpha", "ALPHA1")
    bravo = make_team(session, "Team Bravo", "BRAVO1")

    a_players = [make_player(session, f"alpha_{i}", alpha.id) for i in range(1, 4)]
    b_players = [make_player(session, f"bravo_{i}", bravo.id) for i in range(1, 3)]

    scrim = scrim_service.create_scrim(session, name="Evening Scrim", match_count=2)
    scrim_service.add_team_to_scrim(session, scrim.id, alpha.id)
    scrim_service.add_team_to_scrim(session, scrim.id, bravo.id)
    scrim_service.set_team_roster(session, scrim.id, alpha.id, [p.id for p in a_players])
    scrim_service.set_team_roster(session, scrim.id, bravo.id, [p.id for p in b_players])

    matches = storage.get_matches_by_scrim_id(session, scrim.id)

    return {
        "scrim_id": scrim.id,
        "match_ids": [m.id for m in matches],
        "alpha_id": alpha.id,
        "bravo_id": bravo.id,
        "alpha_players": [p.id for p in a_players],
        "bravo_players": [p.id for p in b_players],
    }


@pytest.fixture
def seeded(session):
    return seed_scrim(session)


# -------------------------------
# API fixtures
# -------------------------------
@pytest.fixture
def api_engines(tmp_path):
    """Sync + async engines pointed at the same temporary SQLite file."""
    db_path = tmp_path / "scrimhub_test.db"
    sync_engine = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(sync_engine)

    # Each TestClient request runs on a fresh event loop, so never pool async connections
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)

    yield sync_engine, async_engine
    sync_engine.dispose()


@pytest.fixture
def client(api_engines):
    from fastapi.testclient import TestClient

    from scrimhub_backend.core.database import get_session, get_db
    from scrimhub_backend.main import app

    sync_engine, async_engine = api_engines
    async_session_maker = sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)

    def override_get_session():
        with Session(sync_engine) as session:
            yield session

    async def override_get_db():
        async with async_session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_db] = override_get_db

    # No context manager: startup (init_db on the real database file) is skipped
    yield TestClient(app)

    app.dependency_overrides.clear()

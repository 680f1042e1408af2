from sqlmodel import SQLModel, Session
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy import create_engine as create_sync_engine

from scrimhub_backend.core.config import DATABASE_PATH, DEBUG

# --- Database URLs ---
DATABASE_URL = f"sqlite+aiosqlite:///{DATABASE_PATH}"    # Async engine (startup, leaderboards)
SYNC_DATABASE_URL = f"sqlite:///{DATABASE_PATH}"         # Sync engine (writes)

# --- Engines ---
engine = create_async_engine(DATABASE_URL, echo=DEBUG, future=True)
sync_engine = create_sync_engine(
    SYNC_DATABASE_URL,
    echo=DEBUG,
    future=True,
    connect_args={"check_same_thread": False},
)

# --- Async session maker ---
async_session_maker = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# --- Async DB session (used in read-only routes) ---
async def get_db():
    async with async_session_maker() as session:
        yield session


# --- Initialize DB tables ---
async def init_db():
    """Create tables asynchronously if they don't exist."""
    # Register every table on SQLModel.metadata before create_all
    from scrimhub_backend import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


# --- Sync session (used in routes that write) ---
def get_session():
    with Session(sync_engine) as session:
        yield session

# db.py
from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from config import settings
from db_base import Base


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Async engine for the fleet database.

    Server databases get pre-ping so the console survives idle disconnects;
    SQLite (tests, local demos) keeps the default pool.
    """
    kwargs = {"echo": echo}
    if make_url(url).get_backend_name() != "sqlite":
        kwargs["pool_pre_ping"] = True
    return create_async_engine(url, **kwargs)


engine = build_engine(settings.database_url, echo=settings.DEBUG)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


async def init_db() -> None:
    """
    Create the assets table from ORM metadata if it is missing.

    Used by the seed script and AUTO_CREATE_TABLES; deployments run
    `alembic upgrade head` instead.
    """
    import db_models  # noqa: F401  (registers Asset on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    async with AsyncSessionLocal() as session:
        yield session

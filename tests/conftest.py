import os
import tempfile
from pathlib import Path

import pytest

# Settings are read at import time; pick the test profile before the app loads.
os.environ.setdefault("MODE", "test")

from sqlalchemy import create_engine, delete
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # noqa: F401  (ensure models are imported)
from db_base import Base
from db_models.asset import Asset
from console.api_client import AssetApiClient

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"fleet_test_{os.getpid()}.db"

# Point TEST_DATABASE_URL at a dedicated Postgres database to run against asyncpg
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{TEST_DB_PATH}"


def get_sync_url(url: str) -> str:
    if url.startswith("postgresql+asyncpg"):
        return url.replace("postgresql+asyncpg", "postgresql+psycopg2")
    if url.startswith("sqlite+aiosqlite"):
        return url.replace("sqlite+aiosqlite", "sqlite")
    return url


sync_url = get_sync_url(TEST_DATABASE_URL)

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    future=True,
    echo=False,
    poolclass=NullPool  # Disable connection pooling for tests
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)

sync_engine = create_engine(sync_url, poolclass=NullPool)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Create/drop tables for tests (Destructive - use a dedicated test DB)
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture(autouse=True)
def clean_assets(prepare_db):
    """Every test starts with an empty assets table."""
    with sync_engine.begin() as conn:
        conn.execute(delete(Asset))
    yield


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session
        await session.rollback()


@pytest.fixture
def session_transport():
    """Build an in-process transport whose requests get sessions of `session_class`."""
    def build(session_class=AsyncSession):
        maker = async_sessionmaker(
            bind=engine,
            class_=session_class,
            expire_on_commit=False,
            autoflush=False,
        )

        async def override_get_session():
            async with maker() as session:
                yield session

        fastapi_app.dependency_overrides[project_db.get_session] = override_get_session
        return ASGITransport(app=fastapi_app)

    yield build

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def app_transport(session_transport):
    # Override the get_session dependency to create a fresh session for each request
    return session_transport()


@pytest.fixture
async def async_client(app_transport):
    async with AsyncClient(transport=app_transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def api_client(app_transport):
    """Console API client wired to the app in-process."""
    return AssetApiClient(base_url="http://testserver", transport=app_transport)


@pytest.fixture
def truck_payload():
    return {"code": "85", "name": "F-550 Truck", "assetType": "Truck"}

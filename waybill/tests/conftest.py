"""
Centralized Test Configuration.
"""

import time

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from waybill.app.main import app
from waybill.app.db.session import get_db, Base
from waybill.app.core.jwt import create_access_token
import waybill.app.core.redis_client as redis_client_module

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


# Mock Redis for reliability in CI/CD
class MockRedis:
    def __init__(self):
        self.store = {}
        self.expiry = {}
        self._closed = False

    def _check(self):
        if self._closed:
            raise ConnectionError("redis connection closed")

    async def ping(self):
        if self._closed:
            return False
        return True

    async def get(self, key):
        self._check()
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self._check()
        self.store[key] = value
        if ex:
            self.expiry[key] = time.time() + ex
        return True

    async def incr(self, key):
        self._check()
        self.store[key] = int(self.store.get(key, 0)) + 1
        return self.store[key]

    async def expire(self, key, seconds):
        self._check()
        if key not in self.store:
            return False
        self.expiry[key] = time.time() + seconds
        return True

    async def delete(self, key):
        self._check()
        if key in self.store:
            del self.store[key]
            self.expiry.pop(key, None)
            return 1
        return 0

    async def flushdb(self):
        self.store = {}
        self.expiry = {}

    async def aclose(self):
        self._closed = True
        self.store = {}


# Redis Fixture (Session Scope)
@pytest.fixture(scope="session")
def redis_client_session():
    return MockRedis()


@pytest.fixture(scope="session", autouse=True)
def apply_overrides(redis_client_session):
    """Apply overrides once for the session.
    Global override is safer here than per-test override to avoid app state flux.
    """

    # Patch the global redis client used by Middleware
    original_client = redis_client_module.redis_client
    redis_client_module.redis_client = redis_client_session

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield

    # Restore and clear
    app.dependency_overrides = {}
    redis_client_module.redis_client = original_client


@pytest.fixture(autouse=True)
async def setup_database(redis_client_session):
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await redis_client_session.flushdb()

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Shared session for fixture data creation
@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


def auth_headers(owner_id) -> dict:
    """Bearer header for a token whose user_id claim is `owner_id`."""
    token = create_access_token(data={"sub": f"owner-{owner_id}", "user_id": owner_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_headers():
    return auth_headers("owner-a")


@pytest.fixture
def other_owner_headers():
    return auth_headers("owner-b")


@pytest.fixture
def make_headers():
    return auth_headers

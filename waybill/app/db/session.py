"""
Database engine and session factory.

PostgreSQL (asyncpg) in deployments; any SQLAlchemy async URL works, which
lets local runs point `DATABASE_URL` at `sqlite+aiosqlite://`.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from waybill.app.core.config import settings


def engine_options(database_url: str) -> dict:
    """Pool sizing only applies to server databases."""
    options = {"echo": settings.db_echo}
    if make_url(database_url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def init_models(bind=None):
    """Create every table registered on Base."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """
    FastAPI dependency yielding one session per request.

    Repositories commit their own work; anything left open when the request
    fails is rolled back here.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

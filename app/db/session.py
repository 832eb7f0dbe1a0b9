from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.models import Base

engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, pool_pre_ping=True)

# Objects stay readable after commit; every request gets its own session.
SessionFactory = async_sessionmaker(engine, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request."""
    async with SessionFactory() as session:
        yield session


async def init_models(bind: AsyncEngine = engine) -> None:
    """Creates any missing tables (development and test convenience)."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

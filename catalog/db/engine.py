from typing import Optional
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from ..config import settings
from .tables import metadata

_engine: Optional[AsyncEngine] = None


def _async_url(url: str) -> str:
    """
    Point plain driver URLs at their asyncio dialects.
    """
    if url.startswith('postgresql://'):
        return url.replace('postgresql://', 'postgresql+asyncpg://', 1)
    if url.startswith('sqlite://'):
        return url.replace('sqlite://', 'sqlite+aiosqlite://', 1)
    return url


def make_engine(url: str) -> AsyncEngine:
    return create_async_engine(_async_url(url), pool_pre_ping=True)


def get_engine() -> AsyncEngine:
    """
    Return the process-wide engine, creating it from settings on first use.
    """
    global _engine
    if _engine is None:
        _engine = make_engine(settings.DATABASE_URL)
        logger.info("Catalog engine created for {}",
                    _engine.url.render_as_string(hide_password=True))
    return _engine


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None

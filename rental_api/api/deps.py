from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from rental_api.config import get_settings
from rental_api.infrastructure.db.engine import build_engine, build_sessionmaker


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    settings = get_settings()
    if not settings.database_url:
        # Fallback for local runs with USE_IN_MEMORY=false and no DATABASE_URL
        settings = settings.model_copy(update={"database_url": "sqlite+aiosqlite:///./rental.db"})
    return build_engine(settings)


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(get_engine())


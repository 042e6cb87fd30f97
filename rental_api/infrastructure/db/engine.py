from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from rental_api.config import Settings


def _begin_immediate(engine: AsyncEngine) -> None:
    """
    SQLite ignores FOR UPDATE and the driver defers BEGIN until the first write.

    Emitting BEGIN IMMEDIATE ourselves takes the database write lock when the
    transaction starts, so concurrent create-booking transactions run one after
    the other and each one reads the bookings committed by the previous one.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(settings: Settings) -> AsyncEngine:
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is required for SQL mode")
    kwargs = {"echo": settings.sql_echo, "pool_pre_ping": True}
    is_sqlite = settings.database_url.startswith("sqlite")
    if not is_sqlite:
        kwargs["pool_recycle"] = 3600
        # Reads after SELECT ... FOR UPDATE must not reuse an older snapshot
        kwargs["isolation_level"] = "READ COMMITTED"
    engine = create_async_engine(settings.database_url, **kwargs)
    if is_sqlite:
        _begin_immediate(engine)
    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

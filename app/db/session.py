from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Settings
from app.core.logger import logger
from app.db.models import SQLModel


def _configure_sqlite(engine: AsyncEngine) -> None:
    """
    SQLite has no row locks and no cascades unless asked for.

    Every transaction is opened with BEGIN IMMEDIATE so the database-wide
    write lock serialises competing bookings the way SELECT ... FOR UPDATE
    does on PostgreSQL.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        # Stop the driver from emitting its own BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """
    Owns the engine (connection pool) and the session factory.

    Built once at startup, handed to the app and closed at shutdown.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
    ):
        engine_config = {"echo": echo, "future": True, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            engine_config["connect_args"] = {"timeout": 30}
        else:
            engine_config.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_config)
        if self.engine.dialect.name == "sqlite":
            _configure_sqlite(self.engine)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables ensured")

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection pool closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        # Closing the session rolls back anything uncommitted and returns the connection
        async with self.session_factory() as session:
            yield session

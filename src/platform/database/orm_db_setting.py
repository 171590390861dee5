"""
SQLAlchemy async engine and session management

Database owns one AsyncEngine and its session maker, created lazily so the
engine binds to the event loop that first uses it.

Backends:
- PostgreSQL (asyncpg): production default, READ COMMITTED with row locks
  and version-checked writes on schedules
- SQLite (aiosqlite): local development and tests; every transaction starts
  with BEGIN IMMEDIATE so writers are serialized per database file
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


def _install_sqlite_immediate_transactions(engine: AsyncEngine) -> None:
    # pysqlite's implicit BEGIN is deferred; take the write lock up front instead
    @event.listens_for(engine.sync_engine, 'connect')
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, 'begin')
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql('BEGIN IMMEDIATE')


def _register_models() -> None:
    # Importing the package registers every mapped model on Base.metadata
    import src.service.train_booking.driven_adapter.model  # noqa: F401


class Database:
    """
    Database class for the dependency injection container

    One instance per process (Singleton provider). Tests build their own
    instance against a temporary SQLite file and override the provider.
    """

    def __init__(self, *, url: Optional[str] = None, echo: bool = False) -> None:
        self._url = url or settings.DATABASE_URL_ASYNC
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_sqlite(self) -> bool:
        return self._url.startswith('sqlite')

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    def _create_engine(self) -> AsyncEngine:
        if self.is_sqlite:
            Logger.base.info(f'🔗 [DB] Creating SQLite engine: {self._url}')
            engine = create_async_engine(
                self._url,
                echo=self._echo,
                connect_args={'timeout': settings.SQLITE_BUSY_TIMEOUT},
            )
            _install_sqlite_immediate_transactions(engine)
            return engine

        Logger.base.info('🔗 [DB] Creating PostgreSQL engine')
        return create_async_engine(
            self._url,
            echo=self._echo,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Automatically handles rollback on exception
        """
        async with self.session_maker() as session:
            yield session

    async def create_tables(self) -> None:
        """Create database tables if they don't exist"""
        _register_models()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️  [DB] Tables ensured')

    async def drop_tables(self) -> None:
        _register_models()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            Logger.base.info('🔌 [DB] Engine disposed')
        self._engine = None
        self._session_maker = None

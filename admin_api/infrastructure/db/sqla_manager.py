import admin_api.infrastructure.exceptions as exc
import admin_api.infrastructure.interfaces as mgrs
import admin_api.infrastructure.models  # noqa: F401  registers tables in SQLModel.metadata

import typing as t
import sqlmodel as sqlm

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


import asyncio
import contextlib
import logging

__all__ = ['SQLAlchemySessionManager']

logger = logging.getLogger('admin_api.storage')



class SQLAlchemySessionManager(mgrs.SessionManagerInterface[AsyncConnection, AsyncSession]):
    """Hands out sessions and connections bound to one async engine, rolled back on error and always closed.
    The engine's pool is the only shared resource: every session holds one connection until it is closed,
    so concurrent operations never share a transaction.
    """

    def __init__(self, host: str, engine_kwargs: dict[str,t.Any] | None = None):
        self._engine: AsyncEngine | None = create_async_engine(host, **(engine_kwargs or {}))
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = async_sessionmaker(
            bind=self._engine, autoflush=False, expire_on_commit=False)

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise exc.StorageNotInitialized("[DB Manager] engine is disposed, the manager can't be used anymore")
        return self._engine

    @property
    def engine(self) -> AsyncEngine:
        return self._require_engine()

    async def close(self) -> None:
        engine = self._require_engine()
        self._engine = None
        self._sessionmaker = None
        await engine.dispose()

    @contextlib.asynccontextmanager
    async def connect(self) -> t.AsyncIterator[AsyncConnection]:
        '''A connection inside a transaction that is committed on a clean exit'''
        async with self._require_engine().begin() as connection:
            yield connection

    @contextlib.asynccontextmanager
    async def session(self, **overrides) -> t.AsyncIterator[AsyncSession]:
        '''`overrides` are passed to the sessionmaker, e.g. autoflush=True for a single session'''
        self._require_engine()
        session = self._sessionmaker(**overrides)
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close() #also releases the connection after a cancellation


    async def wait_for_startup(self, attempts:int = 5, interval_sec: int = 5):
        """Pings the database with SELECT 1 until it answers, each attempt on a fresh connection"""
        engine = self._require_engine()
        for attempt in range(1, attempts + 1):
            try:
                async with engine.connect() as conn:
                    await conn.execute(sqlm.text("SELECT 1"))
            except Exception as e:
                logger.debug(f"[WAIT FOR DB] {e.__class__.__name__}: {e}")
                logger.info(f"[WAIT FOR DB] Database is not ready yet ({attempt}/{attempts})")
                if attempt < attempts:
                    await asyncio.sleep(interval_sec)
            else:
                logger.info("[WAIT FOR DB] Database is up and running!")
                return
        raise exc.StorageBootError(f"Database did not answer after {attempts} attempts, {attempts * interval_sec}sec")

    async def initialize_data_structures(self):
        '''Creates missing tables. Deployments run migrations instead'''
        logger.info('[INIT DB] Creating tables...')
        async with self.connect() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.create_all)

    async def flush_data(self):
        logger.warning('[DB] Dropping all tables')
        async with self.connect() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.drop_all)

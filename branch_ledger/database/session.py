"""Async engine and session factory for the record store."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from branch_ledger.config import Settings, get_settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the engine behind the ledger tables."""

    def __init__(self, settings: Optional[Settings] = None, database_url: Optional[str] = None) -> None:
        settings = settings or get_settings()
        url = database_url or settings.database_url
        engine_options = {"echo": settings.debug}
        if not url.startswith("sqlite"):
            engine_options["pool_pre_ping"] = True
        self._engine = create_async_engine(url, **engine_options)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    async def ping(self) -> bool:
        """True when a trivial query round-trips to the database."""

        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()

from __future__ import annotations

from datetime import date
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from branch_ledger.api.errors import register_exception_handlers
from branch_ledger.api.router import api_router
from branch_ledger.config import get_settings
from branch_ledger.database.base import Base
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.store.record_store import RecordStore

TODAY = date(2026, 10, 15)


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set deterministic test env and reset cached Settings."""

    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("TIMEZONE", "Asia/Tashkent")
    monkeypatch.setenv("ROLLOVER_ENABLED", "false")
    monkeypatch.setenv("ROLLOVER_DAY", "1")
    monkeypatch.delenv("BRANCHES", raising=False)
    monkeypatch.delenv("DEFAULT_BRANCH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> async_sessionmaker[AsyncSession]:
    """Provide isolated sqlite session factory per test."""

    db_path = tmp_path / "test.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> RecordStore:
    return RecordStore(session_factory)


@pytest.fixture
def repository(store: RecordStore) -> LedgerRepository:
    """Repository pinned to a fixed calendar day."""

    return LedgerRepository(store=store, settings=get_settings(), clock=lambda: TODAY)


@pytest.fixture
def api_app(repository: LedgerRepository) -> FastAPI:
    """Build API app around the test repository."""

    app = FastAPI()
    app.include_router(api_router, prefix="/api/v1")
    register_exception_handlers(app)
    app.state.repository = repository
    return app


@pytest_asyncio.fixture
async def api_client(api_app: FastAPI) -> httpx.AsyncClient:
    """ASGI client for API integration tests."""

    transport = httpx.ASGITransport(app=api_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

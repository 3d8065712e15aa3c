"""FastAPI dasturining kirish nuqtasi (entrypoint)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from branch_ledger.api.errors import StoreError, register_exception_handlers
from branch_ledger.api.router import api_router
from branch_ledger.config import get_settings
from branch_ledger.database.migrations import run_migrations, should_run_migrations
from branch_ledger.database.session import DatabaseManager
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.services.rollover_service import RolloverScheduler, RolloverService
from branch_ledger.store.record_store import RecordStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Root logger format shared by the API and the rollover task."""

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ma'lumotlar bazasi, kirim/chiqim daftarlari va oylik o'tkazish (rollover)
    uchun ishga tushish va to'xtash (startup/shutdown) jarayonlarini boshqarish.
    """

    settings = get_settings()
    if should_run_migrations(settings):
        await run_migrations(settings=settings)

    db_manager = DatabaseManager(settings)
    repository = LedgerRepository(store=RecordStore(db_manager.session_factory), settings=settings)
    try:
        await repository.load()
    except StoreError:
        logger.warning("Starting with empty ledgers; initial load failed")
    app.state.db_manager = db_manager
    app.state.repository = repository

    scheduler = RolloverScheduler(RolloverService(repository, settings), settings)
    scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()
        await db_manager.dispose()


def create_app() -> FastAPI:
    """Build the API application with routers and error handlers attached."""

    settings = get_settings()
    configure_logging(settings.log_level)
    application = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    application.include_router(api_router, prefix=settings.api_v1_prefix)
    register_exception_handlers(application)

    @application.get("/health", tags=["system"])
    async def health(request: Request) -> dict[str, str]:
        """Dastur va ma'lumotlar bazasi holatini tekshirish (uptime checks) uchun endpoint."""

        db_manager = getattr(request.app.state, "db_manager", None)
        database = "ok" if db_manager is not None and await db_manager.ping() else "unavailable"
        return {"status": "ok", "database": database}

    return application


app = create_app()

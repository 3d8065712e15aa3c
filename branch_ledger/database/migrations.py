"""Programmatic Alembic upgrades for the ledger schema."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from branch_ledger.config import Settings, get_settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _alembic_config(settings: Settings) -> Config:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return cfg


def should_run_migrations(settings: Optional[Settings] = None) -> bool:
    """Upgrade on startup only when ``RUN_MIGRATIONS_ON_STARTUP`` is set."""

    return (settings or get_settings()).run_migrations_on_startup


async def run_migrations(revision: str = "head", settings: Optional[Settings] = None) -> None:
    """Upgrade the ledger tables to ``revision``."""

    cfg = _alembic_config(settings or get_settings())
    logger.info("Upgrading ledger schema to %s", revision)
    # command.upgrade is blocking
    await asyncio.to_thread(command.upgrade, cfg, revision)

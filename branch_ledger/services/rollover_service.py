"""Monthly payable rollover orchestration and its background scheduler."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import date
from typing import Optional

from branch_ledger.accounting.rollover import is_due, period_key
from branch_ledger.api.errors import StoreError
from branch_ledger.config import Settings
from branch_ledger.schemas.report import RolloverSummary
from branch_ledger.services.ledger_repository import LedgerRepository

logger = logging.getLogger(__name__)


class RolloverService:
    """Roll every payable into the current period at most once."""

    def __init__(self, repository: LedgerRepository, settings: Settings) -> None:
        self._repository = repository
        self._settings = settings

    async def run(self, today: Optional[date] = None) -> RolloverSummary:
        """Apply the rollover to each due payable.

        Records are persisted one by one; a failed record is logged and left
        for the next run, the others stay rolled. Ledgers are reloaded once
        at the end.
        """

        today = today or self._repository.today()
        period = period_key(today)
        rolled: list[int] = []
        skipped: list[int] = []
        failed: list[int] = []

        for record in self._repository.payables:
            if not is_due(record, today, self._settings.rollover_day):
                skipped.append(record.id)
                continue
            try:
                await self._repository.roll_over_payable(record, period)
            except StoreError as exc:
                logger.error("Rollover of payable %s into %s failed: %s", record.id, period, exc.message)
                failed.append(record.id)
                continue
            rolled.append(record.id)

        if rolled or failed:
            try:
                await self._repository.load()
            except StoreError:
                logger.exception("Reload after rollover into %s failed", period)

        if rolled:
            logger.info("Rolled %d payables into %s (%d failed)", len(rolled), period, len(failed))
        return RolloverSummary(period=period, rolled=rolled, skipped=skipped, failed=failed)


class RolloverScheduler:
    """Background task that re-checks the rollover at a fixed interval."""

    def __init__(self, service: RolloverService, settings: Settings) -> None:
        self._service = service
        self._settings = settings
        self._task: Optional[asyncio.Task[None]] = None

    def start(self) -> None:
        """Start the periodic check if enabled and not already running."""

        if not self._settings.rollover_enabled or self._task is not None:
            return
        self._task = asyncio.create_task(self._loop(), name="payable-rollover")

    async def stop(self) -> None:
        """Cancel the periodic check."""

        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def run_once(self, today: Optional[date] = None) -> RolloverSummary:
        return await self._service.run(today)

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception:
                logger.exception("Scheduled rollover check failed")
            await asyncio.sleep(self._settings.rollover_check_interval_seconds)

"""In-memory receivable/payable ledgers kept in sync with the record store."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Generic, Optional, TypeVar
from zoneinfo import ZoneInfo

from branch_ledger.accounting.derivation import derive_payable, derive_receivable
from branch_ledger.accounting.rollover import period_key, roll_over
from branch_ledger.api.errors import RecordNotFoundError, StoreError, StoreUnavailableError
from branch_ledger.config import Settings
from branch_ledger.schemas.payable import PayableInput, PayableRecord, format_payable_date
from branch_ledger.schemas.receivable import ReceivableInput, ReceivableRecord
from branch_ledger.store.record_store import EntityKind, RecordStore
from branch_ledger.validators.business import ensure_not_blank

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LedgerSnapshot:
    """Both ledgers as last loaded from the store, newest first."""

    receivables: tuple[ReceivableRecord, ...] = ()
    payables: tuple[PayableRecord, ...] = ()


@dataclass(frozen=True)
class MutationOutcome(Generic[T]):
    """Result of one mutation: the persisted record and the reloaded state."""

    snapshot: LedgerSnapshot
    record: Optional[T] = None
    found: bool = True


@dataclass
class LedgerRepository:
    """Owns the session's ledgers; every mutation derives, persists, then reloads.

    Mutations are not serialized against each other: the last reload to
    finish determines the in-memory state.
    """

    store: RecordStore
    settings: Settings
    clock: Optional[Callable[[], date]] = None
    _snapshot: LedgerSnapshot = field(default_factory=LedgerSnapshot, init=False)

    def today(self) -> date:
        """Current calendar day in the configured timezone."""

        if self.clock is not None:
            return self.clock()
        return datetime.now(ZoneInfo(self.settings.timezone)).date()

    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    @property
    def receivables(self) -> tuple[ReceivableRecord, ...]:
        return self._snapshot.receivables

    @property
    def payables(self) -> tuple[PayableRecord, ...]:
        return self._snapshot.payables

    async def load(self) -> LedgerSnapshot:
        """Replace both ledgers wholesale; keep the previous state if either fetch fails."""

        receivables, payables = await asyncio.gather(
            self.store.fetch_all(EntityKind.RECEIVABLE),
            self.store.fetch_all(EntityKind.PAYABLE),
            return_exceptions=True,
        )
        for result in (receivables, payables):
            if isinstance(result, StoreError):
                logger.warning("Ledger reload failed, keeping last loaded state: %s", result.message)
                raise StoreUnavailableError("Ledgers could not be loaded") from result
            if isinstance(result, BaseException):
                raise result

        self._snapshot = LedgerSnapshot(receivables=tuple(receivables), payables=tuple(payables))
        return self._snapshot

    async def add_receivable(self, payload: ReceivableInput) -> MutationOutcome[ReceivableRecord]:
        """Create a receivable; client name and tax id are mandatory."""

        ensure_not_blank(payload.client_name, "client_name")
        ensure_not_blank(payload.tax_id, "tax_id")

        draft = derive_receivable(payload, self.settings.resolved_default_branch())
        record = await self.store.insert(EntityKind.RECEIVABLE, draft)
        logger.info("Receivable %s added for branch %s", record.id, record.branch)
        return MutationOutcome(snapshot=await self.load(), record=record)

    async def update_receivable(self, record_id: int, payload: ReceivableInput) -> MutationOutcome[ReceivableRecord]:
        """Overwrite a receivable, recomputing derived fields from the submitted inputs."""

        draft = derive_receivable(payload, self.settings.resolved_default_branch())
        record = await self.store.update(EntityKind.RECEIVABLE, record_id, draft)
        return MutationOutcome(snapshot=await self.load(), record=record)

    async def delete_receivable(self, record_id: int) -> MutationOutcome[ReceivableRecord]:
        """Remove a receivable; an unknown id is reported, not raised."""

        return await self._delete(EntityKind.RECEIVABLE, record_id)

    async def add_payable(self, payload: PayableInput) -> MutationOutcome[PayableRecord]:
        """Create a payable; payee name and category are mandatory.

        New payables count as already rolled into the current period.
        """

        ensure_not_blank(payload.payee_name, "payee_name")
        ensure_not_blank(payload.category, "category")

        today = self.today()
        draft = derive_payable(
            payload,
            default_branch=self.settings.resolved_default_branch(),
            default_date=format_payable_date(today),
            rolled_period=period_key(today),
        )
        record = await self.store.insert(EntityKind.PAYABLE, draft)
        logger.info("Payable %s added for branch %s", record.id, record.branch)
        return MutationOutcome(snapshot=await self.load(), record=record)

    async def update_payable(self, record_id: int, payload: PayableInput) -> MutationOutcome[PayableRecord]:
        """Overwrite a payable, recomputing derived fields from the submitted inputs."""

        draft = derive_payable(
            payload,
            default_branch=self.settings.resolved_default_branch(),
            default_date=format_payable_date(self.today()),
        )
        record = await self.store.update(EntityKind.PAYABLE, record_id, draft)
        return MutationOutcome(snapshot=await self.load(), record=record)

    async def roll_over_payable(self, record: PayableRecord, period: str) -> PayableRecord:
        """Persist the rollover of one payable into ``period`` without reloading."""

        return await self.store.update(EntityKind.PAYABLE, record.id, roll_over(record, period))

    async def delete_payable(self, record_id: int) -> MutationOutcome[PayableRecord]:
        """Remove a payable; an unknown id is reported, not raised."""

        return await self._delete(EntityKind.PAYABLE, record_id)

    async def _delete(self, kind: EntityKind, record_id: int) -> MutationOutcome:
        try:
            await self.store.delete(kind, record_id)
        except RecordNotFoundError:
            logger.info("Delete skipped: %s record %s does not exist", kind.value, record_id)
            return MutationOutcome(snapshot=self._snapshot, found=False)
        return MutationOutcome(snapshot=await self.load())

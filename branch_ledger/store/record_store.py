"""Async record store over the ledger tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Union

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from branch_ledger.api.errors import RecordNotFoundError, StoreError
from branch_ledger.database.base import Base
from branch_ledger.database.models import Payable, Receivable
from branch_ledger.schemas.payable import PayableDraft, PayableRecord
from branch_ledger.schemas.receivable import ReceivableDraft, ReceivableRecord
from branch_ledger.store.mapping import payable_columns, payable_from_row, receivable_columns, receivable_from_row

logger = logging.getLogger(__name__)

Draft = Union[ReceivableDraft, PayableDraft]
Record = Union[ReceivableRecord, PayableRecord]


class EntityKind(str, Enum):
    """Ledger kinds held by the store."""

    RECEIVABLE = "receivable"
    PAYABLE = "payable"


@dataclass(frozen=True)
class _Binding:
    model: type[Base]
    to_columns: Callable[[Any], dict[str, Any]]
    from_row: Callable[[Any], Any]


_BINDINGS: dict[EntityKind, _Binding] = {
    EntityKind.RECEIVABLE: _Binding(Receivable, receivable_columns, receivable_from_row),
    EntityKind.PAYABLE: _Binding(Payable, payable_columns, payable_from_row),
}


class RecordStore:
    """CRUD per entity kind; every database failure surfaces as ``StoreError``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch_all(self, kind: EntityKind) -> list[Record]:
        """Return all records of a kind, newest first."""

        binding = _BINDINGS[kind]
        model = binding.model
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(model).order_by(model.created_at.desc(), model.id.desc()))
                return [binding.from_row(row) for row in result.scalars().all()]
        except SQLAlchemyError as exc:
            logger.error("Fetching %s records failed: %s", kind.value, exc)
            raise StoreError(f"Could not fetch {kind.value} records") from exc

    async def insert(self, kind: EntityKind, draft: Draft) -> Record:
        """Persist a new record and return it with id and timestamps assigned."""

        binding = _BINDINGS[kind]
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    row = binding.model(**binding.to_columns(draft))
                    session.add(row)
                    await session.flush()
                    await session.refresh(row)
                    return binding.from_row(row)
        except SQLAlchemyError as exc:
            logger.error("Inserting %s record failed: %s", kind.value, exc)
            raise StoreError(f"Could not save {kind.value} record") from exc

    async def update(self, kind: EntityKind, record_id: int, draft: Draft) -> Record:
        """Overwrite stored fields of one record (last write wins)."""

        binding = _BINDINGS[kind]
        model = binding.model
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(select(model).where(model.id == record_id).with_for_update())
                    row = result.scalar_one_or_none()
                    if row is None:
                        raise RecordNotFoundError(kind.value, record_id)
                    for column, value in binding.to_columns(draft).items():
                        setattr(row, column, value)
                    if isinstance(row, Receivable):
                        row.last_updated = datetime.now(timezone.utc)
                    await session.flush()
                    await session.refresh(row)
                    return binding.from_row(row)
        except SQLAlchemyError as exc:
            logger.error("Updating %s record %s failed: %s", kind.value, record_id, exc)
            raise StoreError(f"Could not update {kind.value} record") from exc

    async def delete(self, kind: EntityKind, record_id: int) -> None:
        """Remove one record by id."""

        model = _BINDINGS[kind].model
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(delete(model).where(model.id == record_id))
                    if result.rowcount == 0:
                        raise RecordNotFoundError(kind.value, record_id)
        except SQLAlchemyError as exc:
            logger.error("Deleting %s record %s failed: %s", kind.value, record_id, exc)
            raise StoreError(f"Could not delete {kind.value} record") from exc

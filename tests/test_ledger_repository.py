from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from branch_ledger.api.errors import RecordNotFoundError, StoreError, StoreUnavailableError, ValidationError
from branch_ledger.schemas.payable import PayableInput
from branch_ledger.schemas.receivable import PaymentInput, PriorCarryInput, ReceivableInput
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.store.record_store import EntityKind, RecordStore


def _receivable_input(name: str = "Oqtepa Lavash", **overrides: object) -> ReceivableInput:
    values: dict[str, object] = {
        "client_name": name,
        "tax_id": "301234567",
        "branch": "zarkent",
        "prior": PriorCarryInput(months_count=2, amount=Decimal("1000")),
        "current_charge": Decimal("2000"),
        "payment": PaymentInput(cash=Decimal("500")),
    }
    values.update(overrides)
    return ReceivableInput(**values)


@pytest.mark.asyncio
async def test_add_receivable_derives_persists_and_reloads(repository: LedgerRepository, store: RecordStore) -> None:
    outcome = await repository.add_receivable(_receivable_input())

    record = outcome.record
    assert record.id is not None
    assert record.total_owed == Decimal("3000")
    assert record.payment.total == Decimal("500")
    assert record.remaining_balance == Decimal("2500")
    assert record.last_updated is not None

    assert outcome.snapshot.receivables == repository.receivables
    assert len(repository.receivables) == 1
    stored = await store.fetch_all(EntityKind.RECEIVABLE)
    assert stored[0].remaining_balance == Decimal("2500")


@pytest.mark.asyncio
async def test_ledgers_are_newest_first(repository: LedgerRepository) -> None:
    await repository.add_receivable(_receivable_input("Birinchi"))
    await repository.add_receivable(_receivable_input("Ikkinchi"))

    assert [record.client_name for record in repository.receivables] == ["Ikkinchi", "Birinchi"]


@pytest.mark.asyncio
async def test_add_receivable_without_identity_is_rejected(
    repository: LedgerRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    await repository.add_receivable(_receivable_input())
    calls: list[object] = []
    original_insert = repository.store.insert

    async def tracking_insert(kind, draft):  # noqa: ANN001
        calls.append(draft)
        return await original_insert(kind, draft)

    monkeypatch.setattr(repository.store, "insert", tracking_insert)

    with pytest.raises(ValidationError) as exc_info:
        await repository.add_receivable(ReceivableInput(client_name="", tax_id=""))

    assert exc_info.value.field == "client_name"
    assert calls == []
    assert len(repository.receivables) == 1

    with pytest.raises(ValidationError) as exc_info:
        await repository.add_receivable(ReceivableInput(client_name="Oqtepa", tax_id="  "))
    assert exc_info.value.field == "tax_id"


@pytest.mark.asyncio
async def test_add_payable_requires_payee_and_category(repository: LedgerRepository) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await repository.add_payable(PayableInput(payee_name="Ijara"))

    assert exc_info.value.field == "category"
    assert repository.payables == ()


@pytest.mark.asyncio
async def test_add_payable_fills_defaults(repository: LedgerRepository) -> None:
    outcome = await repository.add_payable(
        PayableInput(payee_name="Ijara", category="Arenda", current_charge=Decimal("800"), amount_paid=Decimal("800"))
    )

    record = outcome.record
    assert record.branch == "zarkent"
    assert record.date == "15/10/2026"
    assert record.rolled_period == "2026-10"
    assert record.remaining_debt == Decimal("0")
    assert record.remaining_advance == Decimal("0")


@pytest.mark.asyncio
async def test_update_recomputes_from_submitted_inputs(repository: LedgerRepository) -> None:
    created = (await repository.add_payable(PayableInput(payee_name="Ijara", category="Arenda", current_charge=Decimal("100")))).record

    payload = PayableInput.model_validate(
        {
            "payeeName": "Ijara",
            "category": "Arenda",
            "date": created.date,
            "priorCarry": "50",
            "currentCharge": "100",
            "amountPaid": "200",
            "totalCharged": "1",
            "remainingDebt": "999",
        }
    )
    outcome = await repository.update_payable(created.id, payload)

    assert outcome.record.total_charged == Decimal("150")
    assert outcome.record.remaining_debt == Decimal("0")
    assert outcome.record.remaining_advance == Decimal("50")
    assert outcome.record.rolled_period == "2026-10"
    assert repository.payables[0].remaining_advance == Decimal("50")


@pytest.mark.asyncio
async def test_update_receivable_overwrites_fields(repository: LedgerRepository) -> None:
    created = (await repository.add_receivable(_receivable_input())).record

    outcome = await repository.update_receivable(
        created.id,
        _receivable_input(payment=PaymentInput(cash=Decimal("500"), card=Decimal("3000"))),
    )

    assert outcome.record.payment.total == Decimal("3500")
    assert outcome.record.remaining_balance == Decimal("-500")
    assert repository.receivables[0].remaining_balance == Decimal("-500")


@pytest.mark.asyncio
async def test_update_unknown_id_raises(repository: LedgerRepository) -> None:
    with pytest.raises(RecordNotFoundError):
        await repository.update_receivable(404, _receivable_input())


@pytest.mark.asyncio
async def test_delete_and_missing_delete(repository: LedgerRepository) -> None:
    created = (await repository.add_receivable(_receivable_input())).record

    removed = await repository.delete_receivable(created.id)
    assert removed.found is True
    assert removed.snapshot.receivables == ()

    missing = await repository.delete_receivable(created.id)
    assert missing.found is False

    missing_payable = await repository.delete_payable(12345)
    assert missing_payable.found is False


@pytest.mark.asyncio
async def test_load_failure_keeps_previous_state(repository: LedgerRepository, monkeypatch: pytest.MonkeyPatch) -> None:
    await repository.add_receivable(_receivable_input())

    async def failing_fetch(kind):  # noqa: ANN001
        raise StoreError("network down")

    monkeypatch.setattr(repository.store, "fetch_all", failing_fetch)

    with pytest.raises(StoreUnavailableError):
        await repository.load()
    assert len(repository.receivables) == 1


@pytest.mark.asyncio
async def test_store_error_on_insert_propagates(repository: LedgerRepository, monkeypatch: pytest.MonkeyPatch) -> None:
    async def failing_insert(kind, draft):  # noqa: ANN001
        raise StoreError("constraint violated")

    monkeypatch.setattr(repository.store, "insert", failing_insert)

    with pytest.raises(StoreError):
        await repository.add_receivable(_receivable_input())
    assert repository.receivables == ()


@pytest.mark.asyncio
async def test_failed_load_waits_for_sibling_fetch(repository: LedgerRepository, monkeypatch: pytest.MonkeyPatch) -> None:
    finished: list[EntityKind] = []
    original_fetch = repository.store.fetch_all

    async def partly_failing_fetch(kind: EntityKind):  # noqa: ANN202
        if kind is EntityKind.RECEIVABLE:
            raise StoreError("network down")
        await asyncio.sleep(0.01)
        records = await original_fetch(kind)
        finished.append(kind)
        return records

    monkeypatch.setattr(repository.store, "fetch_all", partly_failing_fetch)

    with pytest.raises(StoreUnavailableError):
        await repository.load()
    assert finished == [EntityKind.PAYABLE]


@pytest.mark.asyncio
async def test_payable_accepts_negative_adjustment(repository: LedgerRepository) -> None:
    outcome = await repository.add_payable(
        PayableInput(payee_name="Qaytarim", category="Arenda", current_charge=Decimal("-200"))
    )

    record = outcome.record
    assert record.total_charged == Decimal("-200")
    assert record.remaining_debt == Decimal("0")
    assert record.remaining_advance == Decimal("200")

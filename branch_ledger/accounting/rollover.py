"""Monthly rollover transition for payables."""

from __future__ import annotations

from datetime import date

from branch_ledger.accounting.derivation import payable_amounts
from branch_ledger.schemas.common import ZERO
from branch_ledger.schemas.payable import PayableDraft, PayableRecord


def period_key(day: date) -> str:
    """Accounting period identifier, e.g. ``2026-10``."""

    return f"{day.year:04d}-{day.month:02d}"


def is_due(record: PayableRecord, today: date, rollover_day: int) -> bool:
    """Whether the record still has to be rolled into the period containing ``today``.

    Periods only move forward: a record already rolled into the same or a
    later period is never due.
    """

    if today.day < rollover_day:
        return False
    return record.rolled_period is None or record.rolled_period < period_key(today)


def roll_over(record: PayableRecord, period: str) -> PayableDraft:
    """Fold the current charge into the opening carry and clear the period's payments.

    Built from the stored record as-is, so a legacy free-text date is carried
    over untouched. With nothing paid yet the whole carried total becomes
    remaining debt.
    """

    prior_carry = record.prior_carry + record.current_charge
    amounts = payable_amounts(prior_carry, ZERO, ZERO)
    return PayableDraft(
        date=record.date,
        payee_name=record.payee_name,
        branch=record.branch,
        category=record.category,
        prior_carry=prior_carry,
        current_charge=ZERO,
        total_charged=amounts.total_charged,
        amount_paid=ZERO,
        remaining_debt=amounts.remaining_debt,
        remaining_advance=amounts.remaining_advance,
        rolled_period=period,
    )

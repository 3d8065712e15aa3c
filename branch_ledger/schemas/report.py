"""Balance report and ledger totals schemas."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from branch_ledger.schemas.common import ZERO, CamelSchema
from branch_ledger.schemas.payable import PayableRecord
from branch_ledger.schemas.receivable import ReceivableRecord


class BalanceTotals(CamelSchema):
    """Summable balance figures shared by report rows and the totals row."""

    prior_carry: Decimal = ZERO
    current_charge: Decimal = ZERO
    total_owed: Decimal = ZERO
    paid_total: Decimal = ZERO
    paid_cash: Decimal = ZERO
    paid_bank_transfer: Decimal = ZERO
    paid_card: Decimal = ZERO
    remaining_balance: Decimal = ZERO
    monthly_expense: Decimal = ZERO
    net_profit: Decimal = ZERO


class BalanceRow(BalanceTotals):
    """Per-branch reconciliation of receivables against payables."""

    branch: str
    branch_label: str


class BalanceReport(CamelSchema):
    """Ordered branch rows plus their field-wise totals."""

    branch_filter: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rows: list[BalanceRow]
    totals: BalanceTotals


class ReceivableTotals(CamelSchema):
    """Column sums over a receivable listing."""

    months_count: int = 0
    prior_amount: Decimal = ZERO
    current_charge: Decimal = ZERO
    total_owed: Decimal = ZERO
    paid_total: Decimal = ZERO
    paid_cash: Decimal = ZERO
    paid_bank_transfer: Decimal = ZERO
    paid_card: Decimal = ZERO
    remaining_balance: Decimal = ZERO


class PayableTotals(CamelSchema):
    """Column sums over a payable listing."""

    prior_carry: Decimal = ZERO
    current_charge: Decimal = ZERO
    total_charged: Decimal = ZERO
    amount_paid: Decimal = ZERO
    remaining_debt: Decimal = ZERO
    remaining_advance: Decimal = ZERO


class ReceivableListResponse(CamelSchema):
    """Filtered receivables with their totals row."""

    total: int
    items: list[ReceivableRecord]
    totals: ReceivableTotals


class PayableListResponse(CamelSchema):
    """Filtered payables with their totals row."""

    total: int
    items: list[PayableRecord]
    totals: PayableTotals


class RolloverSummary(CamelSchema):
    """Outcome of one rollover pass."""

    period: str
    rolled: list[int]
    skipped: list[int]
    failed: list[int]

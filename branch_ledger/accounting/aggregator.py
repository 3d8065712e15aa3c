"""Per-branch balance aggregation over the receivable and payable ledgers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from branch_ledger.config import ALL_BRANCHES, BranchOption
from branch_ledger.schemas.common import ZERO, DateRange
from branch_ledger.schemas.payable import PayableRecord
from branch_ledger.schemas.receivable import ReceivableRecord
from branch_ledger.schemas.report import (
    BalanceReport,
    BalanceRow,
    BalanceTotals,
    PayableTotals,
    ReceivableTotals,
)


@dataclass
class ReceivableAccumulator:
    """Running receivable sums for one branch."""

    prior_carry: Decimal = ZERO
    current_charge: Decimal = ZERO
    total_owed: Decimal = ZERO
    paid_total: Decimal = ZERO
    paid_cash: Decimal = ZERO
    paid_bank_transfer: Decimal = ZERO
    paid_card: Decimal = ZERO
    remaining_balance: Decimal = ZERO

    def add(self, record: ReceivableRecord) -> None:
        self.prior_carry += record.prior.amount
        self.current_charge += record.current_charge
        self.total_owed += record.total_owed
        self.paid_total += record.payment.total
        self.paid_cash += record.payment.cash
        self.paid_bank_transfer += record.payment.bank_transfer
        self.paid_card += record.payment.card
        self.remaining_balance += record.remaining_balance


@dataclass
class PayableAccumulator:
    """Running payable sums for one branch."""

    prior_carry: Decimal = ZERO
    current_charge: Decimal = ZERO
    total_charged: Decimal = ZERO
    amount_paid: Decimal = ZERO
    remaining_debt: Decimal = ZERO
    remaining_advance: Decimal = ZERO

    def add(self, record: PayableRecord) -> None:
        self.prior_carry += record.prior_carry
        self.current_charge += record.current_charge
        self.total_charged += record.total_charged
        self.amount_paid += record.amount_paid
        self.remaining_debt += record.remaining_debt
        self.remaining_advance += record.remaining_advance


def local_day(moment: datetime, tz: tzinfo) -> date:
    """Calendar day of a timestamp in the reporting timezone; naive values are UTC."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).date()


def filter_receivables(
    receivables: Iterable[ReceivableRecord],
    date_range: Optional[DateRange],
    tz: tzinfo,
) -> list[ReceivableRecord]:
    """Keep receivables whose last update falls inside the range."""

    if date_range is None or date_range.is_open:
        return list(receivables)
    return [
        record
        for record in receivables
        if record.last_updated is not None and date_range.contains(local_day(record.last_updated, tz))
    ]


def filter_payables(payables: Iterable[PayableRecord], date_range: Optional[DateRange]) -> list[PayableRecord]:
    """Keep payables whose DD/MM/YYYY date falls inside the range."""

    if date_range is None or date_range.is_open:
        return list(payables)
    kept = []
    for record in payables:
        day = record.parsed_date
        if day is not None and date_range.contains(day):
            kept.append(record)
    return kept


def active_branches(branch_filter: str, branches: Sequence[BranchOption]) -> list[BranchOption]:
    """Resolve the branch filter into the ordered set of branches to report on."""

    if branch_filter == ALL_BRANCHES:
        return list(branches)
    for branch in branches:
        if branch.key == branch_filter:
            return [branch]
    return [BranchOption(key=branch_filter, label=branch_filter)]


def aggregate(
    receivables: Iterable[ReceivableRecord],
    payables: Iterable[PayableRecord],
    branch_filter: str,
    date_range: Optional[DateRange],
    branches: Sequence[BranchOption],
    tz: tzinfo = timezone.utc,
) -> list[BalanceRow]:
    """Group both ledgers by branch and reconcile them into balance rows.

    Every active branch gets zeroed accumulators before either ledger is
    scanned, so a branch present in only one ledger still aggregates. Records
    of branches outside the active set are dropped. Branches with no prior
    carry, no current charge and no monthly expense are omitted. Rows follow
    branch enumeration order.
    """

    active = active_branches(branch_filter, branches)
    incoming = {branch.key: ReceivableAccumulator() for branch in active}
    outgoing = {branch.key: PayableAccumulator() for branch in active}

    for record in filter_receivables(receivables, date_range, tz):
        accumulator = incoming.get(record.branch)
        if accumulator is not None:
            accumulator.add(record)

    for record in filter_payables(payables, date_range):
        accumulator = outgoing.get(record.branch)
        if accumulator is not None:
            accumulator.add(record)

    rows: list[BalanceRow] = []
    for branch in active:
        kirim = incoming[branch.key]
        chiqim = outgoing[branch.key]
        if kirim.prior_carry == 0 and kirim.current_charge == 0 and chiqim.current_charge == 0:
            continue
        rows.append(
            BalanceRow(
                branch=branch.key,
                branch_label=branch.label,
                prior_carry=kirim.prior_carry,
                current_charge=kirim.current_charge,
                total_owed=kirim.total_owed,
                paid_total=kirim.paid_total,
                paid_cash=kirim.paid_cash,
                paid_bank_transfer=kirim.paid_bank_transfer,
                paid_card=kirim.paid_card,
                remaining_balance=kirim.remaining_balance,
                monthly_expense=chiqim.current_charge,
                net_profit=kirim.current_charge - chiqim.current_charge,
            )
        )
    return rows


def report_totals(rows: Iterable[BalanceRow]) -> BalanceTotals:
    """Field-wise sum across report rows."""

    totals = BalanceTotals()
    for row in rows:
        for name in BalanceTotals.model_fields:
            setattr(totals, name, getattr(totals, name) + getattr(row, name))
    return totals


def build_report(
    receivables: Iterable[ReceivableRecord],
    payables: Iterable[PayableRecord],
    branch_filter: str,
    date_range: Optional[DateRange],
    branches: Sequence[BranchOption],
    tz: tzinfo = timezone.utc,
) -> BalanceReport:
    """Aggregate rows and attach the totals row."""

    rows = aggregate(receivables, payables, branch_filter, date_range, branches, tz)
    return BalanceReport(
        branch_filter=branch_filter,
        start_date=date_range.start if date_range else None,
        end_date=date_range.end if date_range else None,
        rows=rows,
        totals=report_totals(rows),
    )


def receivable_totals(records: Iterable[ReceivableRecord]) -> ReceivableTotals:
    """Column sums shown under a receivable listing."""

    totals = ReceivableTotals()
    for record in records:
        totals.months_count += record.prior.months_count
        totals.prior_amount += record.prior.amount
        totals.current_charge += record.current_charge
        totals.total_owed += record.total_owed
        totals.paid_total += record.payment.total
        totals.paid_cash += record.payment.cash
        totals.paid_bank_transfer += record.payment.bank_transfer
        totals.paid_card += record.payment.card
        totals.remaining_balance += record.remaining_balance
    return totals


def payable_totals(records: Iterable[PayableRecord]) -> PayableTotals:
    """Column sums shown under a payable listing."""

    accumulator = PayableAccumulator()
    for record in records:
        accumulator.add(record)
    return PayableTotals(
        prior_carry=accumulator.prior_carry,
        current_charge=accumulator.current_charge,
        total_charged=accumulator.total_charged,
        amount_paid=accumulator.amount_paid,
        remaining_debt=accumulator.remaining_debt,
        remaining_advance=accumulator.remaining_advance,
    )

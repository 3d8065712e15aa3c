"""Balance report, filtered ledger listings and their CSV artifacts."""

from __future__ import annotations

from typing import Iterable, Literal, Optional
from zoneinfo import ZoneInfo

from branch_ledger.accounting.aggregator import (
    build_report,
    filter_payables,
    filter_receivables,
    payable_totals,
    receivable_totals,
)
from branch_ledger.config import ALL_BRANCHES, Settings
from branch_ledger.schemas.common import DateRange
from branch_ledger.schemas.payable import PayableRecord
from branch_ledger.schemas.receivable import ReceivableRecord
from branch_ledger.schemas.report import BalanceReport, PayableListResponse, ReceivableListResponse
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.utils.formatters import plain_number, quoted

PaymentStatus = Literal["all", "paid", "unpaid"]

BALANCE_CSV_HEADERS = [
    "Filial nomi",
    "Oldingi oylardan qoldiq summa",
    "Bir oylik hisoblangan summa",
    "Jami hisoblangan summa",
    "Jami",
    "Naqd",
    "Prechisleniya",
    "Karta",
    "Qoldiq",
    "Jami bir oylik xarajat",
    "Jami yigirma puldan xarajatni ayirmasi sof foyda",
]

RECEIVABLE_CSV_HEADERS = [
    "Korxona nomi",
    "INN",
    "Tel raqami",
    "Ismi",
    "Xizmat turi",
    "Filial nomi",
    "Ishchilar Kesimi",
    "Oylar soni",
    "Summasi",
    "Bir oylik hisoblangan summa",
    "Jami qarzdorlik",
    "Jami",
    "Naqd",
    "Prechisleniya",
    "Karta",
    "Qoldiq",
]

PAYABLE_CSV_HEADERS = [
    "Sana",
    "Nomi",
    "Filial nomi",
    "Chiqim nomi",
    "Avvalgi oylardan qoldiq",
    "Bir oylik hisoblangan summa",
    "Jami hisoblangan summa",
    "To'langan summa",
    "Qoldiq qarzdorlik",
    "Qoldiq avans",
]


class ReportService:
    """Read-side views over the repository's current ledgers."""

    def __init__(self, repository: LedgerRepository, settings: Settings) -> None:
        self._repository = repository
        self._settings = settings
        self._tz = ZoneInfo(settings.timezone)

    def balance_report(self, branch_filter: str = ALL_BRANCHES, date_range: Optional[DateRange] = None) -> BalanceReport:
        """Recompute the per-branch balance report for the given filters."""

        snapshot = self._repository.snapshot()
        return build_report(
            snapshot.receivables,
            snapshot.payables,
            branch_filter,
            date_range,
            self._settings.branches,
            self._tz,
        )

    def list_receivables(
        self,
        *,
        search: Optional[str] = None,
        branch: str = ALL_BRANCHES,
        payment_status: PaymentStatus = "all",
        date_range: Optional[DateRange] = None,
    ) -> ReceivableListResponse:
        """Filter receivables the way the ledger screen does and total them."""

        needle = (search or "").strip().lower()
        items = []
        for record in filter_receivables(self._repository.receivables, date_range, self._tz):
            if needle and not (
                needle in record.client_name.lower()
                or needle in record.tax_id.lower()
                or needle in record.contact_name.lower()
            ):
                continue
            if branch != ALL_BRANCHES and record.branch != branch:
                continue
            if payment_status == "paid" and record.payment.total <= 0:
                continue
            if payment_status == "unpaid" and record.payment.total != 0:
                continue
            items.append(record)
        return ReceivableListResponse(total=len(items), items=items, totals=receivable_totals(items))

    def list_payables(
        self,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
        branch: str = ALL_BRANCHES,
        date_range: Optional[DateRange] = None,
    ) -> PayableListResponse:
        """Filter payables the way the ledger screen does and total them."""

        needle = (search or "").strip().lower()
        category_needle = (category or "").strip().lower()
        items = []
        for record in filter_payables(self._repository.payables, date_range):
            if needle and not (
                needle in record.payee_name.lower()
                or needle in record.category.lower()
                or needle in record.branch.lower()
            ):
                continue
            if category_needle and category_needle not in record.category.lower():
                continue
            if branch != ALL_BRANCHES and record.branch != branch:
                continue
            items.append(record)
        return PayableListResponse(total=len(items), items=items, totals=payable_totals(items))

    def balance_csv(self, report: BalanceReport) -> str:
        """One header line plus one line per report row."""

        lines = [",".join(BALANCE_CSV_HEADERS)]
        for row in report.rows:
            numbers = [
                row.prior_carry,
                row.current_charge,
                row.total_owed,
                row.paid_total,
                row.paid_cash,
                row.paid_bank_transfer,
                row.paid_card,
                row.remaining_balance,
                row.monthly_expense,
                row.net_profit,
            ]
            lines.append(",".join([quoted(row.branch_label), *(plain_number(value) for value in numbers)]))
        return "\n".join(lines)

    def receivables_csv(self, records: Iterable[ReceivableRecord]) -> str:
        lines = [",".join(RECEIVABLE_CSV_HEADERS)]
        for record in records:
            lines.append(
                ",".join(
                    [
                        quoted(record.client_name),
                        record.tax_id,
                        record.phone,
                        quoted(record.contact_name),
                        quoted(record.service_type),
                        quoted(self._settings.branch_label(record.branch)),
                        quoted(record.workforce_segment),
                        plain_number(record.prior.months_count),
                        plain_number(record.prior.amount),
                        plain_number(record.current_charge),
                        plain_number(record.total_owed),
                        plain_number(record.payment.total),
                        plain_number(record.payment.cash),
                        plain_number(record.payment.bank_transfer),
                        plain_number(record.payment.card),
                        plain_number(record.remaining_balance),
                    ]
                )
            )
        return "\n".join(lines)

    def payables_csv(self, records: Iterable[PayableRecord]) -> str:
        lines = [",".join(PAYABLE_CSV_HEADERS)]
        for record in records:
            lines.append(
                ",".join(
                    [
                        record.date,
                        quoted(record.payee_name),
                        quoted(self._settings.branch_label(record.branch)),
                        quoted(record.category),
                        plain_number(record.prior_carry),
                        plain_number(record.current_charge),
                        plain_number(record.total_charged),
                        plain_number(record.amount_paid),
                        plain_number(record.remaining_debt),
                        plain_number(record.remaining_advance),
                    ]
                )
            )
        return "\n".join(lines)

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from itertools import count
from zoneinfo import ZoneInfo

from branch_ledger.accounting.aggregator import aggregate, build_report, payable_totals, receivable_totals
from branch_ledger.accounting.derivation import derive_payable, derive_receivable
from branch_ledger.config import ALL_BRANCHES, BranchOption
from branch_ledger.schemas.common import DateRange
from branch_ledger.schemas.payable import PayableInput, PayableRecord
from branch_ledger.schemas.receivable import PaymentInput, PriorCarryInput, ReceivableInput, ReceivableRecord

BRANCHES = [
    BranchOption(key="zarkent", label="Zarkent Filiali"),
    BranchOption(key="nabrejniy", label="Nabrejniy filiali"),
]
_ids = count(1)


def _receivable(
    branch: str,
    prior: str = "0",
    current: str = "0",
    cash: str = "0",
    bank: str = "0",
    card: str = "0",
    last_updated: datetime = datetime(2026, 10, 10, 9, 0, tzinfo=timezone.utc),
) -> ReceivableRecord:
    draft = derive_receivable(
        ReceivableInput(
            client_name="Mijoz",
            tax_id="300000000",
            branch=branch,
            prior=PriorCarryInput(months_count=1, amount=Decimal(prior)),
            current_charge=Decimal(current),
            payment=PaymentInput(cash=Decimal(cash), bank_transfer=Decimal(bank), card=Decimal(card)),
        ),
        default_branch="zarkent",
    )
    return ReceivableRecord(**draft.model_dump(), id=next(_ids), last_updated=last_updated)


def _payable(branch: str, prior: str = "0", current: str = "0", paid: str = "0", day: str = "10/10/2026") -> PayableRecord:
    draft = derive_payable(
        PayableInput(
            date=day,
            payee_name="Ijara",
            category="Arenda",
            branch=branch,
            prior_carry=Decimal(prior),
            current_charge=Decimal(current),
            amount_paid=Decimal(paid),
        ),
        default_branch="zarkent",
        default_date=day,
    )
    return PayableRecord(**draft.model_dump(), id=next(_ids))


def test_end_to_end_single_branch_row() -> None:
    receivables = [_receivable("zarkent", prior="1000", current="2000", cash="500")]
    payables = [_payable("zarkent", current="800", paid="800")]

    rows = aggregate(receivables, payables, ALL_BRANCHES, None, BRANCHES)

    assert len(rows) == 1
    row = rows[0]
    assert row.branch == "zarkent"
    assert row.branch_label == "Zarkent Filiali"
    assert row.prior_carry == Decimal("1000")
    assert row.current_charge == Decimal("2000")
    assert row.total_owed == Decimal("3000")
    assert row.paid_total == Decimal("500")
    assert row.paid_cash == Decimal("500")
    assert row.remaining_balance == Decimal("2500")
    assert row.monthly_expense == Decimal("800")
    assert row.net_profit == Decimal("1200")


def test_rows_are_field_wise_sums_per_branch() -> None:
    receivables = [
        _receivable("zarkent", prior="100", current="1000", cash="200", card="50"),
        _receivable("zarkent", prior="0", current="500", bank="500"),
        _receivable("nabrejniy", prior="300", current="700", cash="100"),
    ]
    payables = [
        _payable("zarkent", prior="10", current="400", paid="100"),
        _payable("nabrejniy", current="900", paid="1000"),
        _payable("nabrejniy", current="100"),
    ]

    rows = {row.branch: row for row in aggregate(receivables, payables, ALL_BRANCHES, None, BRANCHES)}

    assert set(rows) == {"zarkent", "nabrejniy"}
    zarkent = rows["zarkent"]
    assert zarkent.prior_carry == Decimal("100")
    assert zarkent.current_charge == Decimal("1500")
    assert zarkent.total_owed == Decimal("1600")
    assert zarkent.paid_total == Decimal("750")
    assert zarkent.paid_bank_transfer == Decimal("500")
    assert zarkent.paid_card == Decimal("50")
    assert zarkent.remaining_balance == Decimal("850")
    assert zarkent.monthly_expense == Decimal("400")
    assert zarkent.net_profit == Decimal("1100")

    nabrejniy = rows["nabrejniy"]
    assert nabrejniy.monthly_expense == Decimal("1000")
    assert nabrejniy.net_profit == Decimal("-300")


def test_branch_without_activity_is_omitted() -> None:
    receivables = [_receivable("nabrejniy", current="100")]

    rows = aggregate(receivables, [], ALL_BRANCHES, None, BRANCHES)

    assert [row.branch for row in rows] == ["nabrejniy"]


def test_payments_alone_do_not_keep_a_branch_in_the_report() -> None:
    receivables = [_receivable("zarkent", cash="100")]

    assert aggregate(receivables, [], ALL_BRANCHES, None, BRANCHES) == []


def test_branch_present_only_in_payables_is_reported() -> None:
    rows = aggregate([], [_payable("zarkent", current="250")], ALL_BRANCHES, None, BRANCHES)

    assert len(rows) == 1
    assert rows[0].current_charge == Decimal("0")
    assert rows[0].net_profit == Decimal("-250")


def test_rows_follow_branch_enumeration_order() -> None:
    receivables = [_receivable("nabrejniy", current="5"), _receivable("zarkent", current="999999")]

    rows = aggregate(receivables, [], ALL_BRANCHES, None, BRANCHES)

    assert [row.branch for row in rows] == ["zarkent", "nabrejniy"]


def test_single_branch_filter_and_unknown_branches_dropped() -> None:
    receivables = [
        _receivable("zarkent", current="100"),
        _receivable("nabrejniy", current="200"),
        _receivable("toshkent", current="300"),
    ]

    rows = aggregate(receivables, [], "nabrejniy", None, BRANCHES)
    assert [row.branch for row in rows] == ["nabrejniy"]
    assert rows[0].current_charge == Decimal("200")

    everything = aggregate(receivables, [], ALL_BRANCHES, None, BRANCHES)
    assert sum((row.current_charge for row in everything), Decimal("0")) == Decimal("300")


def test_receivable_start_date_is_inclusive() -> None:
    before = _receivable("zarkent", current="100", last_updated=datetime(2026, 9, 30, 12, 0, tzinfo=timezone.utc))
    on_start = _receivable("zarkent", current="10", last_updated=datetime(2026, 10, 1, 0, 0, tzinfo=timezone.utc))

    rows = aggregate([before, on_start], [], ALL_BRANCHES, DateRange(start=date(2026, 10, 1)), BRANCHES)

    assert rows[0].current_charge == Decimal("10")


def test_receivable_dates_compared_in_reporting_timezone() -> None:
    # 20:00 UTC on 30 September is already 1 October in Tashkent.
    late_evening = _receivable("zarkent", current="10", last_updated=datetime(2026, 9, 30, 20, 0, tzinfo=timezone.utc))
    date_range = DateRange(start=date(2026, 10, 1), end=date(2026, 10, 1))

    assert aggregate([late_evening], [], ALL_BRANCHES, date_range, BRANCHES, ZoneInfo("Asia/Tashkent"))
    assert aggregate([late_evening], [], ALL_BRANCHES, date_range, BRANCHES, timezone.utc) == []


def test_payable_date_range_is_inclusive_on_both_ends() -> None:
    payables = [
        _payable("zarkent", current="1", day="30/09/2026"),
        _payable("zarkent", current="10", day="01/10/2026"),
        _payable("zarkent", current="100", day="31/10/2026"),
        _payable("zarkent", current="1000", day="01/11/2026"),
    ]
    date_range = DateRange(start=date(2026, 10, 1), end=date(2026, 10, 31))

    rows = aggregate([], payables, ALL_BRANCHES, date_range, BRANCHES)

    assert rows[0].monthly_expense == Decimal("110")


def test_report_totals_sum_rows() -> None:
    receivables = [
        _receivable("zarkent", prior="1000", current="2000", cash="500"),
        _receivable("nabrejniy", prior="0", current="300", card="300"),
    ]
    payables = [_payable("zarkent", current="800", paid="800"), _payable("nabrejniy", current="100")]

    report = build_report(receivables, payables, ALL_BRANCHES, None, BRANCHES)

    assert len(report.rows) == 2
    assert report.totals.prior_carry == Decimal("1000")
    assert report.totals.current_charge == Decimal("2300")
    assert report.totals.paid_total == Decimal("800")
    assert report.totals.monthly_expense == Decimal("900")
    assert report.totals.net_profit == Decimal("1400")


def test_ledger_totals() -> None:
    receivables = [_receivable("zarkent", prior="100", current="200", cash="50"), _receivable("nabrejniy", current="10")]
    payables = [_payable("zarkent", current="100", paid="150"), _payable("zarkent", prior="20", current="30")]

    incoming = receivable_totals(receivables)
    outgoing = payable_totals(payables)

    assert incoming.months_count == 2
    assert incoming.total_owed == Decimal("310")
    assert incoming.remaining_balance == Decimal("260")
    assert outgoing.total_charged == Decimal("150")
    assert outgoing.remaining_debt == Decimal("50")
    assert outgoing.remaining_advance == Decimal("50")

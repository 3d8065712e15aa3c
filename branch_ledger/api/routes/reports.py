"""Balance report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from branch_ledger.api.deps import get_date_range, get_report_service, get_repository
from branch_ledger.config import ALL_BRANCHES
from branch_ledger.schemas.common import DateRange
from branch_ledger.schemas.report import BalanceReport
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.services.report_service import ReportService
from branch_ledger.utils.formatters import csv_filename

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/balance", response_model=BalanceReport)
async def balance_report(
    branch: str = Query(default=ALL_BRANCHES),
    date_range: DateRange = Depends(get_date_range),
    service: ReportService = Depends(get_report_service),
) -> BalanceReport:
    """Return per-branch balance rows with a totals row."""

    return service.balance_report(branch, date_range)


@router.get("/balance/export.csv")
async def export_balance_report(
    branch: str = Query(default=ALL_BRANCHES),
    date_range: DateRange = Depends(get_date_range),
    service: ReportService = Depends(get_report_service),
    repository: LedgerRepository = Depends(get_repository),
) -> Response:
    """Download the balance report as CSV."""

    report = service.balance_report(branch, date_range)
    filename = csv_filename("balans_hisoboti", repository.today())
    return Response(
        content=service.balance_csv(report),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

"""Payable (chiqim) endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from branch_ledger.api.deps import get_date_range, get_report_service, get_repository
from branch_ledger.api.errors import NotFoundError
from branch_ledger.config import ALL_BRANCHES
from branch_ledger.schemas.common import DateRange
from branch_ledger.schemas.payable import PayableInput, PayableRecord
from branch_ledger.schemas.report import PayableListResponse
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.services.report_service import ReportService
from branch_ledger.utils.formatters import csv_filename

router = APIRouter(prefix="/payables", tags=["payables"])


@router.get("", response_model=PayableListResponse)
async def list_payables(
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    branch: str = Query(default=ALL_BRANCHES),
    date_range: DateRange = Depends(get_date_range),
    service: ReportService = Depends(get_report_service),
) -> PayableListResponse:
    """List payables with optional filters and their totals."""

    return service.list_payables(search=search, category=category, branch=branch, date_range=date_range)


@router.get("/export.csv")
async def export_payables(
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    branch: str = Query(default=ALL_BRANCHES),
    date_range: DateRange = Depends(get_date_range),
    service: ReportService = Depends(get_report_service),
    repository: LedgerRepository = Depends(get_repository),
) -> Response:
    """Download the filtered payables as CSV."""

    listing = service.list_payables(search=search, category=category, branch=branch, date_range=date_range)
    filename = csv_filename("chiqimlar", repository.today())
    return Response(
        content=service.payables_csv(listing.items),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=PayableRecord)
async def create_payable(
    payload: PayableInput,
    repository: LedgerRepository = Depends(get_repository),
) -> PayableRecord:
    """Create one payable."""

    outcome = await repository.add_payable(payload)
    return outcome.record


@router.put("/{record_id}", response_model=PayableRecord)
async def update_payable(
    record_id: int,
    payload: PayableInput,
    repository: LedgerRepository = Depends(get_repository),
) -> PayableRecord:
    """Overwrite one payable; remaining debt/advance are recomputed server-side."""

    outcome = await repository.update_payable(record_id, payload)
    return outcome.record


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payable(
    record_id: int,
    repository: LedgerRepository = Depends(get_repository),
) -> Response:
    """Delete one payable."""

    outcome = await repository.delete_payable(record_id)
    if not outcome.found:
        raise NotFoundError(f"payable record {record_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

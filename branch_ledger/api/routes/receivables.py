"""Receivable (kirim) endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from branch_ledger.api.deps import get_date_range, get_report_service, get_repository
from branch_ledger.api.errors import NotFoundError
from branch_ledger.config import ALL_BRANCHES
from branch_ledger.schemas.common import DateRange
from branch_ledger.schemas.receivable import ReceivableInput, ReceivableRecord
from branch_ledger.schemas.report import ReceivableListResponse
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.services.report_service import PaymentStatus, ReportService
from branch_ledger.utils.formatters import csv_filename

router = APIRouter(prefix="/receivables", tags=["receivables"])


@router.get("", response_model=ReceivableListResponse)
async def list_receivables(
    search: Optional[str] = Query(default=None),
    branch: str = Query(default=ALL_BRANCHES),
    payment_status: PaymentStatus = Query(default="all", alias="paymentStatus"),
    date_range: DateRange = Depends(get_date_range),
    service: ReportService = Depends(get_report_service),
) -> ReceivableListResponse:
    """List receivables with optional filters and their totals."""

    return service.list_receivables(search=search, branch=branch, payment_status=payment_status, date_range=date_range)


@router.get("/export.csv")
async def export_receivables(
    search: Optional[str] = Query(default=None),
    branch: str = Query(default=ALL_BRANCHES),
    payment_status: PaymentStatus = Query(default="all", alias="paymentStatus"),
    date_range: DateRange = Depends(get_date_range),
    service: ReportService = Depends(get_report_service),
    repository: LedgerRepository = Depends(get_repository),
) -> Response:
    """Download the filtered receivables as CSV."""

    listing = service.list_receivables(search=search, branch=branch, payment_status=payment_status, date_range=date_range)
    filename = csv_filename("jami_hisobot", repository.today())
    return Response(
        content=service.receivables_csv(listing.items),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=ReceivableRecord)
async def create_receivable(
    payload: ReceivableInput,
    repository: LedgerRepository = Depends(get_repository),
) -> ReceivableRecord:
    """Create one receivable."""

    outcome = await repository.add_receivable(payload)
    return outcome.record


@router.put("/{record_id}", response_model=ReceivableRecord)
async def update_receivable(
    record_id: int,
    payload: ReceivableInput,
    repository: LedgerRepository = Depends(get_repository),
) -> ReceivableRecord:
    """Overwrite one receivable; derived amounts are recomputed server-side."""

    outcome = await repository.update_receivable(record_id, payload)
    return outcome.record


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_receivable(
    record_id: int,
    repository: LedgerRepository = Depends(get_repository),
) -> Response:
    """Delete one receivable."""

    outcome = await repository.delete_receivable(record_id)
    if not outcome.found:
        raise NotFoundError(f"receivable record {record_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

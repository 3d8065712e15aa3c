"""Monthly rollover endpoint."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from branch_ledger.api.deps import get_rollover_service
from branch_ledger.schemas.report import RolloverSummary
from branch_ledger.services.rollover_service import RolloverService

router = APIRouter(prefix="/rollover", tags=["rollover"])


@router.post("", response_model=RolloverSummary)
async def run_rollover(
    target_date: Optional[date] = Query(default=None, alias="date"),
    service: RolloverService = Depends(get_rollover_service),
) -> RolloverSummary:
    """Roll due payables into the period of ``date`` (today by default)."""

    return await service.run(target_date)

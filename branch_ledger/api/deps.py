"""Dependency helpers for API layer."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import Depends, Query, Request

from branch_ledger.api.errors import ValidationError
from branch_ledger.config import Settings, get_settings
from branch_ledger.schemas.common import DateRange
from branch_ledger.services.ledger_repository import LedgerRepository
from branch_ledger.services.report_service import ReportService
from branch_ledger.services.rollover_service import RolloverService


def get_repository(request: Request) -> LedgerRepository:
    """Return the application-scoped ledger repository."""

    return request.app.state.repository


def get_report_service(
    repository: LedgerRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> ReportService:
    """Build report service dependency."""

    return ReportService(repository, settings)


def get_rollover_service(
    repository: LedgerRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> RolloverService:
    """Build rollover service dependency."""

    return RolloverService(repository, settings)


def get_date_range(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
) -> DateRange:
    """Parse the inclusive date range shared by listings and reports."""

    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationError("startDate must not be after endDate", field="startDate")
    return DateRange(start=start_date, end=end_date)

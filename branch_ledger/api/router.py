"""Top-level API router aggregation."""

from fastapi import APIRouter

from branch_ledger.api.routes.payables import router as payables_router
from branch_ledger.api.routes.receivables import router as receivables_router
from branch_ledger.api.routes.reports import router as reports_router
from branch_ledger.api.routes.rollover import router as rollover_router

api_router = APIRouter()
api_router.include_router(receivables_router)
api_router.include_router(payables_router)
api_router.include_router(reports_router)
api_router.include_router(rollover_router)

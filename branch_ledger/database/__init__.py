"""Database package exports."""

from branch_ledger.database.base import Base
from branch_ledger.database.models import Payable, Receivable

__all__ = ["Base", "Receivable", "Payable"]

"""Payable (chiqim) schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from branch_ledger.schemas.common import ZERO, CamelSchema, blank_to_zero

PAYABLE_DATE_FORMAT = "%d/%m/%Y"


def parse_payable_date(value: str) -> Optional[date]:
    """Parse the day/month/year text stored on payables; None when malformed."""

    try:
        return datetime.strptime(value.strip(), PAYABLE_DATE_FORMAT).date()
    except (AttributeError, ValueError):
        return None


def format_payable_date(value: date) -> str:
    return value.strftime(PAYABLE_DATE_FORMAT)


class PayableInput(CamelSchema):
    """Partial payable submitted by a client; derived values are never read from it."""

    date: Optional[str] = None
    payee_name: str = Field(default="", max_length=256)
    branch: Optional[str] = Field(default=None, max_length=64)
    category: str = Field(default="", max_length=128)
    prior_carry: Decimal = ZERO
    current_charge: Decimal = ZERO
    amount_paid: Decimal = ZERO

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: object) -> object:
        if isinstance(value, date):
            return format_payable_date(value)
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, str):
            text = value.strip()
            if parse_payable_date(text) is None:
                raise ValueError("date must use DD/MM/YYYY format")
            return text
        return value

    @field_validator("payee_name", "category", mode="before")
    @classmethod
    def normalize_text(cls, value: object) -> object:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("branch", mode="before")
    @classmethod
    def normalize_branch(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("prior_carry", "current_charge", "amount_paid", mode="before")
    @classmethod
    def blank_amounts(cls, value: object) -> object:
        return blank_to_zero(value)


class PayableDraft(CamelSchema):
    """Payable with every derived field computed, ready for persistence."""

    date: str
    payee_name: str
    branch: str
    category: str
    prior_carry: Decimal
    current_charge: Decimal
    total_charged: Decimal
    amount_paid: Decimal
    remaining_debt: Decimal
    remaining_advance: Decimal
    rolled_period: Optional[str] = None


class PayableRecord(PayableDraft):
    """Persisted payable as returned by the record store."""

    id: int
    created_at: Optional[datetime] = None

    @property
    def parsed_date(self) -> Optional[date]:
        return parse_payable_date(self.date)

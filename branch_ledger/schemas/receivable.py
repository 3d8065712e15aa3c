"""Receivable (kirim) schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from branch_ledger.schemas.common import ZERO, CamelSchema, blank_to_zero


class PriorCarryInput(CamelSchema):
    """Months left unpaid before the current period and their amount."""

    months_count: int = Field(default=0, ge=0)
    amount: Decimal = Field(default=ZERO, ge=0)

    @field_validator("months_count", mode="before")
    @classmethod
    def blank_months(cls, value: object) -> object:
        return 0 if value in (None, "") else value

    @field_validator("amount", mode="before")
    @classmethod
    def blank_amount(cls, value: object) -> object:
        return blank_to_zero(value)


class PaymentInput(CamelSchema):
    """Amounts paid by payment method."""

    cash: Decimal = Field(default=ZERO, ge=0)
    bank_transfer: Decimal = Field(default=ZERO, ge=0)
    card: Decimal = Field(default=ZERO, ge=0)

    @field_validator("cash", "bank_transfer", "card", mode="before")
    @classmethod
    def blank_amounts(cls, value: object) -> object:
        return blank_to_zero(value)


class Payment(PaymentInput):
    """Payment breakdown with its derived total."""

    total: Decimal = ZERO


class ReceivableInput(CamelSchema):
    """Partial receivable submitted by a client; derived values are never read from it."""

    client_name: str = Field(default="", max_length=256)
    tax_id: str = Field(default="", max_length=32)
    phone: str = Field(default="", max_length=32)
    contact_name: str = Field(default="", max_length=128)
    service_type: str = Field(default="", max_length=128)
    branch: Optional[str] = Field(default=None, max_length=64)
    workforce_segment: str = Field(default="", max_length=256)
    prior: PriorCarryInput = Field(default_factory=PriorCarryInput)
    current_charge: Decimal = Field(default=ZERO, ge=0)
    payment: PaymentInput = Field(default_factory=PaymentInput)

    @field_validator("client_name", "tax_id", "phone", "contact_name", "service_type", "workforce_segment", mode="before")
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

    @field_validator("current_charge", mode="before")
    @classmethod
    def blank_charge(cls, value: object) -> object:
        return blank_to_zero(value)


class ReceivableDraft(CamelSchema):
    """Receivable with every derived field computed, ready for persistence."""

    client_name: str
    tax_id: str
    phone: str
    contact_name: str
    service_type: str
    branch: str
    workforce_segment: str
    prior: PriorCarryInput
    current_charge: Decimal
    total_owed: Decimal
    payment: Payment
    remaining_balance: Decimal


class ReceivableRecord(ReceivableDraft):
    """Persisted receivable as returned by the record store."""

    id: int
    last_updated: Optional[datetime] = None
    created_at: Optional[datetime] = None

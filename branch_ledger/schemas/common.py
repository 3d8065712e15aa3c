"""Common schema helpers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

ZERO = Decimal("0")


class CamelSchema(BaseModel):
    """Base schema exposing camelCase JSON names over snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class DateRange(BaseModel):
    """Inclusive calendar-date range; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError("start must not be after end")
        return self

    def contains(self, value: date) -> bool:
        """Return True when the day falls inside the range, bounds included."""

        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


def blank_to_zero(value: Any) -> Any:
    """Treat missing or empty numeric form values as zero."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return ZERO
    if isinstance(value, str):
        return value.replace(",", "").strip()
    return value

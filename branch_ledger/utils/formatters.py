from datetime import date
from decimal import Decimal
from typing import Union


def plain_number(amount: Union[int, Decimal]) -> str:
    """Render a number for CSV: no currency, no thousands separators, no trailing zeros."""

    if isinstance(amount, int):
        return str(amount)
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal("1")))
    # 1500.50 -> "1500.5"
    return format(amount.normalize(), "f")


def quoted(text: str) -> str:
    """Double-quote a text CSV field, doubling embedded quotes."""

    return '"' + text.replace('"', '""') + '"'


def csv_filename(prefix: str, day: date) -> str:
    """Download name such as ``balans_hisoboti_2026-10-01.csv``."""

    return f"{prefix}_{day.isoformat()}.csv"

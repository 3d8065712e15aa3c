"""Domain validation helpers."""

from branch_ledger.api.errors import ValidationError


def ensure_not_blank(value: str, field_name: str) -> None:
    """Validate that a mandatory identity field carries text."""

    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)

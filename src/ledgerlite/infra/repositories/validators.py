"""Field checks applied before records reach the store."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from ...errors import ValidationError

# SQLite INTEGER is a signed 64-bit value.
MAX_AMOUNT = 2**63 - 1


def require_choice(field: str, value: Any, choices: Iterable[str]) -> str:
    allowed = tuple(choices)
    if value not in allowed:
        raise ValidationError(f"{field} must be one of {', '.join(allowed)}; got {value!r}")
    return value


def require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value.strip()


def optional_text(field: str, value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string or None")
    return value.strip() or None


def require_amount(value: Any) -> int:
    """Amounts are integral minor units; sign lives in the flow, never here."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"amount must be an integer number of minor units; got {value!r}")
    if value < 0:
        raise ValidationError(f"amount must not be negative; got {value}")
    if value > MAX_AMOUNT:
        raise ValidationError(f"amount exceeds the largest storable value ({MAX_AMOUNT})")
    return value


def require_datetime(field: str, value: Any) -> datetime:
    """Return a naive local datetime; aware values are converted first."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ValidationError(f"{field} must be a date or datetime; got {value!r}")


def reject_unknown(entity: str, changes: Iterable[str], allowed: Iterable[str]) -> None:
    unknown = sorted(set(changes) - set(allowed))
    if unknown:
        raise ValidationError(f"{entity} cannot update field(s): {', '.join(unknown)}")

"""Conversions between stored minor units and display amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..errors import ValidationError

MINOR_UNITS_PER_MAJOR = 100

Numeric = Union[int, float, str, Decimal]


def to_major_units(minor: int) -> float:
    """Convert stored paise into rupees for aggregation and display."""
    return minor / MINOR_UNITS_PER_MAJOR


def to_minor_units(value: Numeric) -> int:
    """Convert a user-entered amount into integral minor units.

    Rounds half away from zero so 0.005 becomes 1 paisa. The sign is kept;
    callers pick the flow and pass the magnitude to the repository.
    """
    try:
        quantity = Decimal(str(value)) * MINOR_UNITS_PER_MAJOR
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Not a numeric amount: {value!r}") from exc
    if not quantity.is_finite():
        raise ValidationError(f"Not a finite amount: {value!r}")
    return int(quantity.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

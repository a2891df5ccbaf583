"""Service module exports."""

from . import analytics, money, seed

__all__ = [
    "analytics",
    "money",
    "seed",
]

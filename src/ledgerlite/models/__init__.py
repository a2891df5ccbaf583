"""SQLModel table exports."""

from .category import Category
from .settings import AppSettings
from .transaction import Transaction

__all__ = [
    "AppSettings",
    "Category",
    "Transaction",
]

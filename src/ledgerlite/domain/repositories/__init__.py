"""Repository protocol definitions for domain layer."""

from .category import CategoryRepository
from .settings import SettingsRepository
from .transaction import TransactionRepository

__all__ = [
    "CategoryRepository",
    "SettingsRepository",
    "TransactionRepository",
]

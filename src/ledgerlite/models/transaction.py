"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Transaction(SQLModel, table=True):
    """A single income, expense or balance adjustment entry."""

    __tablename__: ClassVar[str] = "transactions"

    id: str = Field(primary_key=True, max_length=32)
    flow: str = Field(nullable=False, index=True, max_length=16)
    # Weak reference: no foreign key, deleting a category leaves this dangling.
    category_id: Optional[str] = Field(default=None, index=True, max_length=32)
    amount: int = Field(nullable=False, description="Minor currency units, never negative")
    payment_method: str = Field(nullable=False, index=True, max_length=16)
    reason: Optional[str] = Field(default=None, max_length=255)
    # Naive local wall-clock times; month windows compare against them directly.
    happened_at: datetime = Field(sa_type=DateTime, nullable=False, index=True)
    created_at: datetime = Field(sa_type=DateTime, nullable=False)
    updated_at: datetime = Field(sa_type=DateTime, nullable=False)
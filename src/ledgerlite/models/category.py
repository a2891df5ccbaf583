"""Ledger category definitions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Category(SQLModel, table=True):
    """User-defined tag for transactions, used for spending breakdowns."""

    __tablename__: ClassVar[str] = "categories"

    id: str = Field(primary_key=True, max_length=32)
    name: str = Field(nullable=False, unique=True, index=True, max_length=64)
    color: str = Field(nullable=False, max_length=16)
    emoji: Optional[str] = Field(default=None, max_length=16)
    kind: str = Field(default="expense", nullable=False, index=True, max_length=16)
    created_at: datetime = Field(sa_type=DateTime, nullable=False)
    updated_at: datetime = Field(sa_type=DateTime, nullable=False)

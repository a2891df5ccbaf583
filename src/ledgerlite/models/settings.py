"""Application-level settings stored in the database."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants.categories import DEFAULT_SETTINGS, SETTINGS_ID


class AppSettings(SQLModel, table=True):
    """Singleton row parameterising analytics and new-transaction defaults."""

    __tablename__: ClassVar[str] = "settings"

    id: str = Field(default=SETTINGS_ID, primary_key=True, max_length=32)
    currency_symbol: str = Field(default=DEFAULT_SETTINGS["currency_symbol"], max_length=8)
    default_payment_method: str = Field(
        default=DEFAULT_SETTINGS["default_payment_method"], max_length=16
    )
    month_start_day: int = Field(default=DEFAULT_SETTINGS["month_start_day"])
    accent_color: str = Field(default=DEFAULT_SETTINGS["accent_color"], max_length=16)
    theme: str = Field(default=DEFAULT_SETTINGS["theme"], max_length=16)
    # Passcode fields are stored and returned untouched; nothing enforces them.
    require_passcode: bool = Field(default=DEFAULT_SETTINGS["require_passcode"])
    passcode_hash: Optional[str] = Field(default=None, max_length=255)

"""Settings repository for the application-wide singleton row."""

from __future__ import annotations

from typing import Any

from ...constants.categories import (
    MONTH_START_DAY_MAX,
    MONTH_START_DAY_MIN,
    PAYMENT_METHODS,
    SETTINGS_ID,
    THEMES,
    is_valid_month_start_day,
)
from ...errors import DuplicateKeyError, NotFoundError, ValidationError
from ...logging_config import get_logger
from ...models.settings import AppSettings
from ..store import RecordStore
from .validators import optional_text, reject_unknown, require_choice, require_text

COLLECTION = "settings"
EDITABLE_FIELDS = (
    "currency_symbol",
    "default_payment_method",
    "month_start_day",
    "accent_color",
    "theme",
    "require_passcode",
    "passcode_hash",
)

logger = get_logger(__name__)


class SQLModelSettingsRepository:
    """SQLModel-based settings repository.

    ``update`` is a read-modify-write across two store calls. That is safe
    only under the single-writer assumption the app runs with.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def get(self) -> AppSettings:
        try:
            return self.store.get_by_id(COLLECTION, SETTINGS_ID)  # type: ignore[return-value]
        except NotFoundError:
            pass

        try:
            created = self.store.insert(COLLECTION, AppSettings(id=SETTINGS_ID))
        except DuplicateKeyError:
            # Another writer created the row between our read and insert.
            return self.store.get_by_id(COLLECTION, SETTINGS_ID)  # type: ignore[return-value]
        logger.info("Default settings created")
        return created

    def update(self, **changes: Any) -> AppSettings:
        reject_unknown("Settings", changes, EDITABLE_FIELDS)
        cleaned: dict[str, Any] = {}
        if "currency_symbol" in changes:
            cleaned["currency_symbol"] = require_text("currency_symbol", changes["currency_symbol"])
        if "default_payment_method" in changes:
            cleaned["default_payment_method"] = require_choice(
                "default_payment_method", changes["default_payment_method"], PAYMENT_METHODS
            )
        if "month_start_day" in changes:
            if not is_valid_month_start_day(changes["month_start_day"]):
                raise ValidationError(
                    f"month_start_day must be an integer between "
                    f"{MONTH_START_DAY_MIN} and {MONTH_START_DAY_MAX}"
                )
            cleaned["month_start_day"] = changes["month_start_day"]
        if "accent_color" in changes:
            cleaned["accent_color"] = require_text("accent_color", changes["accent_color"])
        if "theme" in changes:
            cleaned["theme"] = require_choice("theme", changes["theme"], THEMES)
        if "require_passcode" in changes:
            cleaned["require_passcode"] = bool(changes["require_passcode"])
        if "passcode_hash" in changes:
            cleaned["passcode_hash"] = optional_text("passcode_hash", changes["passcode_hash"])

        self.get()
        updated = self.store.update(COLLECTION, SETTINGS_ID, cleaned)
        logger.info("Settings updated", extra={"fields": sorted(cleaned)})
        return updated  # type: ignore[return-value]


__all__ = ["SQLModelSettingsRepository"]

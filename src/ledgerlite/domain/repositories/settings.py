"""Settings repository protocol."""

from __future__ import annotations

from typing import Any, Protocol

from ...models.settings import AppSettings


class SettingsRepository(Protocol):
    """Repository for the settings singleton."""

    def get(self) -> AppSettings:
        """Return the settings row, creating it from defaults if missing."""
        ...

    def update(self, **changes: Any) -> AppSettings:
        """Merge changes into the settings row."""
        ...

"""Opaque record identifiers."""

from __future__ import annotations

import secrets
import time


def generate_id() -> str:
    """Return a new identifier: millisecond clock in base 16 plus 40 random bits.

    The time prefix keeps ids from different moments apart and the random
    suffix separates ids minted within the same millisecond.
    """
    return f"{time.time_ns() // 1_000_000:x}{secrets.token_hex(5)}"

"""Wall-clock helpers."""

from __future__ import annotations

import time


def now_ms() -> int:
    """Current UNIX time in milliseconds (used as action nonce)."""
    return time.time_ns() // 1_000_000

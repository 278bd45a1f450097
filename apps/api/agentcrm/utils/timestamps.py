"""Timestamp helpers.

Records store timestamps as ISO-8601 strings in UTC with millisecond
precision and a trailing ``Z`` (e.g. ``2024-05-01T09:30:00.000Z``).
"""

from __future__ import annotations

import time
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis() -> int:
    """Milliseconds since the epoch (upload filename prefix)."""
    return time.time_ns() // 1_000_000

"""Time-related helpers for walletlabels."""

from __future__ import annotations

import datetime
import time


def utc_now_iso() -> str:
    """Return current UTC time in ISO format without sub-second precision."""
    return datetime.datetime.now(datetime.UTC).isoformat(timespec="seconds")


def epoch_millis() -> int:
    """Return milliseconds elapsed since the Unix epoch."""
    return time.time_ns() // 1_000_000

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from app.core.config import get_settings

_stamp_lock = threading.Lock()
_last_stamp = 0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they were written as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def insertion_stamp() -> int:
    """Nanosecond wall-clock stamp, strictly increasing within the process.

    Orders rows by creation where ``created_at`` (database clock, often
    second resolution) ties.
    """
    global _last_stamp
    with _stamp_lock:
        _last_stamp = max(time.time_ns(), _last_stamp + 1)
        return _last_stamp


def schedule_zone() -> ZoneInfo:
    return ZoneInfo(get_settings().schedule_timezone)


def to_schedule_zone(value: datetime) -> datetime:
    return as_utc(value).astimezone(schedule_zone())

"""Core constants and id/timestamp helpers for mailboxes."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum


# Retention policy
MAX_MESSAGES = 50
READ_RETAIN = 30

DEFAULT_FROM = "unknown"
DEFAULT_TYPE = "wake_up"

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class MessageType(str, Enum):
    """Well-known message tags.

    ``type`` is free-form on disk; these are only the values agents use
    most often.  Using ``str, Enum`` so that ``MessageType.WAKE_UP == "wake_up"``.
    """

    WAKE_UP = "wake_up"
    TASK_ASSIGNED = "task_assigned"
    REPORT_RECEIVED = "report_received"


def generate_message_id(now: datetime | None = None) -> str:
    """Return ``msg_YYYYmmdd_HHMMSS_<32 hex>``.

    The date part is only for humans scanning the file; uniqueness comes
    from the 128-bit random suffix, so ids can be minted outside the lock.
    """
    now = now or datetime.now()
    return f"msg_{now:%Y%m%d_%H%M%S}_{uuid.uuid4().hex}"


def local_timestamp(now: datetime | None = None) -> str:
    """Return a local timestamp: ``YYYY-MM-DDTHH:MM:SS``."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)

"""Tests for mailslot.types module."""

from __future__ import annotations

import re
from datetime import datetime

from mailslot.types import (
    DEFAULT_FROM,
    DEFAULT_TYPE,
    MAX_MESSAGES,
    READ_RETAIN,
    MessageType,
    generate_message_id,
    local_timestamp,
)


class TestConstants:
    def test_retention(self):
        assert MAX_MESSAGES == 50
        assert READ_RETAIN == 30

    def test_defaults(self):
        assert DEFAULT_FROM == "unknown"
        assert DEFAULT_TYPE == "wake_up"


class TestMessageType:
    def test_wake_up_equals_string(self):
        assert MessageType.WAKE_UP == "wake_up"

    def test_report_received(self):
        assert MessageType.REPORT_RECEIVED == "report_received"


class TestMessageId:
    def test_format(self):
        msg_id = generate_message_id(datetime(2026, 3, 4, 5, 6, 7))
        assert re.fullmatch(r"msg_20260304_050607_[0-9a-f]{32}", msg_id)

    def test_unique_within_same_second(self):
        now = datetime(2026, 3, 4, 5, 6, 7)
        ids = {generate_message_id(now) for _ in range(1000)}
        assert len(ids) == 1000


class TestTimestamp:
    def test_format(self):
        assert local_timestamp(datetime(2026, 3, 4, 5, 6, 7)) == "2026-03-04T05:06:07"

    def test_now(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", local_timestamp())

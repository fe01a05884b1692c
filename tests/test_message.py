"""Tests for Message / MailboxDocument dict conversion."""

from __future__ import annotations

from datetime import datetime

import pytest

from mailslot.errors import ParseError
from mailslot.message import MailboxDocument, Message


class TestMessage:
    def test_to_dict_key_order(self):
        msg = Message(id="m1", content="hi", timestamp="2026-01-01T00:00:00")
        assert list(msg.to_dict()) == ["id", "from", "timestamp", "type", "content", "read"]

    def test_defaults(self):
        d = Message(id="m1", content="hi").to_dict()
        assert d["from"] == "unknown"
        assert d["type"] == "wake_up"
        assert d["read"] is False

    def test_from_dict_maps_from_to_sender(self):
        msg = Message.from_dict({"id": "m1", "from": "worker3", "content": "x"})
        assert msg.sender == "worker3"

    def test_extra_keys_preserved(self):
        raw = {"id": "m1", "content": "x", "read": True, "read_at": "2026-01-01T10:00:00"}
        msg = Message.from_dict(raw)
        assert msg.extra == {"read_at": "2026-01-01T10:00:00"}
        assert msg.to_dict()["read_at"] == "2026-01-01T10:00:00"
        assert list(msg.to_dict())[-1] == "read_at"

    def test_datetime_timestamp_coerced(self):
        msg = Message.from_dict(
            {"id": "m1", "content": "x", "timestamp": datetime(2026, 1, 2, 3, 4, 5)}
        )
        assert msg.timestamp == "2026-01-02T03:04:05"

    def test_foreign_id_kept_as_is(self):
        msg = Message.from_dict({"id": None, "content": "x"})
        assert msg.id is None
        assert msg.to_dict()["id"] is None

    def test_string_read_kept_and_unread(self):
        msg = Message.from_dict({"id": "m1", "content": "x", "read": "false"})
        assert msg.to_dict()["read"] == "false"
        assert msg.is_read is False

    def test_literal_true_is_read(self):
        assert Message.from_dict({"id": "m1", "content": "x", "read": True}).is_read

    def test_non_mapping_rejected(self):
        with pytest.raises(ParseError, match="mapping"):
            Message.from_dict("just a string")


class TestMailboxDocument:
    def test_none_is_empty(self):
        assert MailboxDocument.from_dict(None).messages == []

    def test_null_messages_is_empty(self):
        assert MailboxDocument.from_dict({"messages": None}).messages == []

    def test_top_level_list_rejected(self):
        with pytest.raises(ParseError, match="mapping"):
            MailboxDocument.from_dict([1, 2])

    def test_messages_not_list_rejected(self):
        with pytest.raises(ParseError, match="list"):
            MailboxDocument.from_dict({"messages": "nope"})

    def test_unread_count(self, sample_document):
        assert sample_document.unread_count == 1

    def test_extra_top_level_keys_preserved(self):
        doc = MailboxDocument.from_dict({"messages": [], "owner": "karo"})
        assert doc.to_dict() == {"messages": [], "owner": "karo"}

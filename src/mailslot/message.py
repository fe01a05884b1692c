"""Message and MailboxDocument data objects.

A mailbox file is a YAML mapping with a single ``messages`` sequence.
Readers owned by other tools may add keys (or flip ``read``); anything this
module does not know about is carried in ``extra`` so appends never drop it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from mailslot.errors import ParseError
from mailslot.types import DEFAULT_FROM, DEFAULT_TYPE, TIMESTAMP_FORMAT

_MESSAGE_FIELDS = ("id", "from", "timestamp", "type", "content", "read")


@dataclass
class Message:
    """One mailbox entry.  ``sender`` is stored on disk as ``from``."""

    id: str
    content: str
    sender: str = DEFAULT_FROM
    timestamp: str = ""
    type: str = DEFAULT_TYPE
    read: Any = False
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_read(self) -> bool:
        """Only a literal ``true`` marks a message read; anything else stays unread."""
        return self.read is True

    def to_dict(self) -> dict[str, Any]:
        """Return the on-disk mapping with a fixed key order."""
        data: dict[str, Any] = {
            "id": self.id,
            "from": self.sender,
            "timestamp": self.timestamp,
            "type": self.type,
            "content": self.content,
            "read": self.read,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Message:
        if not isinstance(data, dict):
            raise ParseError(f"Message entry must be a mapping, got {type(data).__name__}")
        timestamp = data.get("timestamp", "")
        if isinstance(timestamp, datetime):
            # Unquoted timestamps written by hand load as datetimes
            timestamp = timestamp.strftime(TIMESTAMP_FORMAT)
        return cls(
            id=data.get("id", ""),
            content=data.get("content", ""),
            sender=data.get("from", DEFAULT_FROM),
            timestamp=timestamp,
            type=data.get("type", DEFAULT_TYPE),
            read=data.get("read", False),
            extra={k: v for k, v in data.items() if k not in _MESSAGE_FIELDS},
        )


@dataclass
class MailboxDocument:
    """The persisted state of one mailbox."""

    messages: list[Message] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def unread_count(self) -> int:
        return sum(1 for m in self.messages if not m.is_read)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"messages": [m.to_dict() for m in self.messages]}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> MailboxDocument:
        """Build a document from parsed YAML.

        ``None`` (empty file) and ``messages: null`` both mean an empty
        mailbox.

        Raises:
            ParseError: If the structure is not a mapping holding a list.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ParseError(
                f"Mailbox document must be a mapping, got {type(data).__name__}"
            )
        raw_messages = data.get("messages") or []
        if not isinstance(raw_messages, list):
            raise ParseError(
                f"'messages' must be a list, got {type(raw_messages).__name__}"
            )
        return cls(
            messages=[Message.from_dict(m) for m in raw_messages],
            extra={k: v for k, v in data.items() if k != "messages"},
        )

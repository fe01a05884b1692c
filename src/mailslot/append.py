"""Appending messages and the retention policy.

Retention runs after every append, and only once the mailbox holds more
than ``max_messages``: every unread message is kept, plus the newest
``read_retain`` read messages.  Relative order inside each group is kept.
Unread messages are never evicted, so a mailbox whose unread backlog alone
exceeds the cap stays over it until a reader marks messages read.
"""

from __future__ import annotations

import logging
from datetime import datetime

from mailslot.message import MailboxDocument, Message
from mailslot.types import (
    DEFAULT_FROM,
    DEFAULT_TYPE,
    MAX_MESSAGES,
    READ_RETAIN,
    generate_message_id,
    local_timestamp,
)

logger = logging.getLogger(__name__)


def new_message(
    content: str,
    type: str = DEFAULT_TYPE,
    sender: str = DEFAULT_FROM,
) -> Message:
    """Build an unread message with a fresh id.

    Safe to call before taking the lock; the timestamp is assigned later by
    :func:`stamp`.
    """
    return Message(
        id=generate_message_id(),
        content=content,
        sender=sender or DEFAULT_FROM,
        type=type or DEFAULT_TYPE,
    )


def stamp(
    document: MailboxDocument, message: Message, now: datetime | None = None
) -> Message:
    """Set ``message.timestamp``, never earlier than the mailbox's last one."""
    ts = local_timestamp(now)
    if document.messages:
        last = document.messages[-1].timestamp
        # Fixed-width format, so string order is time order
        if isinstance(last, str) and len(last) == len(ts) and last > ts:
            ts = last
    message.timestamp = ts
    return message


def evict(
    messages: list[Message],
    max_messages: int = MAX_MESSAGES,
    read_retain: int = READ_RETAIN,
) -> list[Message]:
    """Apply the retention policy to *messages* and return the kept list.

    A no-op when ``len(messages) <= max_messages``.
    """
    if len(messages) <= max_messages:
        return messages

    unread = [m for m in messages if not m.is_read]
    read = [m for m in messages if m.is_read]
    kept_read = read[-read_retain:] if read_retain > 0 else []
    return unread + kept_read


def apply(
    document: MailboxDocument,
    message: Message,
    max_messages: int = MAX_MESSAGES,
    read_retain: int = READ_RETAIN,
) -> MailboxDocument:
    """Append *message* to *document* and enforce retention.

    *message* must already carry its id.  The document is updated in place
    and returned.
    """
    if not message.id:
        raise ValueError("message id must be assigned before apply()")

    document.messages.append(message)
    before = len(document.messages)
    document.messages = evict(document.messages, max_messages, read_retain)

    dropped = before - len(document.messages)
    if dropped:
        logger.info("Evicted %d read messages (%d kept)", dropped, len(document.messages))
    if len(document.messages) > max_messages:
        logger.warning(
            "Mailbox holds %d messages (%d unread), over the cap of %d",
            len(document.messages),
            document.unread_count,
            max_messages,
        )
    return document

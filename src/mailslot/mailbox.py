"""Mailbox -- the locked append cycle.

``append_message`` validates its input, mints the message id, then runs the
critical section under :class:`~mailslot.retry.RetryPolicy`::

    lock -> load (or start empty) -> stamp + append + evict -> atomic write -> unlock

Every read and write of a mailbox file happens inside that lock, so appends
to one mailbox are totally ordered.  Different mailboxes use different lock
files and never contend.
"""

from __future__ import annotations

import logging

from mailslot.append import apply, new_message, stamp
from mailslot.config import MailboxConfig
from mailslot.errors import ValidationError
from mailslot.identity import parse_identity
from mailslot.lock import LockManager
from mailslot.message import Message
from mailslot.retry import RetryPolicy
from mailslot.store import MailboxStore
from mailslot.types import DEFAULT_FROM, DEFAULT_TYPE
from mailslot.writer import AtomicWriter

logger = logging.getLogger(__name__)


class Mailbox:
    """Appends messages to the mailboxes under one inbox directory.

    Usage::

        box = Mailbox(MailboxConfig(home="/srv/agents"))
        msg = box.append_message("karo", "task finished", "report_received", "worker5")
    """

    def __init__(
        self,
        config: MailboxConfig | None = None,
        *,
        retry: RetryPolicy | None = None,
        locks: LockManager | None = None,
        writer: AtomicWriter | None = None,
    ) -> None:
        self.config = config or MailboxConfig()
        self.store = MailboxStore(self.config.inbox_dir)
        self.retry = retry or RetryPolicy(
            max_attempts=self.config.max_attempts,
            base_delay=self.config.retry_delay,
        )
        self.locks = locks or LockManager()
        self.writer = writer or AtomicWriter()

    def append_message(
        self,
        target: str,
        content: str,
        type: str = DEFAULT_TYPE,
        sender: str = DEFAULT_FROM,
    ) -> Message:
        """Append a new unread message to *target*'s mailbox and return it.

        Raises:
            ValidationError: If *target* or *content* is missing or *target*
                is not a valid identity.  Raised before any I/O.
            LockTimeout: If the lock could not be taken within the retry budget.
            ParseError: If the existing mailbox cannot be parsed.  Not retried.
            WriteError: If the inbox directory, lock file or new document could
                not be written.  Not retried.
        """
        identity = parse_identity(target)
        if not content:
            raise ValidationError("Message content is required")

        message = new_message(content, type, sender)
        self.store.ensure_dir()
        self.retry.call(
            lambda: self._append_locked(identity, message),
            str(self.store.path_for(identity)),
        )
        logger.info("Appended %s to %s (type=%s)", message.id, identity, message.type)
        return message

    def _append_locked(self, identity: str, message: Message) -> None:
        with self.locks.acquire(
            self.store.lock_path_for(identity), self.config.lock_timeout
        ):
            document = self.store.load(identity)
            stamp(document, message)
            apply(
                document,
                message,
                max_messages=self.config.max_messages,
                read_retain=self.config.read_retain,
            )
            self.writer.persist(self.store.path_for(identity), document)


def append_message(
    target: str,
    content: str,
    type: str = DEFAULT_TYPE,
    sender: str = DEFAULT_FROM,
    *,
    config: MailboxConfig | None = None,
) -> Message:
    """Append a message using a one-off :class:`Mailbox` (see its docs)."""
    return Mailbox(config).append_message(target, content, type, sender)

"""mailslot -- durable per-recipient mailboxes for agent signaling.

Top-level convenience re-exports::

    from mailslot import Mailbox, MailboxConfig, append_message
"""

__version__ = "0.1.0"

from mailslot.config import MailboxConfig
from mailslot.errors import (
    LockTimeout,
    MailslotError,
    ParseError,
    ValidationError,
    WriteError,
)
from mailslot.mailbox import Mailbox, append_message
from mailslot.message import MailboxDocument, Message

__all__ = [
    "__version__",
    "Mailbox",
    "MailboxConfig",
    "MailboxDocument",
    "Message",
    "append_message",
    # Errors
    "MailslotError",
    "ValidationError",
    "LockTimeout",
    "ParseError",
    "WriteError",
]

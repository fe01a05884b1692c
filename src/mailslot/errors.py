"""mailslot exception hierarchy.

All mailbox exceptions inherit from :class:`MailslotError`.
"""

from __future__ import annotations


class MailslotError(Exception):
    """Base exception for all mailbox errors."""


class ValidationError(MailslotError):
    """Raised when a target identity or message content is missing or malformed."""


class LockTimeout(MailslotError):
    """Raised when the exclusive mailbox lock cannot be obtained in time."""


class ParseError(MailslotError):
    """Raised when an existing mailbox document cannot be parsed."""


class WriteError(MailslotError):
    """Raised when serializing or replacing a mailbox document fails."""

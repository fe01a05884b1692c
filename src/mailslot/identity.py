"""Recipient identity validation.

An identity names a mailbox and becomes its file name
(``<inbox_dir>/<identity>.yaml``), so it must be a single safe path segment.
"""

from __future__ import annotations

import re

from mailslot.errors import ValidationError

# 1-64 chars: letters, digits, underscore, hyphen, dot.  Cannot start with a dot.
_IDENTITY_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]{0,63}$")


def parse_identity(raw: str | None) -> str:
    """Validate and normalize a recipient identity.

    Strips surrounding whitespace.  Case is preserved.

    Raises:
        ValidationError: If *raw* is empty or not a safe file name.
    """
    if raw is None or not raw.strip():
        raise ValidationError("Target identity is required")
    identity = raw.strip()
    if not _IDENTITY_RE.match(identity):
        raise ValidationError(f"Invalid target identity: {raw!r}")
    return identity

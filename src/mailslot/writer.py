"""Deterministic YAML serialization and atomic document replacement."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import yaml

from mailslot.errors import WriteError
from mailslot.message import MailboxDocument

logger = logging.getLogger(__name__)


def serialize(document: MailboxDocument) -> str:
    """Render *document* as block-style YAML with a stable key order."""
    return yaml.safe_dump(
        document.to_dict(),
        default_flow_style=False,
        allow_unicode=True,
        indent=2,
        sort_keys=False,
    )


def parse(text: str) -> MailboxDocument:
    """Inverse of :func:`serialize`."""
    return MailboxDocument.from_dict(yaml.safe_load(text))


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class AtomicWriter:
    """Replaces mailbox documents so readers see the old or new file, never a mix.

    The temporary file is created in the target's own directory, since
    ``os.replace`` is only atomic within one filesystem.
    """

    def persist(self, path: Path | str, document: MailboxDocument) -> None:
        """Write *document* to *path* atomically.

        Raises:
            WriteError: If serialization, the temp write, or the replace fails.
                The temp file is removed and *path* is left untouched.
        """
        path = Path(path)
        try:
            text = serialize(document)
        except Exception as exc:
            raise WriteError(f"Cannot serialize mailbox {path}: {exc}") from exc

        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise WriteError(f"Cannot create temp file for {path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except Exception as exc:
            _discard(tmp_path)
            raise WriteError(f"Cannot write mailbox {path}: {exc}") from exc
        except BaseException:
            _discard(tmp_path)
            raise
        logger.debug("Wrote %d messages to %s", len(document.messages), path)

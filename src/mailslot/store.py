"""Mailbox path resolution and document loading."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from mailslot.errors import ParseError, WriteError
from mailslot.message import MailboxDocument

logger = logging.getLogger(__name__)

_DOCUMENT_SUFFIX = ".yaml"
_LOCK_SUFFIX = ".lock"


class MailboxStore:
    """Maps identities to files under *inbox_dir* and loads their documents.

    ``load`` must only be called while holding the mailbox lock: treating a
    missing file as an empty mailbox is the first-touch initialization, and
    doing it unlocked races other first-time writers.
    """

    def __init__(self, inbox_dir: Path | str) -> None:
        self._inbox_dir = Path(inbox_dir)

    @property
    def inbox_dir(self) -> Path:
        return self._inbox_dir

    def path_for(self, identity: str) -> Path:
        """Return the document path for *identity*."""
        return self._inbox_dir / f"{identity}{_DOCUMENT_SUFFIX}"

    def lock_path_for(self, identity: str) -> Path:
        """Return the lock side file for *identity*: ``<document>.lock``."""
        document = self.path_for(identity)
        return document.with_name(document.name + _LOCK_SUFFIX)

    def ensure_dir(self) -> None:
        """Create the inbox directory (the lock file lives there too).

        Raises:
            WriteError: If the directory cannot be created.
        """
        try:
            self._inbox_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Cannot create inbox directory {self._inbox_dir}: {exc}") from exc

    def load(self, identity: str) -> MailboxDocument:
        """Load the document for *identity*, or an empty one if absent.

        Raises:
            ParseError: If the file exists but is not a valid mailbox document.
        """
        path = self.path_for(identity)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No mailbox at %s, starting empty", path)
            return MailboxDocument()
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(f"Cannot read mailbox {path}: {exc}") from exc

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ParseError(f"Invalid YAML in mailbox {path}: {exc}") from exc

        try:
            document = MailboxDocument.from_dict(data)
        except ParseError as exc:
            raise ParseError(f"Malformed mailbox {path}: {exc}") from exc
        logger.debug("Loaded %d messages from %s", len(document.messages), path)
        return document

"""Mailbox configuration via dataclass."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mailslot.types import MAX_MESSAGES, READ_RETAIN

logger = logging.getLogger(__name__)

_DEFAULT_LOCK_TIMEOUT = 5.0
_DEFAULT_MAX_ATTEMPTS = 3
_DEFAULT_RETRY_DELAY = 1.0


@dataclass
class MailboxConfig:
    """Configuration for a mailbox root.

    Mailbox files live under ``<home>/queue/inbox/`` unless ``inbox_dir`` is
    given.  Retry and lock settings can be overridden via environment
    variables (``MAILSLOT_LOCK_TIMEOUT``, ``MAILSLOT_MAX_ATTEMPTS``,
    ``MAILSLOT_RETRY_DELAY``) or a ``[mailbox]`` table in
    ``<home>/config.toml``.

    Priority (highest wins): constructor arg > env var > config.toml > default.
    """

    home: Path | str | None = None
    inbox_dir: Path | str | None = None
    lock_timeout: float | None = None
    max_attempts: int | None = None
    retry_delay: float | None = None
    max_messages: int = MAX_MESSAGES
    read_retain: int = READ_RETAIN

    def __post_init__(self) -> None:
        # MAILSLOT_HOME env var overrides the current directory
        if self.home is None:
            self.home = Path(os.getenv("MAILSLOT_HOME", "."))
        else:
            self.home = Path(self.home)

        if self.inbox_dir is None:
            self.inbox_dir = self.home / "queue" / "inbox"
        else:
            self.inbox_dir = Path(self.inbox_dir)

        file_values: dict = {}
        config_path = self.home / "config.toml"
        if config_path.exists():
            file_values = self._load_config_file(config_path)

        if self.lock_timeout is None:
            self.lock_timeout = float(
                os.getenv("MAILSLOT_LOCK_TIMEOUT")
                or file_values.get("lock_timeout", _DEFAULT_LOCK_TIMEOUT)
            )
        if self.max_attempts is None:
            self.max_attempts = int(
                os.getenv("MAILSLOT_MAX_ATTEMPTS")
                or file_values.get("max_attempts", _DEFAULT_MAX_ATTEMPTS)
            )
        if self.retry_delay is None:
            self.retry_delay = float(
                os.getenv("MAILSLOT_RETRY_DELAY")
                or file_values.get("retry_delay", _DEFAULT_RETRY_DELAY)
            )

        if self.lock_timeout <= 0:
            raise ValueError(f"lock_timeout must be positive, got {self.lock_timeout}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must not be negative, got {self.retry_delay}")
        if not 0 <= self.read_retain <= self.max_messages:
            raise ValueError(
                f"read_retain must be between 0 and max_messages ({self.max_messages}), "
                f"got {self.read_retain}"
            )

    def _load_config_file(self, path: Path) -> dict:
        """Load the ``[mailbox]`` table of an optional config.toml."""
        try:
            import tomllib
        except ModuleNotFoundError:
            import tomli as tomllib  # type: ignore[no-redef]  # Python 3.10 fallback

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception:
            logger.warning("Failed to load config file %s", path, exc_info=True)
            return {}

        return data.get("mailbox", {})

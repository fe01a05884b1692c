"""Exclusive per-mailbox locks backed by a side file.

The lock binds to ``<document>.lock``, never to the document itself, so
lock state is independent of whether the mailbox exists yet.  On POSIX
``filelock.FileLock`` uses ``flock`` on its own descriptor, so two
acquisitions conflict even inside one process.  The lock file is left in
place after release.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from mailslot.errors import LockTimeout, WriteError

logger = logging.getLogger(__name__)


class LockManager:
    """Acquires timed exclusive locks on lock files."""

    @contextmanager
    def acquire(self, resource: Path | str, timeout: float) -> Iterator[FileLock]:
        """Hold the exclusive lock on *resource* for the duration of the block.

        Blocks until the lock is obtained or *timeout* seconds elapse.  The
        lock is released on every exit path of the block.

        Raises:
            LockTimeout: If the lock could not be obtained in time.
            WriteError: If the lock file cannot be created or opened.
        """
        path = Path(resource)
        lock = FileLock(str(path))
        start = time.monotonic()
        try:
            lock.acquire(timeout=timeout)
        except Timeout:
            raise LockTimeout(
                f"Timed out acquiring lock {path} after {timeout:.2f}s"
            ) from None
        except OSError as exc:
            # Not contention: the lock file itself cannot be opened
            raise WriteError(f"Cannot open lock file {path}: {exc}") from exc
        logger.debug(
            "Acquired lock %s in %.3fs", path, time.monotonic() - start
        )
        try:
            yield lock
        finally:
            lock.release()
            logger.debug("Released lock %s", path)

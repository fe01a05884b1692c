"""Bounded retry policy for lock acquisition.

Wraps an operation that takes the mailbox lock and runs the critical
section.  Only :class:`~mailslot.errors.LockTimeout` is retried; any other
error (a corrupt document, a failed write) is re-raised immediately.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from mailslot.errors import LockTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry config
MAX_ATTEMPTS: int = 3
BASE_DELAY: float = 1.0  # 1s
MAX_DELAY: float = 30.0
BACKOFF_FACTOR: float = 1.0  # fixed delay


@dataclass
class RetryPolicy:
    """Retry an operation on lock timeouts, sleeping between attempts.

    The delay before retry *k* (0-based) is
    ``min(base_delay * backoff_factor ** k, max_delay)``.  ``sleep`` is
    injectable so tests can run against a fake clock.
    """

    max_attempts: int = MAX_ATTEMPTS
    base_delay: float = BASE_DELAY
    backoff_factor: float = BACKOFF_FACTOR
    max_delay: float = MAX_DELAY
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    def delay(self, attempt: int) -> float:
        return min(self.base_delay * (self.backoff_factor**attempt), self.max_delay)

    def call(self, operation: Callable[[], T], description: str = "operation") -> T:
        """Run *operation* until it succeeds or the attempt budget runs out.

        Raises:
            LockTimeout: After ``max_attempts`` consecutive lock timeouts.
        """
        last_exc: LockTimeout | None = None
        for attempt in range(self.max_attempts):
            try:
                return operation()
            except LockTimeout as exc:
                last_exc = exc
                if attempt < self.max_attempts - 1:
                    delay = self.delay(attempt)
                    logger.warning(
                        "Lock timeout for %s (attempt %d/%d), retrying in %.2fs",
                        description,
                        attempt + 1,
                        self.max_attempts,
                        delay,
                    )
                    self.sleep(delay)
                else:
                    logger.error(
                        "Failed to acquire lock after %d attempts for %s",
                        self.max_attempts,
                        description,
                    )
        raise LockTimeout(
            f"Failed to acquire lock after {self.max_attempts} attempts for {description}"
        ) from last_exc


"""Shared test fixtures for mailslot tests."""

from __future__ import annotations

import pytest

from mailslot.config import MailboxConfig
from mailslot.mailbox import Mailbox
from mailslot.message import MailboxDocument, Message
from mailslot.retry import RetryPolicy


class FakeClock:
    """Records sleeps instead of sleeping."""

    def __init__(self) -> None:
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


def make_messages(unread: int = 0, read: int = 0, prefix: str = "m") -> list[Message]:
    """Build *unread* unread messages followed by *read* read ones."""
    msgs = [
        Message(id=f"{prefix}-u{i}", content=f"unread {i}", timestamp="2026-01-01T00:00:00")
        for i in range(unread)
    ]
    msgs += [
        Message(
            id=f"{prefix}-r{i}",
            content=f"read {i}",
            timestamp="2026-01-01T00:00:00",
            read=True,
        )
        for i in range(read)
    ]
    return msgs


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def home(tmp_path, monkeypatch):
    """Isolated mailbox root with env overrides cleared."""
    for var in (
        "MAILSLOT_HOME",
        "MAILSLOT_LOCK_TIMEOUT",
        "MAILSLOT_MAX_ATTEMPTS",
        "MAILSLOT_RETRY_DELAY",
    ):
        monkeypatch.delenv(var, raising=False)
    root = tmp_path / "home"
    root.mkdir()
    return root


@pytest.fixture()
def config(home) -> MailboxConfig:
    return MailboxConfig(home=home, lock_timeout=2.0, retry_delay=0.05)


@pytest.fixture()
def mailbox(config, fake_clock) -> Mailbox:
    retry = RetryPolicy(max_attempts=3, base_delay=0.05, sleep=fake_clock.sleep)
    return Mailbox(config, retry=retry)


@pytest.fixture()
def sample_document() -> MailboxDocument:
    return MailboxDocument(
        messages=[
            Message(
                id="msg_20260101_090000_aaaa",
                content="first",
                sender="worker1",
                timestamp="2026-01-01T09:00:00",
                type="report_received",
                read=True,
            ),
            Message(
                id="msg_20260101_090500_bbbb",
                content="second\nwith a newline: and a colon",
                timestamp="2026-01-01T09:05:00",
            ),
        ]
    )

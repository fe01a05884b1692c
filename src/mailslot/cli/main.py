"""mailslot CLI -- thin click wrapper around :class:`mailslot.Mailbox`."""

from __future__ import annotations

import logging
import sys

import click

from mailslot.config import MailboxConfig
from mailslot.errors import MailslotError, ValidationError
from mailslot.mailbox import Mailbox
from mailslot.types import DEFAULT_FROM, DEFAULT_TYPE


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(msg: str) -> None:
    """Print an error message to stderr and exit 1."""
    click.echo(msg, err=True)
    raise SystemExit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[mailslot] %(message)s",
    )


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="mailslot")
@click.option(
    "--home",
    "-H",
    default=None,
    envvar="MAILSLOT_HOME",
    type=click.Path(file_okay=False),
    help="Mailbox root; files live in <home>/queue/inbox/ (default: cwd).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log lock and I/O details.")
@click.pass_context
def cli(ctx: click.Context, home: str | None, verbose: bool) -> None:
    """mailslot -- append messages to agent mailboxes."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["home"] = home


# ---------------------------------------------------------------------------
# mailslot write
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("target", required=False, default="")
@click.argument("content", required=False, default="")
@click.argument("type", required=False, default=DEFAULT_TYPE)
@click.argument("sender", metavar="FROM", required=False, default=DEFAULT_FROM)
@click.pass_context
def write(
    ctx: click.Context, target: str, content: str, type: str, sender: str
) -> None:
    """Append CONTENT to TARGET's mailbox.

    \b
    Example:
        mailslot write karo "worker 5 finished" report_received worker5
    """
    try:
        box = Mailbox(MailboxConfig(home=ctx.obj.get("home")))
        msg = box.append_message(target, content, type, sender)
    except ValidationError as exc:
        _error(f"Usage: mailslot write TARGET CONTENT [TYPE] [FROM]\nError: {exc}")
    except MailslotError as exc:
        _error(f"Error: {exc}")
    except ValueError as exc:
        _error(f"Configuration error: {exc}")

    click.echo(msg.id)


if __name__ == "__main__":
    cli()

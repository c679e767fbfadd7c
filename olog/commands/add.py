"""Create a new log entry."""

from __future__ import annotations

import getpass

import click

from olog.cli import Context, pass_context
from olog.commands._common import EXIT_BAD_REQUEST, EXIT_SUCCESS, parse_assignments, store_session
from olog.store.writes import create_log
from olog.utils.output import error, success


@click.command("add")
@click.option("--subject", "-s", required=True, help="Subject line")
@click.option("--owner", "-o", default=None, help="Owner (default: current user)")
@click.option("--description", "-d", default=None, help="Free-text body")
@click.option(
    "--logbook", "-b", "logbooks", multiple=True, help="Logbook to file under (repeatable)"
)
@click.option("--tag", "-t", "tags", multiple=True, help="Tag to attach (repeatable)")
@click.option(
    "--property",
    "-p",
    "properties",
    multiple=True,
    metavar="NAME=VALUE",
    help="Property to set (repeatable)",
)
@pass_context
def cli(
    ctx: Context,
    subject: str,
    owner: str | None,
    description: str | None,
    logbooks: tuple[str, ...],
    tags: tuple[str, ...],
    properties: tuple[str, ...],
) -> None:
    """Create a log entry.

    Logbooks and tags must already exist (see `olog logbook create`
    and `olog tag create`).

    \b
    Examples:
      olog add -s "Beam dump at 14:02" -b Operations -t urgent
      olog add -s "Shift summary" -b Operations -p shift=night -p crew=B
    """
    prop_values = parse_assignments(properties, "property")
    duplicated = sorted(name for name, values in prop_values.items() if len(values) > 1)
    if duplicated:
        error(f"Property '{duplicated[0]}' given more than once")
        raise SystemExit(EXIT_BAD_REQUEST)

    with store_session(ctx) as session:
        log = create_log(
            session,
            subject,
            owner or getpass.getuser(),
            description=description,
            logbooks=logbooks,
            tags=tags,
            properties={name: values[0] for name, values in prop_values.items()},
        )
        log_id = log.id

    if not ctx.quiet:
        success(f"Created log {log_id}")
    raise SystemExit(EXIT_SUCCESS)

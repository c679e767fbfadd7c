"""Manage tags."""

from __future__ import annotations

import click
from rich.markup import escape

from olog.cli import Context, pass_context
from olog.commands._common import EXIT_SUCCESS, store_session
from olog.store.writes import add_tag_to_log, create_tag, list_tags
from olog.utils.output import console, create_table, info, success


@click.group("tag")
def cli() -> None:
    """Create, list and attach tags."""


@cli.command("create")
@click.argument("name")
@click.option("--owner", "-o", default=None, help="Tag owner")
@pass_context
def create_cmd(ctx: Context, name: str, owner: str | None) -> None:
    """Create the tag NAME."""
    with store_session(ctx) as session:
        create_tag(session, name, owner)
    if not ctx.quiet:
        success(f"Created tag '{name}'")
    raise SystemExit(EXIT_SUCCESS)


@cli.command("list")
@pass_context
def list_cmd(ctx: Context) -> None:
    """List all tags."""
    with store_session(ctx) as session:
        rows = [
            (escape(t.name), escape(t.owner or ""), str(len(t.logs)))
            for t in list_tags(session)
        ]

    if not rows:
        info("No tags")
        raise SystemExit(EXIT_SUCCESS)

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Tag", style="log.tag")
    table.add_column("Owner", style="log.owner")
    table.add_column("Logs", justify="right")
    for row in rows:
        table.add_row(*row)
    console.print(table)
    raise SystemExit(EXIT_SUCCESS)


@cli.command("attach")
@click.argument("name")
@click.argument("log_id", type=int)
@pass_context
def attach_cmd(ctx: Context, name: str, log_id: int) -> None:
    """Attach tag NAME to the log LOG_ID."""
    with store_session(ctx) as session:
        add_tag_to_log(session, name, log_id)
    if not ctx.quiet:
        success(f"Tagged log {log_id} with '{name}'")
    raise SystemExit(EXIT_SUCCESS)

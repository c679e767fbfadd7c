"""Manage logbooks."""

from __future__ import annotations

import click
from rich.markup import escape

from olog.cli import Context, pass_context
from olog.commands._common import EXIT_SUCCESS, store_session
from olog.store.writes import create_logbook, list_logbooks, update_logbook
from olog.utils.output import console, create_table, info, success


@click.group("logbook")
def cli() -> None:
    """Create, list and update logbooks."""


@cli.command("create")
@click.argument("name")
@click.option("--owner", "-o", default=None, help="Logbook owner")
@pass_context
def create_cmd(ctx: Context, name: str, owner: str | None) -> None:
    """Create the logbook NAME."""
    with store_session(ctx) as session:
        create_logbook(session, name, owner)
    if not ctx.quiet:
        success(f"Created logbook '{name}'")
    raise SystemExit(EXIT_SUCCESS)


@cli.command("list")
@pass_context
def list_cmd(ctx: Context) -> None:
    """List all logbooks."""
    with store_session(ctx) as session:
        rows = [
            (escape(lb.name), escape(lb.owner or ""), str(len(lb.logs)))
            for lb in list_logbooks(session)
        ]

    if not rows:
        info("No logbooks")
        raise SystemExit(EXIT_SUCCESS)

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Logbook", style="log.logbook")
    table.add_column("Owner", style="log.owner")
    table.add_column("Logs", justify="right")
    for row in rows:
        table.add_row(*row)
    console.print(table)
    raise SystemExit(EXIT_SUCCESS)


@cli.command("update")
@click.argument("name")
@click.option("--rename", "new_name", default=None, help="New logbook name")
@click.option("--owner", "-o", default=None, help="New owner")
@click.option("--log", "log_ids", type=int, multiple=True, help="File this log id (repeatable)")
@pass_context
def update_cmd(
    ctx: Context,
    name: str,
    new_name: str | None,
    owner: str | None,
    log_ids: tuple[int, ...],
) -> None:
    """Rename logbook NAME, change its owner, or file logs under it.

    \b
    Examples:
      olog logbook update Ops --rename Operations
      olog logbook update Operations --log 12 --log 13
    """
    with store_session(ctx) as session:
        logbook = update_logbook(session, name, new_name=new_name, owner=owner, log_ids=log_ids)
        final_name = logbook.name
    if not ctx.quiet:
        success(f"Updated logbook '{final_name}'")
    raise SystemExit(EXIT_SUCCESS)

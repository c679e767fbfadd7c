"""Show a single log."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from olog.cli import Context, pass_context
from olog.commands._common import EXIT_SUCCESS, store_session
from olog.search.query import find_log_by_id
from olog.store.records import log_to_dict
from olog.utils.output import console


@click.command("show")
@click.argument("log_id", type=int)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON")
@pass_context
def cli(ctx: Context, log_id: int, as_json: bool) -> None:
    """Show the log with id LOG_ID."""
    with store_session(ctx) as session:
        log = find_log_by_id(session, log_id)
        data = log_to_dict(log)
        created = f"{log.created_at:%Y-%m-%d %H:%M:%S}"

    if as_json:
        click.echo(json.dumps(data, indent=2))
        raise SystemExit(EXIT_SUCCESS)

    console.print(f"[log.subject]{escape(data['subject'])}[/log.subject]  (#{data['id']})")
    console.print(f"  Owner:    [log.owner]{escape(data['owner'])}[/log.owner]")
    console.print(f"  Created:  {created} UTC")
    if data["logbooks"]:
        logbooks = escape(", ".join(data["logbooks"]))
        console.print(f"  Logbooks: [log.logbook]{logbooks}[/log.logbook]")
    if data["tags"]:
        console.print(f"  Tags:     [log.tag]{escape(', '.join(data['tags']))}[/log.tag]")
    for name, value in sorted(data["properties"].items()):
        console.print(f"  {escape(name)} = {escape(value or '')}")
    if data["description"]:
        console.print()
        console.print(data["description"], markup=False)

    raise SystemExit(EXIT_SUCCESS)

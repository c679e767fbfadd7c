"""Search logs by subject, tag, logbook, property and date."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from olog.cli import Context, pass_context
from olog.commands._common import (
    EXIT_BAD_REQUEST,
    EXIT_SUCCESS,
    exit_code_for,
    parse_assignments,
    store_session,
)
from olog.exceptions import InvalidParameterError
from olog.search.criteria import (
    END_KEY,
    LIMIT_KEY,
    LOGBOOK_KEY,
    PAGE_KEY,
    RESERVED_KEYS,
    SEARCH_KEY,
    START_KEY,
    TAG_KEY,
    classify,
)
from olog.search.query import search
from olog.store.records import log_to_dict
from olog.utils.output import console, create_table, debug, error, info, verbose


def build_params(
    names: tuple[str, ...],
    tags: tuple[str, ...],
    logbooks: tuple[str, ...],
    properties: dict[str, list[str]],
    page: str | None,
    limit: str | None,
    start: str | None,
    end: str | None,
) -> dict[str, list[str]]:
    """Assemble command-line options into a search parameter multimap."""
    params: dict[str, list[str]] = {}
    if names:
        params[SEARCH_KEY] = list(names)
    if tags:
        params[TAG_KEY] = list(tags)
    if logbooks:
        params[LOGBOOK_KEY] = list(logbooks)
    for key, value in ((PAGE_KEY, page), (LIMIT_KEY, limit), (START_KEY, start), (END_KEY, end)):
        if value is not None:
            params[key] = [value]
    for name, values in properties.items():
        params.setdefault(name, []).extend(values)
    return params


@click.command("search")
@click.option("--search", "-s", "names", multiple=True, help="Subject glob (repeatable, ORed)")
@click.option("--tag", "-t", "tags", multiple=True, help="Tag name or glob (repeatable)")
@click.option(
    "--logbook", "-b", "logbooks", multiple=True, help="Logbook name or glob (repeatable)"
)
@click.option(
    "--property",
    "-p",
    "properties",
    multiple=True,
    metavar="NAME=GLOB",
    help="Property value glob (repeatable)",
)
@click.option("--id", "log_ids", type=int, multiple=True, help="Include this log id (repeatable)")
@click.option("--page", default=None, help="1-based page number (requires --limit)")
@click.option("--limit", "-l", default=None, help="Page size (requires --page)")
@click.option("--start", default=None, help="Created at or after (epoch seconds)")
@click.option("--end", default=None, help="Created at or before (epoch seconds)")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def cli(
    ctx: Context,
    names: tuple[str, ...],
    tags: tuple[str, ...],
    logbooks: tuple[str, ...],
    properties: tuple[str, ...],
    log_ids: tuple[int, ...],
    page: str | None,
    limit: str | None,
    start: str | None,
    end: str | None,
    output_format: str,
) -> None:
    """Search logs.

    Tags and logbooks accept globs (* and ? wildcards, backslash to
    escape). Tag, tag-glob and property matches are pooled, then
    restricted to the given logbooks. A tag or logbook that matches
    nothing makes the whole search empty.

    \b
    Examples:
      olog search --tag urgent --logbook ops
      olog search -t 'beam*' -p 'shift=night*'
      olog search -s '*dump*' --limit 10 --page 2
      olog search --start 1700000000 --end 1700086400 -f json
    """
    prop_params = parse_assignments(properties, "property")
    reserved = sorted(set(name.lower() for name in prop_params) & RESERVED_KEYS)
    if reserved:
        error(f"'{reserved[0]}' is not a property name", hint=f"Use --{reserved[0]} instead")
        raise SystemExit(EXIT_BAD_REQUEST)

    config = ctx.config
    if page is not None and limit is None and config is not None and config.default_limit:
        limit = str(config.default_limit)

    params = build_params(names, tags, logbooks, prop_params, page, limit, start, end)
    debug(f"Search parameters: {escape(repr(params))}")

    try:
        criteria = classify(params, log_ids=log_ids)
    except InvalidParameterError as e:
        error(str(e))
        raise SystemExit(exit_code_for(e))

    verbose(f"Criteria: {escape(repr(criteria))}")

    timeout = config.search_timeout if config is not None else None
    with store_session(ctx) as session:
        logs = search(session, criteria, timeout=timeout)

        if not logs:
            if output_format == "json":
                click.echo("[]")
            elif not ctx.quiet:
                info("No matching logs")
            raise SystemExit(EXIT_SUCCESS)

        if output_format == "json":
            click.echo(json.dumps([log_to_dict(log) for log in logs], indent=2))
        else:
            _print_table(logs, quiet=ctx.quiet)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(logs: list, *, quiet: bool = False) -> None:
    """Print logs as a Rich table."""
    if not quiet:
        info(f"{len(logs)} logs")

    table = create_table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right")
    table.add_column("Created (UTC)", no_wrap=True)
    table.add_column("Owner", style="log.owner")
    table.add_column("Subject", style="log.subject")
    table.add_column("Logbooks", style="log.logbook")
    table.add_column("Tags", style="log.tag")

    for log in logs:
        table.add_row(
            str(log.id),
            log.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            escape(log.owner),
            escape(log.subject),
            escape(", ".join(sorted(lb.name for lb in log.logbooks))),
            escape(", ".join(sorted(t.name for t in log.tags))),
        )

    console.print(table)

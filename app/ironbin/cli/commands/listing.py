"""List command.

Lists the items in the trash by original path, optionally with their
size and deletion time.
"""

import json
import sys
from fnmatch import fnmatchcase
from typing import Annotated

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from ironbin.cli.types import SortOrder, collect_entries, sort_entries
from ironbin.trash.errors import TrashError
from ironbin.trash.models import TrashEntry
from ironbin.trash.store import Trash
from ironbin.utils.formatting import (
    console,
    format_datetime,
    format_size,
    print_error,
    quote_path,
)


def list_entries(
    patterns: Annotated[
        list[str] | None,
        typer.Argument(
            help="Only list original paths matching these glob patterns.",
            metavar="PATTERN",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show size and deletion time."),
    ] = False,
    human_readable: Annotated[
        bool,
        typer.Option("--human-readable", "-H", help="Print human-readable sizes."),
    ] = False,
    sort_order: Annotated[
        SortOrder,
        typer.Option(
            "--sort",
            "-s",
            help="Sort by original path (ascending) or deletion time (newest first).",
            case_sensitive=False,
        ),
    ] = SortOrder.PATH,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """List the files in the trash."""
    trash = Trash.default()
    try:
        entries = collect_entries(trash)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if patterns:
        entries = [
            entry
            for entry in entries
            if any(fnmatchcase(str(entry.original_path), pattern) for pattern in patterns)
        ]
    entries = sort_entries(entries, sort_order)

    if json_output:
        _print_json(entries)
        return

    quote = sys.stdout.isatty()
    if not verbose:
        for entry in entries:
            typer.echo(quote_path(entry.original_path, quote))
        return

    _print_table(entries, human_readable, quote)


def _print_table(entries: list[TrashEntry], human_readable: bool, quote: bool) -> None:
    """Print entries as an ``ls -l`` style table."""
    table = Table(box=box.SIMPLE_HEAD, header_style="header", pad_edge=False)
    table.add_column("size", style="size", justify="right")
    table.add_column("deletion time", style="date")
    table.add_column("original path", style="path", overflow="fold")

    for entry in entries:
        table.add_row(
            format_size(entry.size, human_readable),
            format_datetime(entry.deletion_time),
            escape(quote_path(entry.original_path, quote)),
        )

    console.print(f"total {len(entries)}")
    if entries:
        console.print(table)


def _print_json(entries: list[TrashEntry]) -> None:
    """Print entries as JSON."""
    data = [
        {
            "identifier": entry.identifier,
            "original_path": str(entry.original_path),
            "deletion_time": entry.deletion_time.isoformat(),
            "size": entry.size,
        }
        for entry in entries
    ]
    typer.echo(json.dumps(data, indent=2))

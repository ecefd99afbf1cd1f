"""Put command.

Moves files and directories into the trash.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from ironbin.cli.types import should_prompt
from ironbin.trash.errors import TrashError
from ironbin.trash.store import Trash
from ironbin.utils.formatting import console, format_datetime, print_error


def put(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Paths to trash.", metavar="PATH", show_default=False),
    ],
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Prompt before every path."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Report every trashed path."),
    ] = False,
) -> None:
    """Put files in the trash."""
    trash = Trash.default()
    prompt = should_prompt(interactive)
    trashed = 0
    errors = 0

    for path in paths:
        if prompt and not typer.confirm(f"trash {path}?", default=False, err=True):
            continue
        try:
            report = trash.put(path)
        except TrashError as e:
            print_error(f"cannot trash {path}: {e}")
            errors += 1
            continue
        if verbose:
            console.print(
                f"trashed [path]{escape(str(report.path))}[/] "
                f"on [date]{format_datetime(report.deletion_time)}[/]"
            )
        trashed += 1

    if verbose:
        console.print(f"total {trashed} trashed")
    if errors:
        print_error(f"{errors} not trashed")
        raise typer.Exit(code=1)

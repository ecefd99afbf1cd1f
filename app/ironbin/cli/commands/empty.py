"""Empty command.

Permanently removes everything in the trash.
"""

from typing import Annotated

import typer

from ironbin.cli.types import should_prompt
from ironbin.trash.errors import TrashError
from ironbin.trash.store import Trash
from ironbin.utils.formatting import console, print_error, print_info


def empty(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Do not prompt before emptying the trash."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Report the number of removed items."),
    ] = False,
) -> None:
    """Empty the trash."""
    trash = Trash.default()

    if should_prompt(not force) and not typer.confirm("empty trash?", default=False, err=True):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    try:
        report = trash.empty()
    except TrashError as e:
        print_error(f"cannot empty trash: {e}")
        raise typer.Exit(code=1) from e

    if verbose:
        console.print(f"total {report.entry_count} removed")

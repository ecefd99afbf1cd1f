"""Restore command.

Moves trashed items back to their original paths. Without arguments the
most recently trashed item is restored; with paths, the most recently
trashed item for each of them.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from ironbin.cli.types import (
    SortOrder,
    absolute_path,
    collect_entries,
    should_prompt,
    sort_entries,
)
from ironbin.trash.errors import TrashError
from ironbin.trash.models import TrashEntry
from ironbin.trash.store import Trash
from ironbin.utils.formatting import console, format_datetime, print_error


def restore(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(
            help=(
                "Original paths to restore. Defaults to the most recently "
                "trashed file. Quote them to avoid shell expansion."
            ),
            metavar="PATH",
            show_default=False,
        ),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Prompt before every path."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Report every restored path."),
    ] = False,
) -> None:
    """Restore files from the trash."""
    trash = Trash.default()
    try:
        entries = sort_entries(collect_entries(trash), SortOrder.DATE)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    selected, errors = _select_entries(entries, paths or [])
    if not paths and not selected:
        print_error("empty trash")
        raise typer.Exit(code=1)

    prompt = should_prompt(interactive)
    restored = 0
    for entry in selected:
        deletion_time = format_datetime(entry.deletion_time)
        if prompt and not typer.confirm(
            f"restore {entry.original_path} trashed on {deletion_time}?",
            default=False,
            err=True,
        ):
            continue
        try:
            report = trash.restore(entry.identifier)
        except TrashError as e:
            print_error(f"cannot restore {entry.original_path}: {e}")
            errors += 1
            continue
        if verbose:
            console.print(
                f"restored [path]{escape(str(report.path))}[/] "
                f"trashed on [date]{format_datetime(report.deletion_time)}[/]"
            )
        restored += 1

    if verbose:
        console.print(f"total {restored} restored")
    if errors:
        print_error(f"{errors} not restored")
        raise typer.Exit(code=1)


def _select_entries(
    entries: list[TrashEntry], paths: list[Path]
) -> tuple[list[TrashEntry], int]:
    """Pick the entries to restore.

    Args:
        entries: Entries sorted newest first.
        paths: Requested original paths, possibly relative.

    Returns:
        Tuple of (entries to restore, number of paths not found).
    """
    if not paths:
        return entries[:1], 0

    selected: list[TrashEntry] = []
    missing = 0
    for path in paths:
        wanted = absolute_path(path)
        entry = next((e for e in entries if e.original_path == wanted), None)
        if entry is None:
            print_error(f"file {wanted} not found in trash")
            missing += 1
            continue
        selected.append(entry)
    return selected, missing

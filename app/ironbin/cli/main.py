"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from ironbin import __version__
from ironbin.cli.commands import empty, listing, put, restore
from ironbin.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="trash",
    help="Perform various operations on the trash.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"trash {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Log debug messages to stderr.",
        ),
    ] = False,
) -> None:
    """trash - FreeDesktop.org trash can for the command line.

    Trashed files can be listed, restored to where they came from,
    or removed for good.
    """
    configure_logging(debug)


# Register commands
app.command(name="list")(listing.list_entries)
app.command(name="ls", hidden=True)(listing.list_entries)
app.command(name="put")(put.put)
app.command(name="restore")(restore.restore)
app.command(name="empty")(empty.empty)


if __name__ == "__main__":
    app()

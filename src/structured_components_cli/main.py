"""Structured Components CLI entry point."""

import logging

import typer

from . import __version__
from .clear_cache import clear_cache_command
from .console import console
from .init_command import init_command
from .make_component import make_command

app = typer.Typer(
    name="structured-components",
    help="Structured Components - directory-based component discovery",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"structured-components version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging",
    ),
) -> None:
    """Structured Components - directory-based component discovery."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register the init command
app.command(name="init")(init_command)

# Register the make command
app.command(name="make")(make_command)

# Register the clear-cache command
app.command(name="clear-cache")(clear_cache_command)


if __name__ == "__main__":
    app()

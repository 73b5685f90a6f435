"""The structured-components init command implementation."""

from pathlib import Path

import typer

from structured_components.config import CONFIG_FILE, generate_config, write_config

from .console import print_error, print_panel, print_success


def init_command(
    directory: str = typer.Option(
        "app/Components",
        "--directory",
        "-d",
        help="Directory scanned for component modules",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Write a starter structured-components.yaml in the current directory."""
    config_path = Path.cwd() / CONFIG_FILE

    if config_path.exists() and not force:
        print_error(f"{CONFIG_FILE} already exists. Use --force to overwrite it.")
        raise typer.Exit(1)

    write_config(config_path, generate_config(components_directory=directory))
    print_success(f"Created {config_path}")

    print_panel(
        "Next Steps",
        f"1. Put components in {directory}/<group location>/\n"
        "2. Call structured_components.boot() during application startup\n"
        "3. Scaffold components with: structured-components make",
        style="blue",
    )

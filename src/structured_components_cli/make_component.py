"""The structured-components make command implementation."""

import re
from pathlib import Path
from typing import Optional

import typer
from rich.prompt import Confirm, Prompt

from structured_components.config import GroupConfig, Settings, load_settings
from structured_components.errors import ConfigurationError, InvalidComponent
from structured_components.paths import final_tag, tag_from_title

from .console import console, create_table, print_error, print_table, print_warning
from .generator import (
    component_file,
    component_test_file,
    generate_component,
    view_name,
)

NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9/\-_]*$")


def validate_configuration(settings: Settings) -> None:
    """The make command needs at least one group to place components in."""
    if not settings.groups:
        raise ConfigurationError(
            "No groups configured in structured-components groups. "
            "Please configure at least one group in your config file."
        )


def validate_component_name(name: str) -> Optional[str]:
    """Return an error message for an invalid component name, else None."""
    if not name.strip():
        return "Component name is required."

    if not NAME_PATTERN.match(name.strip()):
        return (
            "Component name must start with a letter and contain only letters, "
            "numbers, slashes, hyphens, and underscores."
        )

    return None


def studly(value: str) -> str:
    """user-profile -> UserProfile"""
    words = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in words if word)


def format_component_name(name: str) -> str:
    """Normalize separators and StudlyCase every path segment."""
    parts = name.strip().replace("\\", "/").split("/")
    return "/".join(studly(part) for part in parts if part)


def get_component_name(name: Optional[str]) -> str:
    """Get component name from argument or prompt."""
    if name:
        error = validate_component_name(name)
        if error:
            raise InvalidComponent(error)
        return format_component_name(name)

    while True:
        name = Prompt.ask(
            "What should the component be named? [dim](e.g., UserProfile, Admin/Dashboard)[/dim]"
        )
        error = validate_component_name(name)
        if error is None:
            return format_component_name(name)
        print_error(error)


def get_group_configuration(settings: Settings, group: Optional[str]) -> GroupConfig:
    """Get the selected group, prompting when none was given."""
    if not group:
        console.print("[bold]Which group should contain this component?[/bold]")
        for key, config in settings.groups.items():
            description = f" - {config.description}" if config.description else ""
            console.print(f"  [cyan]{key}[/cyan] ({config.location}){description}")

        keys = list(settings.groups)
        group = Prompt.ask("Group", choices=keys, default=keys[0])

    if group not in settings.groups:
        raise ConfigurationError(f"Group '{group}' not found in configuration.")

    return settings.groups[group]


def build_component_path(component_name: str, group: GroupConfig) -> str:
    """``<location>/<Name>`` relative to the components directory."""
    return f"{group.location.strip('/')}/{component_name}"


def component_tag(component_name: str, group: GroupConfig) -> str:
    """Tag the component receives when registered at boot."""
    return final_tag(tag_from_title(component_name), group.suffix)


def should_overwrite(force: bool) -> bool:
    """Ask if user wants to overwrite existing component."""
    if force:
        return True

    return Confirm.ask(
        "A component with this name already exists. Do you want to overwrite it?",
        default=False,
    )


def preview_component(
    settings: Settings, component_name: str, component_path: str, group: GroupConfig
) -> None:
    """Preview component without creating files."""
    console.print("[cyan]Component Preview[/cyan]")
    console.print()

    tag = component_tag(component_name, group)

    table = create_table("", "Property", "Value")
    table.add_row("Component Name", component_name.split("/")[-1])
    table.add_row("Group", group.key)
    table.add_row("Location", group.location)
    table.add_row("Full Path", str(component_file(settings, component_path)))
    table.add_row("Component Tag", tag)
    table.add_row("Template", view_name(tag))
    table.add_row("Test File", str(component_test_file(settings, component_path)))
    print_table(table)

    if group.suffix:
        console.print(
            f"Component will be registered with suffix: [yellow]{group.suffix}[/yellow]"
        )

    console.print("Run without --preview to create the component")


def show_success_message(component_name: str, group: GroupConfig, files: list[Path]) -> None:
    """Show success message with component details."""
    tag = component_tag(component_name, group)

    console.print()
    console.print("[green]Component created successfully![/green]")
    console.print()

    console.print("[cyan]Component Details:[/cyan]")
    console.print(f"   • Name: [yellow]{component_name.split('/')[-1]}[/yellow]")
    console.print(f"   • Group: [yellow]{group.key}[/yellow]")
    console.print(f"   • Tag: [yellow]{tag}[/yellow]")
    if group.suffix:
        console.print(f"   • Suffix: [yellow]{group.suffix}[/yellow]")

    console.print()
    console.print("[cyan]Files:[/cyan]")
    for path in files:
        console.print(f"   • {path}")

    console.print()
    console.print("[dim]Look it up after boot:[/dim]")
    console.print(f"[dim]   get_registry().get(\"{tag}\")[/dim]")
    console.print()
    console.print("[dim]Clear component cache if needed:[/dim]")
    console.print("[dim]   structured-components clear-cache[/dim]")


def make_command(
    name: Optional[str] = typer.Argument(None, help="The name of the component"),
    group: Optional[str] = typer.Option(
        None,
        "--group",
        "-g",
        help="The group to create the component in",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing component",
    ),
    inline: bool = typer.Option(
        False,
        "--inline",
        help="Create an inline component (no template file)",
    ),
    test: bool = typer.Option(
        False,
        "--test",
        help="Generate an accompanying pytest test module",
    ),
    unittest: bool = typer.Option(
        False,
        "--unittest",
        help="Generate an accompanying unittest test module",
    ),
    stub: Optional[Path] = typer.Option(
        None,
        "--stub",
        help="Use a custom stub file",
    ),
    preview: bool = typer.Option(
        False,
        "--preview",
        help="Preview the component structure without creating files",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to structured-components.yaml",
    ),
) -> None:
    """Create a new component in a structured directory."""
    try:
        settings = load_settings(str(config) if config else None)
        validate_configuration(settings)

        component_name = get_component_name(name)
        group_config = get_group_configuration(settings, group)
        component_path = build_component_path(component_name, group_config)

        if preview:
            preview_component(settings, component_name, component_path, group_config)
            return

        overwrite = force
        if component_file(settings, component_path).exists():
            if not should_overwrite(force):
                print_warning("Component creation cancelled.")
                return
            overwrite = True

        console.print(f"Creating component: [green]{component_name}[/green]")
        generated = generate_component(
            settings,
            component_path,
            component_tag(component_name, group_config),
            force=overwrite,
            inline=inline,
            test=test,
            unittest=unittest,
            stub=stub,
        )
        show_success_message(component_name, group_config, generated.all())

    except Exception as e:
        print_error(f"Failed to create component: {e}")
        raise typer.Exit(1)

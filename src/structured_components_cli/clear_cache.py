"""The structured-components clear-cache command implementation."""

from pathlib import Path
from typing import Any, Optional

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.prompt import Confirm

from structured_components.cache import (
    FILES_TYPE,
    MASTER_KEY,
    CacheStore,
    DiscoveryCache,
    SQLiteCacheStore,
    cache_key,
)
from structured_components.config import Settings, load_settings
from structured_components.provider import build_discovery

from .console import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
    print_table,
    print_warning,
)


def get_all_cache_keys(store: CacheStore, settings: Settings) -> list[str]:
    """
    Cache keys known to exist.

    Combines the master key registry with the keys the root directory and
    each configured group would use, keeping only keys present in the store.
    """
    candidates = list(store.get(MASTER_KEY, []))
    candidates.append(cache_key(FILES_TYPE))
    for group in settings.groups.values():
        candidates.append(cache_key(FILES_TYPE, group.location))

    keys: list[str] = []
    for key in candidates:
        if key not in keys and store.has(key):
            keys.append(key)
    return keys


def cache_key_type(key: str) -> str:
    """Human-readable kind of a cache key."""
    if f"-{FILES_TYPE}-" in key:
        return "Group Files"
    if key.endswith(f"-{FILES_TYPE}"):
        return "Root Files"
    if key == MASTER_KEY:
        return "Key Registry"
    return "Unknown"


def entry_count(value: Any) -> int:
    if isinstance(value, (list, tuple, dict, set)):
        return len(value)
    return 1


def count_total_entries(store: CacheStore, keys: list[str]) -> int:
    return sum(entry_count(store.get(key)) for key in keys)


def show_cache_stats(store: CacheStore, settings: Settings) -> None:
    """Show cache statistics."""
    console.print("[cyan]Structured Components Cache Statistics[/cyan]")
    console.print()

    keys = get_all_cache_keys(store, settings)
    if not keys:
        print_warning("No cache entries found.")
        return

    table = create_table("", "Cache Key", "Size (entries)", "Type")
    for key in keys:
        display_key = key if len(key) <= 50 else key[:47] + "..."
        table.add_row(display_key, str(entry_count(store.get(key))), cache_key_type(key))
    print_table(table)

    console.print()
    console.print(
        f"Total cache entries: [yellow]{count_total_entries(store, keys)}[/yellow]"
    )
    console.print()


def should_proceed(force: bool) -> bool:
    """Check if user wants to proceed."""
    if force:
        return True

    return Confirm.ask("Do you want to proceed with clearing the cache?", default=True)


def clear_group_cache(
    discovery: DiscoveryCache, settings: Settings, group_name: str
) -> None:
    """Clear cache for a specific group, matched by key or location."""
    group = settings.group(group_name)

    if group is None:
        print_error(f"Group '{group_name}' not found.")
        if settings.groups:
            print_info(f"Available groups: {', '.join(settings.groups)}")
        return

    console.print(f"Clearing cache for group: [yellow]{group.key}[/yellow]")

    store = discovery.store
    key = cache_key(FILES_TYPE, group.location)
    if store.has(key):
        entries = entry_count(store.get(key, []))
        discovery.invalidate(key)
        print_success(f"Cleared {entries} cached entries for group '{group.key}'")
    else:
        print_warning(f"No cache found for group '{group.key}'")


def clear_all_cache(discovery: DiscoveryCache, settings: Settings) -> None:
    """Clear every known cache entry and the master key registry."""
    store = discovery.store
    console.print("[cyan]Clearing all Structured Components cache...[/cyan]")

    keys = get_all_cache_keys(store, settings)
    if not keys:
        print_warning("No cache entries found to clear.")
        discovery.invalidate_all()
        return

    total_entries = count_total_entries(store, keys)

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Starting...", total=len(keys))
        for key in keys:
            progress.update(task, description=f"Clearing: {key[:30]}")
            discovery.invalidate(key)
            progress.advance(task)
        progress.update(task, description="Completed!")

    discovery.invalidate_all()

    console.print()
    print_success(
        f"Successfully cleared [green]{len(keys)}[/green] cache keys containing "
        f"[green]{total_entries}[/green] total entries"
    )
    show_cleanup_summary(settings, total_entries)


def show_cleanup_summary(settings: Settings, total_entries: int) -> None:
    console.print()
    console.print("[cyan]Cache Cleanup Summary:[/cyan]")
    console.print("   • Component discovery cache cleared")
    console.print(f"   • {total_entries} cached component entries removed")
    console.print("   • Next component discovery will rebuild cache")

    if settings.is_production:
        print_warning("Consider running this during low-traffic periods in production")

    console.print()
    console.print("[dim]You can verify the cache was cleared by running:[/dim]")
    console.print("[dim]  structured-components clear-cache --stats[/dim]")


def clear_cache_command(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Force cache clearing without confirmation",
    ),
    group: Optional[str] = typer.Option(
        None,
        "--group",
        "-g",
        help="Clear cache for specific group only",
    ),
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Show cache statistics before clearing",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to structured-components.yaml",
    ),
) -> None:
    """Clear the component discovery cache."""
    try:
        settings = load_settings(str(config) if config else None)
        discovery = build_discovery(settings, SQLiteCacheStore(Path(settings.cache_path)))

        if stats:
            show_cache_stats(discovery.store, settings)
            if not should_proceed(force):
                return

        if group:
            clear_group_cache(discovery, settings, group)
        else:
            clear_all_cache(discovery, settings)

    except Exception as e:
        print_error(f"Failed to clear cache: {e}")
        raise typer.Exit(1)

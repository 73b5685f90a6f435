"""Structured Components CLI - component scaffolding and cache management."""

from structured_components import __version__

__all__ = ["__version__"]

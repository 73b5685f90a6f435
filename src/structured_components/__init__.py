"""Structured Components - Directory-Based Component Discovery and Registration

Scans a configured components directory for component modules and registers
each concrete Component subclass under a tag derived from its path. Groups
map sub-directories to tag suffixes.

Architecture:
- Path resolver: pure path -> class name and title -> tag transforms
- Scanner: shallow two-tier glob plus a component-class check
- Discovery cache: per-directory scan results with a master key registry
- Registrar: group iteration and duplicate-safe registration

Usage:
    from structured_components import boot, get_registry

    boot()  # reads structured-components.yaml

    registry = get_registry()
    registry.get("user-profile-components")  # "app.Components.UserProfile"
"""

from .cache import DiscoveryCache, MemoryCacheStore, SQLiteCacheStore, cache_key
from .component import Component
from .config import GroupConfig, Settings, load_settings, validate_config
from .errors import (
    ConfigurationError,
    InvalidComponent,
    RegistrationConflict,
    ResourceNotFound,
    StructuredComponentsError,
)
from .provider import boot, build_discovery
from .registrar import ComponentRegistrar, RegistrationSummary
from .registry import ComponentRegistry, get_registry
from .scanner import ComponentRecord, ComponentScanner, is_component_class

__all__ = [
    "Component",
    "ComponentRecord",
    "ComponentRegistrar",
    "ComponentRegistry",
    "ComponentScanner",
    "ConfigurationError",
    "DiscoveryCache",
    "GroupConfig",
    "InvalidComponent",
    "MemoryCacheStore",
    "RegistrationConflict",
    "RegistrationSummary",
    "ResourceNotFound",
    "SQLiteCacheStore",
    "Settings",
    "StructuredComponentsError",
    "boot",
    "build_discovery",
    "cache_key",
    "get_registry",
    "is_component_class",
    "load_settings",
    "validate_config",
]

__version__ = "0.1.0"

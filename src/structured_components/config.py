"""Structured Components Configuration

Configuration loading with environment variable support and sensible defaults.

Environment Variables:
    STRUCTURED_COMPONENTS_CONFIG: Path to config file
        (default: structured-components.yaml in the working directory)
    STRUCTURED_COMPONENTS_CACHE: Force discovery caching on or off
    STRUCTURED_COMPONENTS_ENV: Environment name (default: "production")

Configuration Schema:
    components-directory: str - Directory scanned for component modules (required)
    app-path: str - Application source root (default: parent of components-directory)
    namespace: str - Import name of app-path (default: last segment of app-path)
    cache_enabled: bool - Cache discovery results (default: only in production)
    cache_ttl: int - Discovery cache lifetime in seconds (default: 3600)
    cache_path: str - SQLite cache file (default: .structured-components/cache.db)
    environment: str - production, development, testing, ...
    groups: dict - Named groups:
        <key>:
            location: str - Sub-directory of components-directory (required)
            suffix: str - Appended to every tag of the group (optional)
            description: str - Shown by the make command (optional)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE = "structured-components.yaml"
DEFAULT_CACHE_PATH = ".structured-components/cache.db"
DEFAULT_CACHE_TTL = 3600
PRODUCTION_ENVIRONMENTS = {"production", "prod"}

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "components-directory": None,
    "app-path": None,
    "namespace": None,
    "cache_enabled": None,  # None: enabled only in production
    "cache_ttl": DEFAULT_CACHE_TTL,
    "cache_path": None,
    "environment": None,
    "groups": {},
}


def current_environment() -> str:
    """Environment name from STRUCTURED_COMPONENTS_ENV, defaulting to production."""
    return os.environ.get("STRUCTURED_COMPONENTS_ENV") or "production"


def is_production_environment(environment: str) -> bool:
    return environment.lower() in PRODUCTION_ENVIRONMENTS


@dataclass(frozen=True)
class GroupConfig:
    """A named sub-location whose components share a tag suffix."""

    key: str
    location: str
    suffix: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Settings:
    """Validated configuration."""

    components_directory: str
    app_path: str
    namespace: str
    cache_enabled: bool | None = None
    cache_ttl: int = DEFAULT_CACHE_TTL
    cache_path: str = DEFAULT_CACHE_PATH
    environment: str = "production"
    groups: dict[str, GroupConfig] = field(default_factory=dict)

    @property
    def is_production(self) -> bool:
        return is_production_environment(self.environment)

    @property
    def use_cache(self) -> bool:
        """Whether discovery results should be cached."""
        if self.cache_enabled is None:
            return self.is_production
        return self.cache_enabled

    def group(self, name: str) -> GroupConfig | None:
        """Find a group by key, falling back to a match on location."""
        if name in self.groups:
            return self.groups[name]
        for group in self.groups.values():
            if group.location.strip("/") == name.strip("/"):
                return group
        return None


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override dict into base dict.

    Args:
        base: Base dictionary (defaults)
        override: Override dictionary (user config)

    Returns:
        Merged dictionary with override values taking precedence
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _resolve_path(path: Optional[str], base_dir: Path) -> Optional[str]:
    """Make a relative path absolute from base_dir."""
    if not path:
        return None

    path_obj = Path(path)
    if path_obj.is_absolute():
        return str(path_obj)
    return str((base_dir / path_obj).resolve())


def _parse_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}")
    except IOError as e:
        raise ConfigurationError(f"Cannot read config file: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return data


def load_config(
    config_path: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load raw configuration from YAML with environment variable overrides.

    Configuration Loading Order (later overrides earlier):
    1. Default values (DEFAULT_CONFIG)
    2. Config file (config_path, STRUCTURED_COMPONENTS_CONFIG or
       structured-components.yaml in base_dir)
    3. Environment variable overrides

    Args:
        config_path: Explicit config file path
        base_dir: Directory for default config lookup and relative paths
            (default: current working directory)

    Returns:
        Merged configuration dictionary (not yet validated)

    Raises:
        ConfigurationError: If an explicitly requested config file is
            missing or invalid
    """
    if base_dir is None:
        base_dir = Path.cwd()

    config = _deep_merge(DEFAULT_CONFIG, {})

    file_path = config_path or os.environ.get("STRUCTURED_COMPONENTS_CONFIG")

    if file_path:
        resolved = Path(_resolve_path(file_path, base_dir))
        if not resolved.exists():
            raise ConfigurationError(f"Config file not found: {file_path}")
        config = _deep_merge(config, _read_yaml(resolved))
        base_dir = resolved.parent
        logger.info(f"Loaded configuration from: {resolved}")
    else:
        default_path = base_dir / CONFIG_FILE
        if default_path.exists():
            config = _deep_merge(config, _read_yaml(default_path))
            logger.info(f"Loaded configuration from: {default_path}")
        else:
            logger.debug("No config file found, using defaults")

    cache_override = os.environ.get("STRUCTURED_COMPONENTS_CACHE")
    if cache_override:
        parsed = _parse_bool(cache_override)
        if parsed is None:
            logger.warning(
                f"Ignoring invalid STRUCTURED_COMPONENTS_CACHE value: {cache_override}"
            )
        else:
            config["cache_enabled"] = parsed

    env_override = os.environ.get("STRUCTURED_COMPONENTS_ENV")
    if env_override:
        config["environment"] = env_override

    for key in ("components-directory", "app-path", "cache_path"):
        if isinstance(config.get(key), str):
            config[key] = _resolve_path(config[key], base_dir)

    return config


def validate_config(config: Dict[str, Any]) -> Settings:
    """
    Validate a raw configuration dictionary.

    All violations are collected before raising, so a broken config file is
    reported in one pass.

    Args:
        config: Raw configuration from load_config()

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: Listing every violation found
    """
    violations: list[str] = []

    directory = config.get("components-directory")
    if not isinstance(directory, str) or not directory.strip():
        violations.append("components-directory must be configured")
        directory = ""

    app_path = config.get("app-path")
    if app_path is not None and not isinstance(app_path, str):
        violations.append("app-path must be a string")
        app_path = None
    if not app_path and directory:
        app_path = os.path.dirname(directory.rstrip("/"))

    namespace = config.get("namespace")
    if namespace is not None and not isinstance(namespace, str):
        violations.append("namespace must be a string")
        namespace = None
    if not namespace and app_path:
        namespace = os.path.basename(app_path.rstrip("/"))

    cache_enabled = config.get("cache_enabled")
    if cache_enabled is not None and not isinstance(cache_enabled, bool):
        violations.append("cache_enabled must be a boolean")
        cache_enabled = None

    cache_ttl = config.get("cache_ttl", DEFAULT_CACHE_TTL)
    if isinstance(cache_ttl, bool) or not isinstance(cache_ttl, int) or cache_ttl <= 0:
        violations.append("cache_ttl must be a positive integer")
        cache_ttl = DEFAULT_CACHE_TTL

    cache_path = config.get("cache_path") or str(Path.cwd() / DEFAULT_CACHE_PATH)
    environment = config.get("environment") or current_environment()

    groups: dict[str, GroupConfig] = {}
    raw_groups = config.get("groups")
    if raw_groups is None:
        raw_groups = {}
    if not isinstance(raw_groups, dict):
        violations.append("groups must be a mapping")
        raw_groups = {}

    for key, group in raw_groups.items():
        if not isinstance(group, dict):
            violations.append(f"groups.{key} must be a mapping")
            continue
        location = group.get("location")
        if not isinstance(location, str) or not location.strip():
            violations.append(f"groups.{key} must have a 'location' key")
            continue
        suffix = group.get("suffix")
        description = group.get("description")
        if suffix is not None and not isinstance(suffix, str):
            violations.append(f"groups.{key}.suffix must be a string")
            continue
        groups[str(key)] = GroupConfig(
            key=str(key),
            location=location,
            suffix=suffix or None,
            description=str(description) if description else None,
        )

    if violations:
        raise ConfigurationError(
            "Invalid structured-components configuration: " + "; ".join(violations),
            violations,
        )

    return Settings(
        components_directory=directory,
        app_path=app_path,
        namespace=namespace,
        cache_enabled=cache_enabled,
        cache_ttl=cache_ttl,
        cache_path=str(cache_path),
        environment=str(environment),
        groups=groups,
    )


def load_settings(
    config_path: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> Settings:
    """Load and validate configuration in one step."""
    return validate_config(load_config(config_path, base_dir))


def generate_config(
    components_directory: str = "app/Components",
    groups: Optional[Dict[str, Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """
    Generate a starter configuration.

    Args:
        components_directory: Directory scanned for component modules
        groups: Group definitions (default: a single "pages" group)

    Returns:
        Configuration dictionary ready for write_config()
    """
    if groups is None:
        groups = {
            "pages": {
                "location": "Pages",
                "suffix": "page",
                "description": "Full-page components",
            },
        }
    return {
        "components-directory": components_directory,
        "cache_ttl": DEFAULT_CACHE_TTL,
        "groups": {key: dict(value) for key, value in groups.items()},
    }


def write_config(config_path: Path, config: Dict[str, Any]) -> None:
    """Write configuration to a YAML file with a header comment."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    header = (
        "# Structured Components Configuration\n"
        "# Components under components-directory are registered at boot.\n"
        "# Each group maps a sub-directory to an optional tag suffix.\n\n"
    )
    body = yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
    config_path.write_text(header + body)

"""Boot entry point wiring configuration, discovery and registration."""

import logging
from pathlib import Path
from typing import Callable, Optional

from .cache import CacheStore, DiscoveryCache, MemoryCacheStore, SQLiteCacheStore
from .config import (
    Settings,
    current_environment,
    is_production_environment,
    load_config,
    validate_config,
)
from .errors import ConfigurationError
from .registrar import ComponentRegistrar, RegistrationSummary
from .registry import ComponentRegistry, get_registry
from .scanner import ComponentScanner, is_component_class

logger = logging.getLogger(__name__)


def build_discovery(
    settings: Settings,
    store: Optional[CacheStore] = None,
    is_valid_component: Optional[Callable[[str], bool]] = None,
) -> DiscoveryCache:
    """
    Create the scanner and discovery cache for a configuration.

    Without an explicit store, the SQLite store at settings.cache_path is
    used when caching is enabled; otherwise nothing is written to disk.
    """
    scanner = ComponentScanner(settings, is_valid_component or is_component_class)
    if store is None:
        if settings.use_cache:
            store = SQLiteCacheStore(Path(settings.cache_path))
        else:
            store = MemoryCacheStore()
    return DiscoveryCache(
        scanner, store, enabled=settings.use_cache, ttl=settings.cache_ttl
    )


def boot(
    settings: Optional[Settings] = None,
    registry: Optional[ComponentRegistry] = None,
    store: Optional[CacheStore] = None,
    is_valid_component: Optional[Callable[[str], bool]] = None,
    config_path: Optional[str] = None,
) -> RegistrationSummary:
    """
    Discover and register all configured components.

    Called once during application startup. Failures are logged and leave
    the application running without components. Configuration errors are
    re-raised outside production so misconfiguration surfaces early.

    Args:
        settings: Validated configuration (loaded from config_path or the
            default config file when omitted)
        registry: Component registry (default: process-wide registry)
        store: Cache store (default: SQLite store at settings.cache_path)
        is_valid_component: Component predicate (default: is_component_class)
        config_path: Config file used when settings is omitted

    Returns:
        RegistrationSummary (empty when registration failed in production)
    """
    environment = settings.environment if settings else current_environment()
    try:
        if settings is None:
            raw = load_config(config_path)
            environment = raw.get("environment") or environment
            settings = validate_config(raw)

        discovery = build_discovery(settings, store, is_valid_component)
        registrar = ComponentRegistrar(
            settings, discovery, registry if registry is not None else get_registry()
        )
        return registrar.register_all()

    except ConfigurationError as e:
        logger.error(f"Structured Components: Registration failed: {e}")

        if not is_production_environment(str(environment)):
            raise
        return RegistrationSummary()

    except Exception as e:
        logger.error(f"Structured Components: Registration failed: {e}")
        return RegistrationSummary()

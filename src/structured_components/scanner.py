"""
Component Scanner - Directory-Based Component Discovery

Scans a components directory (and one level of sub-directories) for Python
modules, derives tag and class names from their paths, and keeps only modules
that define a concrete Component subclass named after the file.
"""

import glob
import importlib
import inspect
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Callable

from .component import Component
from .config import Settings
from .errors import ResourceNotFound
from .paths import (
    SEPARATOR,
    SOURCE_EXTENSION,
    path_to_class_name,
    relative_directory,
    resolve_path,
    tag_from_title,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentRecord:
    """A component module found by the scanner."""

    path: str
    base_name: str  # UserProfile.py
    name: str  # UserProfile
    directory: str  # relative to the scanned directory, no outer separators
    title: str  # Admin/UserProfile
    tag: str  # admin.-user-profile (unsuffixed)
    class_name: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComponentRecord":
        return cls(**{key: data[key] for key in cls.__dataclass_fields__})


def resolve_class(class_name: str) -> type:
    """
    Import the class behind a derived class name.

    ``app.Components.UserProfile`` resolves to the ``UserProfile`` attribute
    of module ``app.Components.UserProfile``. A conventional
    ``module.ClassName`` path is tried when that module does not exist.

    Raises:
        ImportError: If no module can be imported
        AttributeError: If the module does not define the class
    """
    attribute = class_name.rsplit(".", 1)[-1]
    try:
        module = importlib.import_module(class_name)
    except ModuleNotFoundError as e:
        module_name, _, attribute = class_name.rpartition(".")
        if not module_name or e.name != class_name:
            raise
        module = importlib.import_module(module_name)
    return getattr(module, attribute)


def is_component_class(class_name: str, base: type = Component) -> bool:
    """
    Check whether a class name resolves to a concrete component class.

    Resolution failures are treated as "not a component".

    Args:
        class_name: Dotted class name derived from a file path
        base: Required base class

    Returns:
        True for non-abstract, instantiable strict subclasses of base
    """
    try:
        cls = resolve_class(class_name)
    except Exception as e:
        logger.debug(f"Structured Components: Invalid component class {class_name}: {e}")
        return False

    if not inspect.isclass(cls) or cls is base or not issubclass(cls, base):
        return False

    return not inspect.isabstract(cls)


def log_scan_failure(directory: str | None, error: Exception) -> None:
    """Log a failed scan: a missing directory warns, anything else is an error."""
    if isinstance(error, ResourceNotFound):
        logger.warning(f"Structured Components: {error}")
    else:
        logger.error(
            f"Structured Components: Error scanning directory {directory or 'root'}: {error}"
        )


class ComponentScanner:
    """Finds component modules under the configured components directory."""

    def __init__(
        self,
        settings: Settings,
        is_valid_component: Callable[[str], bool] = is_component_class,
    ):
        """
        Initialize scanner.

        Args:
            settings: Validated configuration
            is_valid_component: Predicate deciding whether a class name is a
                registrable component
        """
        self.settings = settings
        self.is_valid_component = is_valid_component

    def scan(self, directory: str | None = None) -> list[ComponentRecord]:
        """
        Scan a directory for components.

        Args:
            directory: Group location relative to the components directory
                (None scans the components directory itself)

        Returns:
            Component records in glob order; empty if the directory is missing
            or scanning fails
        """
        try:
            return self.find(directory)
        except Exception as e:
            log_scan_failure(directory, e)
            return []

    def find(self, directory: str | None = None) -> list[ComponentRecord]:
        """
        Scan a directory for components, raising on failure.

        Only the directory itself and its direct sub-directories are searched.

        Raises:
            ResourceNotFound: If the directory does not exist
        """
        path = resolve_path(self.settings.components_directory, directory)

        if not os.path.isdir(path.rstrip(SEPARATOR)):
            raise ResourceNotFound(f"Directory does not exist: {path}")

        files = sorted(glob.glob(f"{glob.escape(path)}*{SOURCE_EXTENSION}"))
        files_from_subdirectories = sorted(
            glob.glob(f"{glob.escape(path)}*{SEPARATOR}*{SOURCE_EXTENSION}")
        )

        records = [
            self._file_info(file_path, path)
            for file_path in [*files, *files_from_subdirectories]
            if self._is_valid_source_file(file_path)
        ]
        return [r for r in records if self.is_valid_component(r.class_name)]

    def _is_valid_source_file(self, path: str) -> bool:
        """Existing, readable, non-dunder Python module."""
        return (
            os.path.isfile(path)
            and path.endswith(SOURCE_EXTENSION)
            and not os.path.basename(path).startswith("__")
            and os.access(path, os.R_OK)
        )

    def _file_info(self, path: str, base: str) -> ComponentRecord:
        """Derive record metadata from a file path."""
        base_name = os.path.basename(path)
        name = os.path.splitext(base_name)[0]
        directory = relative_directory(path, base)
        title = f"{directory}{SEPARATOR}{name}" if directory else name

        return ComponentRecord(
            path=path,
            base_name=base_name,
            name=name,
            directory=directory,
            title=title,
            tag=tag_from_title(title),
            class_name=path_to_class_name(
                path, self.settings.app_path, self.settings.namespace
            ),
        )

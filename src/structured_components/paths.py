"""Path and name derivation for component discovery.

Everything in this module is a pure string transform: nothing touches the
filesystem or imports code, so the same functions back both boot-time
registration and the CLI preview.

Paths are handled as strings with ``/`` separators. Directory results always
carry exactly one trailing separator so they can be concatenated with glob
patterns and file names directly.
"""

import os
import re

from .errors import ConfigurationError

SEPARATOR = "/"
SOURCE_EXTENSION = ".py"
NAMESPACE_SEPARATOR = "."


def _normalize(path: str) -> str:
    """Use forward slashes regardless of platform."""
    if os.sep != SEPARATOR:
        path = path.replace(os.sep, SEPARATOR)
    return path


def root_path(directory: str | None) -> str:
    """
    Return the configured components directory with one trailing separator.

    Args:
        directory: Configured components directory

    Returns:
        Normalized directory path ending in ``/``

    Raises:
        ConfigurationError: If the directory is not configured
    """
    if not directory or not str(directory).strip():
        raise ConfigurationError("Components directory not configured")

    return _normalize(str(directory)).rstrip(SEPARATOR) + SEPARATOR


def resolve_path(root: str | None, subdirectory: str | None = None) -> str:
    """
    Resolve an optional sub-location under the components directory.

    Args:
        root: Configured components directory
        subdirectory: Group location relative to the root (optional)

    Returns:
        Absolute directory path ending in ``/``
    """
    path = root_path(root)

    if subdirectory:
        trimmed = _normalize(subdirectory).strip(SEPARATOR)
        if trimmed:
            path = f"{path}{trimmed}{SEPARATOR}"

    return path


def relative_directory(file_path: str, base: str) -> str:
    """Directory of ``file_path`` relative to ``base``, without outer separators."""
    directory = _normalize(os.path.dirname(file_path)) + SEPARATOR
    return directory.replace(base, "", 1).strip(SEPARATOR)


def path_to_class_name(path: str, app_path: str, namespace: str) -> str:
    """
    Convert a component file path into a dotted class name.

    The application source root is stripped, the namespace prepended, path
    separators become dots and the extension is dropped:

        /srv/project/app/Components/UserProfile.py -> app.Components.UserProfile

    Args:
        path: Absolute path of the component module
        app_path: Application source root
        namespace: Import name of the application source root

    Returns:
        Dotted class name (module path named after the class it defines)
    """
    relative = _normalize(path)
    prefix = _normalize(app_path).rstrip(SEPARATOR) if app_path else ""

    if prefix and relative.startswith(prefix + SEPARATOR):
        relative = relative[len(prefix) :]

    relative = relative.strip(SEPARATOR)
    if relative.endswith(SOURCE_EXTENSION):
        relative = relative[: -len(SOURCE_EXTENSION)]

    parts = [namespace.strip(NAMESPACE_SEPARATOR)] if namespace else []
    parts.extend(part for part in relative.split(SEPARATOR) if part)
    return NAMESPACE_SEPARATOR.join(parts)


def kebab(value: str) -> str:
    """
    Convert a StudlyCase or camelCase string to kebab-case.

    Words separated by whitespace are capitalized and joined first, then a
    hyphen is inserted before every upper-case letter that follows another
    character:

        UserProfile       -> user-profile
        user profile      -> user-profile
        Admin.UserProfile -> admin.-user-profile
    """
    value = re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), value)
    value = re.sub(r"\s+", "", value)
    return re.sub(r"(.)(?=[A-Z])", r"\1-", value).lower()


def tag_from_title(title: str) -> str:
    """Registration tag for a component title (``Admin/UserProfile``)."""
    return kebab(_normalize(title).replace(SEPARATOR, "."))


def final_tag(tag: str, suffix: str | None = None) -> str:
    """Append a group suffix to a tag, separated by a hyphen."""
    if suffix:
        return f"{tag}-{suffix}"
    return tag

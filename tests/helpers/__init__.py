"""Test helpers for structured-components.

Provides module templates and a writer for building component fixtures on
disk:
    - VALID_COMPONENT: concrete Component subclass
    - ABSTRACT_COMPONENT: Component subclass with render() left abstract
    - UNRELATED_CLASS: class that does not extend Component
    - write_module(): write a template under an app directory
"""

from .components import (
    ABSTRACT_COMPONENT,
    APP_PACKAGE,
    UNRELATED_CLASS,
    VALID_COMPONENT,
    purge_app_modules,
    write_module,
)

__all__ = [
    "ABSTRACT_COMPONENT",
    "APP_PACKAGE",
    "UNRELATED_CLASS",
    "VALID_COMPONENT",
    "purge_app_modules",
    "write_module",
]

"""
Component registry for tag-based lookup.

Maps registration tags to dotted class names. The registrar receives a
registry instance explicitly; get_registry() provides the process-wide
default used by boot() when the host application does not supply one.
"""

import logging
from typing import Dict, Optional

from .errors import RegistrationConflict

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Registry of components by tag"""

    def __init__(self):
        self._components: Dict[str, str] = {}

    def has_component(self, tag: str) -> bool:
        return tag in self._components

    def component(self, tag: str, class_name: str) -> None:
        """Register a component class under a tag.

        Raises:
            RegistrationConflict: If the tag is already registered
        """
        if tag in self._components:
            raise RegistrationConflict(tag, self._components[tag])

        self._components[tag] = class_name
        logger.debug(f"Registered component {tag} -> {class_name}")

    def get(self, tag: str) -> Optional[str]:
        """Get the class name registered for a tag"""
        return self._components.get(tag)

    def tags(self) -> list[str]:
        """List all registered tags in registration order"""
        return list(self._components.keys())

    def clear(self) -> None:
        self._components.clear()

    def __contains__(self, tag: object) -> bool:
        return tag in self._components

    def __len__(self) -> int:
        return len(self._components)


_default_registry = ComponentRegistry()


def get_registry() -> ComponentRegistry:
    """Get the process-wide component registry"""
    return _default_registry

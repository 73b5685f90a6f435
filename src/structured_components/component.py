"""Base class for discoverable components."""

from abc import ABC, abstractmethod
from typing import Any


class Component(ABC):
    """A renderable UI component.

    Concrete subclasses found under the configured components directory are
    registered automatically at boot. Abstract subclasses are skipped, which
    makes them the place to share behaviour between components.
    """

    # Template rendered by render(); None for inline components
    template_name: str | None = None

    def __init__(self, **props: Any):
        self.props = props

    @abstractmethod
    def render(self) -> str:
        """Return the rendered markup for this component."""
        raise NotImplementedError

    @classmethod
    def view_name(cls) -> str:
        """Dotted template name, defaulting to ``components.<tag>``."""
        if cls.template_name:
            return cls.template_name

        from .paths import tag_from_title

        return f"components.{tag_from_title(cls.__name__)}"

"""
Component Registrar - Boot-Time Registration

Registers every discovered component with the component registry under its
tag, suffixed with the group suffix when the component belongs to a group.
"""

import logging
from dataclasses import dataclass

from .cache import DiscoveryCache
from .config import Settings
from .paths import final_tag
from .registry import ComponentRegistry

logger = logging.getLogger(__name__)


@dataclass
class RegistrationSummary:
    """Outcome of a registration pass."""

    registered: int = 0
    skipped: int = 0
    failed: int = 0

    def add(self, other: "RegistrationSummary") -> None:
        self.registered += other.registered
        self.skipped += other.skipped
        self.failed += other.failed


class ComponentRegistrar:
    """Registers discovered components for every configured group."""

    def __init__(
        self,
        settings: Settings,
        discovery: DiscoveryCache,
        registry: ComponentRegistry,
    ):
        self.settings = settings
        self.discovery = discovery
        self.registry = registry

    def register_all(self) -> RegistrationSummary:
        """
        Register components from every group, or from the root directory
        when no groups are configured.

        Groups are processed in configuration order. A tag that is already
        registered keeps its first registration.

        Returns:
            Combined RegistrationSummary
        """
        summary = RegistrationSummary()

        if not self.settings.groups:
            logger.info(
                "Structured Components: No groups configured, registering "
                "components from root directory"
            )
            summary.add(self.register_location())
            return summary

        for group in self.settings.groups.values():
            summary.add(self.register_location(group.location, group.suffix))

        return summary

    def register_location(
        self, location: str | None = None, suffix: str | None = None
    ) -> RegistrationSummary:
        """Register the components of one location."""
        summary = RegistrationSummary()
        records = self.discovery.get_or_compute(location)

        if not records:
            logger.info(
                f"Structured Components: No components found in location: {location or 'root'}"
            )
            return summary

        for record in records:
            tag = final_tag(record.tag, suffix)
            try:
                if self.registry.has_component(tag):
                    logger.warning(
                        f"Structured Components: Component '{tag}' already registered, skipping"
                    )
                    summary.skipped += 1
                    continue

                self.registry.component(tag, record.class_name)
                summary.registered += 1
                logger.debug(
                    f"Structured Components: Registered component '{tag}' -> {record.class_name}"
                )
            except Exception as e:
                summary.failed += 1
                logger.error(
                    f"Structured Components: Failed to register component {record.class_name}: {e}"
                )

        failed = f", {summary.failed} failed" if summary.failed else ""
        logger.info(f"Structured Components: Registered {summary.registered} components{failed}")
        return summary

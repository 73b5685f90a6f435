"""Exception types raised by structured-components."""


class StructuredComponentsError(Exception):
    """Base class for all structured-components errors."""

    pass


class ConfigurationError(StructuredComponentsError):
    """Raised when configuration is missing, invalid or cannot be loaded."""

    def __init__(self, message: str, violations: list[str] | None = None):
        super().__init__(message)
        self.violations = violations or []


class ResourceNotFound(StructuredComponentsError):
    """Raised when a component directory or file does not exist."""

    pass


class InvalidComponent(StructuredComponentsError):
    """Raised when a class name does not resolve to a usable component."""

    pass


class RegistrationConflict(StructuredComponentsError):
    """Raised when a tag is already registered with the component registry."""

    def __init__(self, tag: str, existing: str):
        super().__init__(f"Component '{tag}' is already registered to {existing}")
        self.tag = tag
        self.existing = existing

"""graph-mapper exception hierarchy.

Data-shape problems are policy-gated (strict vs lenient). Errors raised from
user extensions and from destination construction are always fatal.
"""

from __future__ import annotations


class GraphMapperError(Exception):
    """Base exception for all graph-mapper errors."""


# --- Configuration ---


class ConfigurationError(GraphMapperError):
    """Raised when a mapper is configured with invalid arguments."""


# --- Mapping ---


class MappingError(GraphMapperError):
    """Base for mapping errors."""


class StrictModeViolation(MappingError):
    """Raised in strict mode for any unmapped field or type mismatch."""


class InstantiationError(MappingError):
    """Raised when a destination instance cannot be constructed."""

    def __init__(self, target_class: type, detail: str) -> None:
        self.target_class = target_class
        super().__init__(f"Cannot instantiate {target_class.__qualname__}: {detail}")


class ContainerTypeError(MappingError):
    """Raised when a container value has no parameterized destination type."""

    def __init__(self, declared_type: object, detail: str) -> None:
        self.declared_type = declared_type
        super().__init__(f"Unsupported container destination {declared_type!r}: {detail}")

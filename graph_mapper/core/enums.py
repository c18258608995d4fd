"""Value and container kind enumerations."""

from __future__ import annotations

from enum import Enum


class ValueKind(Enum):
    """Closed set of value kinds the dispatcher routes on."""

    NATIVE = "native"
    ENUM = "enum"
    COLLECTION = "collection"
    MAPPING = "mapping"
    COMPOSITE = "composite"


class ContainerKind(Enum):
    """Supported collection kinds; the output always mirrors the input."""

    SET = "set"
    SEQUENCE = "sequence"
    QUEUE = "queue"

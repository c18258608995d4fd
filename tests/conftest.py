"""Shared test fixtures."""

from __future__ import annotations

import pytest

from graph_mapper.core.config import MapperConfig
from graph_mapper.mapping.engine import Mapper


@pytest.fixture
def mapper() -> Mapper:
    """Lenient mapper with default suffixes."""
    return Mapper()


@pytest.fixture
def strict_mapper() -> Mapper:
    """Strict mapper with default suffixes."""
    return Mapper(MapperConfig(strict=True))

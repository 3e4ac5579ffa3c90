"""Shared pytest fixtures for the specdoc test suite."""

from __future__ import annotations

import typing as typ

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> typ.Iterator[None]:
    """Restore structlog defaults so CLI tests do not leak captured streams."""
    yield
    structlog.reset_defaults()

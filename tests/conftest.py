"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from excel_io import testing as testing_mod
from excel_io.schema import describe


@pytest.fixture(autouse=True)
def _restore_hooks() -> Generator[None, None, None]:
    """Restore excel_io hooks after each test."""
    yield
    testing_mod.reset_hooks()


@pytest.fixture(autouse=True)
def _clear_descriptor_cache() -> Generator[None, None, None]:
    """Drop cached descriptors so each test describes types afresh."""
    yield
    describe.cache_clear()


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests that write and read real workbooks",
    )

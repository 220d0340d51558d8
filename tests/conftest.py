"""Shared pytest fixtures for sqlchain unit and integration tests."""
from __future__ import annotations

import pytest

from sqlchain import BuilderOptions, Statement


@pytest.fixture()
def stmt() -> Statement:
    """Fresh statement with default (strict) options."""
    return Statement()


@pytest.fixture()
def lenient() -> Statement:
    """Statement that logs clause reuse instead of raising."""
    return Statement(options=BuilderOptions(strict=False))


"""Shared pytest fixtures for propcheck tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from propcheck.services.properties import PropertyValidationService
from propcheck.services.schema_cache import TypeSchemaCache


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def schemas() -> TypeSchemaCache:
    return TypeSchemaCache()


@pytest.fixture
def validator(schemas: TypeSchemaCache) -> PropertyValidationService:
    """Validation service with fresh caches."""
    return PropertyValidationService(schemas=schemas)


@pytest.fixture
def _restore_logging() -> Generator[None]:
    """Restore root and propcheck logger state after a test reconfigures logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pc = logging.getLogger("propcheck")
    pc_level = pc.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pc.setLevel(pc_level)

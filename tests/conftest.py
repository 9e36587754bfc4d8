"""Pytest configuration and shared fixtures for the adoc2html test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging

import pytest
from utils import RecordingBook, make_context

from adoc2html.renderers.base import RenderContext
from adoc2html.renderers.franklin import FranklinConverter


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def book() -> RecordingBook:
    """Provide a fresh recording book."""
    return RecordingBook()


@pytest.fixture
def franklin() -> FranklinConverter:
    """Provide a Franklin converter with the default HTML5 fallback."""
    return FranklinConverter()


@pytest.fixture
def ctx(franklin: FranklinConverter, book: RecordingBook) -> RenderContext:
    """Provide a root context for the Franklin converter under ``guide/intro.adoc``."""
    return make_context(franklin, book)


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture adoc2html log records down to DEBUG level."""
    caplog.set_level(logging.DEBUG, logger="adoc2html")
    return caplog


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo root logger changes made by CLI entry points under test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers

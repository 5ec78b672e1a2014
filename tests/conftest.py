"""
Pytest configuration and shared fixtures

This file contains test fixtures that can be used across all tests.
Fixtures are reusable components that set up test preconditions.

Learn more: https://docs.pytest.org/en/stable/fixture.html
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from services.batch_processor.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Keep tests independent of the developer's shell and .env file.

    Clears the BATCH_* override variables so every test starts from the
    settings file and built-in defaults.
    """
    for name in (
        "BATCH_PROCESSOR_CONFIG",
        "BATCH_INPUT_PATH",
        "BATCH_OUTPUT_PATH",
        "BATCH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers installed by configure_logging after each test."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture(scope="function")
def sample_items() -> list[Any]:
    """
    Provide a mixed batch of items covering every JSON value kind.

    Scope: function (created fresh for each test)

    Returns:
        list: Sample input items
    """
    return [
        "abc",
        1,
        2.5,
        {"name": "Ada", "tags": ["x", "y"]},
        ["a", "b"],
        True,
        None,
    ]


@pytest.fixture(scope="function")
def write_input(tmp_path: Path) -> Callable[[Any], Path]:
    """
    Provide a helper that writes an input file under tmp_path.

    Strings are written verbatim; any other value is JSON-encoded.

    Returns:
        Callable taking the content and returning the file path
    """
    def _write(content: Any, name: str = "input.json") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# Mark tests based on their type for selective running
def pytest_configure(config):
    """
    Register custom pytest markers.

    This allows us to run specific test categories:
    - pytest -m unit        (run only unit tests)
    - pytest -m integration (run only integration tests)
    - pytest -m "not slow"  (skip slow tests)
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (isolated, fast)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (runs the CLI end to end)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (>1 second)"
    )

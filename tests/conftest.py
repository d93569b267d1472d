"""Shared test fixtures for zodapi.

Provides reusable fixtures for loading document fixtures, isolating the
configuration environment, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from zodapi.output import OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stderr at creation time.
    When Typer's CliRunner redirects that stream during a test and the test
    finishes, the cached reference becomes stale ("I/O operation on closed
    file").  Resetting forces a fresh manager to be created on next use.
    The ``zodapi`` logger is restored as well, since the CLI
    callback installs a handler on it and stops propagation.
    """
    yield
    reset_output()
    logger = logging.getLogger("zodapi")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Raw document fixtures (plain dicts loaded from fixture files)
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_doc() -> dict[str, Any]:
    """Load the petstore OpenAPI 3.0 document."""
    with open(FIXTURES_DIR / "petstore_3.0.json") as f:
        return json.load(f)


@pytest.fixture
def composition_doc() -> dict[str, Any]:
    """Load the allOf / oneOf composition document (YAML)."""
    with open(FIXTURES_DIR / "composition.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def swagger_doc() -> dict[str, Any]:
    """Load the Swagger 2.0 document."""
    with open(FIXTURES_DIR / "swagger_2.0.json") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Clears all ZODAPI_* environment variables and changes the working
    directory to tmp_path so that no ``zodapi.json`` from the real working
    directory is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in ["ZODAPI_OUT_DIR", "ZODAPI_BASE_URL", "ZODAPI_PACKAGE"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless output manager for tests that don't care about output."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()

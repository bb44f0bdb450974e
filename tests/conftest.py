"""Shared pytest fixtures for svggloo tests.

Fixtures are organized by category:
- Path fixtures: sample templates copied into a temporary directory
- Configuration fixtures: config dictionaries for various scenarios
- Process fixtures: fake process runner for exporter tests
"""

import logging
import shutil
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from svggloo.exporters import reset_registry
from tests.fixtures import CITIES_TEMPLATE, TEMPLATES_DIR, FakeRunner

# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_globals() -> Iterator[None]:
    """Reset the exporter registry and CLI log handlers between tests."""
    reset_registry()
    yield
    reset_registry()
    logging.getLogger("svggloo").handlers.clear()


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def templates_dir() -> Path:
    """Return the path to the sample template fixtures."""
    return TEMPLATES_DIR


@pytest.fixture
def cities_template(tmp_path: Path) -> Path:
    """Copy the cities template and its CSV into a temporary directory."""
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    shutil.copy(CITIES_TEMPLATE, work_dir)
    shutil.copy(CITIES_TEMPLATE.with_suffix(".csv"), work_dir)
    return work_dir / CITIES_TEMPLATE.name


@pytest.fixture
def make_template(tmp_path: Path):
    """Factory writing a template and its companion CSV.

    Usage:
        template = make_template("This is {{city}}.", "city\\nAustin\\n")
    """

    def _make(
        source: str,
        data: str,
        name: str = "template.svg",
    ) -> Path:
        template_path = tmp_path / name
        template_path.write_text(source, encoding="utf-8")
        template_path.with_suffix(".csv").write_text(data, encoding="utf-8")
        return template_path

    return _make


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created output directory."""
    return tmp_path / "output"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid svggloo configuration."""
    return {
        "output": {
            "dir": "renders",
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete svggloo configuration with all options."""
    return {
        "output": {
            "dir": "renders",
        },
        "naming": {
            "fields": ["country", "state", "city"],
            "separator": "_",
        },
        "export": {
            "target": "cairosvg",
            "timeout": 60,
        },
    }


# =============================================================================
# Process Fixtures
# =============================================================================


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Return a process runner that records calls and always succeeds."""
    return FakeRunner()

"""Pytest configuration and shared fixtures."""

import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from checklist.commands import CommandDispatcher  # noqa: E402
from checklist.config import CHECKLIST_FILE_ENV  # noqa: E402
from checklist.storage import ChecklistStore  # noqa: E402


@pytest.fixture
def checklist_path(tmp_path):
    """An existing, empty checklist file."""
    path = tmp_path / "checklist"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def store(checklist_path):
    return ChecklistStore(checklist_path)


@pytest.fixture
def today():
    return date(2024, 1, 10)


@pytest.fixture
def dispatcher(store, today):
    """Dispatcher with a fixed calendar date."""
    return CommandDispatcher(store, clock=lambda: today)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's real config and checklist."""
    monkeypatch.delenv(CHECKLIST_FILE_ENV, raising=False)
    monkeypatch.setattr(
        "click.get_app_dir", lambda app_name, **kwargs: str(tmp_path / "appdata")
    )

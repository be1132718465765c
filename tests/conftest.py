import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keeps CADENCE_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("CADENCE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and the store
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def store_dir(mock_home, monkeypatch):
    """Points the schedule store at a temp dir."""
    d = mock_home / "store"
    monkeypatch.setenv("CADENCE_STORE_DIR", str(d))
    return d

"""Shared fixtures for qsave tests."""

from __future__ import annotations

import pytest

from qsave.store import QueryStore, open_store


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real ~/qsave.db, config file and editor."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("QSAVE_CONFIG", str(home / "config.toml"))
    monkeypatch.delenv("QSAVE_DB", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    return home


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "qsave.db"


@pytest.fixture
def store(db_path):
    """Open QueryStore on an empty temp database."""
    with open_store(db_path) as s:
        yield s


@pytest.fixture
def populated_store(store: QueryStore):
    """Store with a few queries already saved."""
    store.insert("greet", "SELECT 1;")
    store.insert("users", "SELECT * FROM users WHERE active = 1;")
    store.insert("cleanup", "DELETE FROM sessions WHERE expired;")
    return store

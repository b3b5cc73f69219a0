"""Shared fixtures: every test gets its own temporary database."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from monthlies.store.repository import ExpenseRepository


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "expenses.db"


@pytest.fixture
def repository(db_path: Path) -> Iterator[ExpenseRepository]:
    repo = ExpenseRepository.open(db_path)
    yield repo
    repo.close()


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config, data and database locations into tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("MONTHLIES_DB", raising=False)
    return tmp_path

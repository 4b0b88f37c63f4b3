"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from proc_query.core.connection import ConnectionConfig


class FakeCursor:
    """Minimal DB-API cursor over in-memory rows."""

    def __init__(self, columns: list[str] | None, rows: list[Any]) -> None:
        self.description = None if columns is None else [(c, None) for c in columns]
        self._rows = list(rows)
        self.closed = False
        self.fetchone_calls = 0

    def fetchone(self) -> Any:
        self.fetchone_calls += 1
        return self._rows.pop(0) if self._rows else None

    def fetchall(self) -> list[Any]:
        rows, self._rows = self._rows, []
        return rows

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_cursor():
    """Build a FakeCursor: make_cursor(["id", "name"], [(1, "a")])."""

    def _make(columns: list[str] | None, rows: list[Any]) -> FakeCursor:
        return FakeCursor(columns, rows)

    return _make


@pytest.fixture
def procs_dir(tmp_path: Path) -> Path:
    """Temporary directory for procedure files."""
    return tmp_path / "procs"


@pytest.fixture
def write_proc(procs_dir: Path):
    """Helper to write procedure bodies into the temp directory.

    Usage:
        write_proc("GetUser.sql", "SELECT * FROM users WHERE id = :id")
    """

    def _write(relative_path: str, content: str) -> Path:
        file_path = procs_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def sqlite_config(tmp_path: Path, procs_dir: Path) -> ConnectionConfig:
    """SQLite file database with file-backed procedures."""
    return ConnectionConfig(
        driver="sqlite",
        database=str(tmp_path / "app.db"),
        procedures_dir=procs_dir,
    )

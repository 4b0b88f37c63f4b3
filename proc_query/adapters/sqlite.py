"""SQLite adapter - stdlib sqlite3 with file-backed procedures.

SQLite has no stored procedures, so procedure bodies are read from the
``procedures_dir`` of the connection config (see ProcedureRegistry). Bodies
use ``:name`` placeholders bound from the parameter bag.

Registries are cached per directory and reloaded only when a ``.sql`` file
is added, removed or modified.
"""

from __future__ import annotations

import sqlite3
from functools import lru_cache
from pathlib import Path
from typing import Any

from proc_query.core.connection import ConnectionConfig
from proc_query.core.enums import ExpectedRows
from proc_query.core.registry import ProcedureRegistry


def _fingerprint(root_dir: Path) -> tuple[tuple[str, int], ...]:
    if not root_dir.exists():
        return ()
    return tuple(
        (str(path), path.stat().st_mtime_ns) for path in sorted(root_dir.rglob("*.sql"))
    )


@lru_cache(maxsize=32)
def _cached_registry(
    root_dir: Path, fingerprint: tuple[tuple[str, int], ...]
) -> ProcedureRegistry:
    return ProcedureRegistry(root_dir)


def load_registry(procedures_dir: Path | str) -> ProcedureRegistry:
    """Return the registry for *procedures_dir*, reusing an unchanged one."""
    root_dir = Path(procedures_dir).resolve()
    return _cached_registry(root_dir, _fingerprint(root_dir))


class SqliteAdapter:
    """SQLite adapter using stdlib sqlite3."""

    def __init__(self) -> None:
        self._registry: ProcedureRegistry | None = None

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        if config.procedures_dir is not None:
            self._registry = load_registry(config.procedures_dir)
        kwargs: dict[str, Any] = {"isolation_level": None}
        if config.connect_timeout is not None:
            kwargs["timeout"] = config.connect_timeout
        return sqlite3.connect(config.database, **kwargs)

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()

    def call_procedure(
        self,
        connection: sqlite3.Connection,
        procedure: str,
        params: dict[str, Any],
        expected: ExpectedRows,
    ) -> sqlite3.Cursor | None:
        if self._registry is None:
            raise sqlite3.OperationalError(
                "no procedures directory configured for this connection"
            )
        cursor = connection.execute(self._registry.get(procedure), params)
        if expected is ExpectedRows.NONE:
            cursor.close()
            return None
        return cursor

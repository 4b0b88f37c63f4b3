"""PostgreSQL adapter using psycopg (v3+).

Row-returning calls go through ``SELECT * FROM proc(name => value, ...)`` so
set-returning functions work. Calls expecting no result use ``CALL``; when
the routine is a function rather than a procedure (PostgreSQL answers
``CALL`` with "is not a procedure"), the call is retried as
``SELECT proc(...)``. Arguments use PostgreSQL named notation, so bag field
names must match the routine's parameter names.
"""

from __future__ import annotations

from typing import Any

from proc_query.core.connection import ConnectionConfig
from proc_query.core.enums import ExpectedRows
from proc_query.core.params import is_identifier


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    if config.connect_timeout is not None:
        parts.append(f"connect_timeout={config.connect_timeout}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


def _arguments(procedure: str, params: dict[str, Any]) -> str:
    for name in params:
        if not is_identifier(name):
            raise ValueError(f"Invalid parameter name for {procedure}: {name!r}")
    return ", ".join(f"{name} => %({name})s" for name in params)


def build_call(procedure: str, params: dict[str, Any], expected: ExpectedRows) -> str:
    """Build the call statement with ``%(name)s`` placeholders."""
    arguments = _arguments(procedure, params)
    if expected is ExpectedRows.NONE:
        return f"CALL {procedure}({arguments})"
    return f"SELECT * FROM {procedure}({arguments})"


def build_function_call(procedure: str, params: dict[str, Any]) -> str:
    """Build ``SELECT proc(...)`` for a function invoked for its side effects."""
    return f"SELECT {procedure}({_arguments(procedure, params)})"


class PostgresqlAdapter:
    """PostgreSQL adapter using psycopg (v3+)."""

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config), autocommit=True, **config.extra)

    def close(self, connection: Any) -> None:
        connection.close()

    def call_procedure(
        self,
        connection: Any,
        procedure: str,
        params: dict[str, Any],
        expected: ExpectedRows,
    ) -> Any:
        cursor = connection.cursor()
        if expected is not ExpectedRows.NONE:
            cursor.execute(build_call(procedure, params, expected), params)
            return cursor

        from psycopg.errors import WrongObjectType

        try:
            cursor.execute(build_call(procedure, params, expected), params)
        except WrongObjectType:
            # autocommit: the failed CALL left no aborted transaction behind
            cursor.execute(build_function_call(procedure, params), params)
        finally:
            cursor.close()
        return None

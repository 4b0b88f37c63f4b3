"""Oracle adapter using oracledb.

Parameters are bound by name through ``callproc(keyword_parameters=...)``.
Result sets are read from the procedure's implicit results
(``DBMS_SQL.RETURN_RESULT``).
"""

from __future__ import annotations

from typing import Any

from proc_query.adapters.results import first_result
from proc_query.core.connection import ConnectionConfig
from proc_query.core.enums import ExpectedRows


def _build_dsn(config: ConnectionConfig) -> str:
    """Build an Oracle DSN string from config fields (host:port/database)."""
    if config.host is None:
        return config.database
    port = config.port or 1521
    return f"{config.host}:{port}/{config.database}"


class OracleAdapter:
    """Oracle adapter using oracledb."""

    def connect(self, config: ConnectionConfig) -> Any:
        import oracledb

        kwargs: dict[str, Any] = dict(config.extra)
        if config.connect_timeout is not None:
            kwargs["tcp_connect_timeout"] = config.connect_timeout
        connection = oracledb.connect(
            user=config.user, password=config.password, dsn=_build_dsn(config), **kwargs
        )
        connection.autocommit = True
        return connection

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
        cursor.callproc(procedure, keyword_parameters=params)
        if expected is ExpectedRows.NONE:
            cursor.close()
            return None
        # Only the first result set is mapped.
        return first_result(cursor.getimplicitresults(), cursor)

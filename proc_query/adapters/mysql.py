"""MySQL adapter using mysql-connector-python.

MySQL binds procedure arguments by position only, so the bag's fields are
passed in declaration order and must line up with the procedure's
parameter list.
"""

from __future__ import annotations

from typing import Any

from proc_query.adapters.results import first_result
from proc_query.core.connection import ConnectionConfig
from proc_query.core.enums import ExpectedRows


class MysqlAdapter:
    """MySQL adapter using mysql-connector-python."""

    def connect(self, config: ConnectionConfig) -> Any:
        import mysql.connector

        kwargs: dict[str, Any] = dict(config.extra)
        if config.connect_timeout is not None:
            kwargs["connection_timeout"] = config.connect_timeout
        return mysql.connector.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
            autocommit=True,
            **kwargs,
        )

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
        cursor.callproc(procedure, tuple(params.values()))
        if expected is ExpectedRows.NONE:
            cursor.close()
            return None
        # Only the first result set is mapped.
        return first_result(cursor.stored_results(), cursor)

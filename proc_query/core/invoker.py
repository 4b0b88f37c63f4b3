"""Stored-procedure invoker.

The invoker binds a parameter bag by field name, calls the procedure through
the backend adapter on a fresh connection, materializes the result into raw
rows, and maps them onto the requested type.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from proc_query.core.connection import ConnectionConfig, ConnectionManager
from proc_query.core.enums import ExpectedRows
from proc_query.core.exceptions import ProcedureError
from proc_query.core.materializer import RawRow, materialize
from proc_query.core.params import bind_params, check_procedure_name
from proc_query.mapping.model import ObjectMapper
from proc_query.mapping.protocol import Mapper

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConnectionDescriptor = str | ConnectionConfig


def _mapper_for(target: type[T] | Mapper[T]) -> Mapper[T]:
    if isinstance(target, type):
        return ObjectMapper(target)
    return target


class ProcedureInvoker:
    """Synchronous stored-procedure invoker.

    Every call opens its own connection and closes it before returning,
    whether the call succeeds or fails. Nothing is retried.

    Args:
        manager_factory: Builds the connection manager for a descriptor.
    """

    def __init__(
        self,
        manager_factory: Callable[[ConnectionDescriptor], ConnectionManager] = ConnectionManager,
    ) -> None:
        self._manager_factory = manager_factory

    def fetch_rows(
        self,
        connection: ConnectionDescriptor,
        procedure: str,
        params: Any = None,
        expected: ExpectedRows = ExpectedRows.MANY,
    ) -> list[RawRow]:
        """Call *procedure* and return its raw rows.

        Raises:
            ConnectionError: If the connection cannot be opened.
            ProcedureError: If the name is invalid or the database rejects
                the call.
        """
        check_procedure_name(procedure)
        bound = bind_params(params)
        manager = self._manager_factory(connection)
        logger.debug(
            "Calling %s on %s with parameters %s (expected rows: %s)",
            procedure,
            manager.config.display_name,
            list(bound),
            expected.value,
        )

        with manager.connect() as conn:
            try:
                cursor = manager.adapter.call_procedure(conn, procedure, bound, expected)
                try:
                    if expected is ExpectedRows.NONE:
                        return []
                    limit = 1 if expected is ExpectedRows.ONE else None
                    return materialize(cursor, limit=limit)
                finally:
                    if cursor is not None:
                        cursor.close()
            except Exception as e:
                raise ProcedureError(procedure, str(e)) from e

    def fetch_one(
        self,
        connection: ConnectionDescriptor,
        target: type[T] | Mapper[T],
        procedure: str,
        params: Any = None,
    ) -> T | None:
        """Fetch at most one row mapped onto *target*.

        Returns None if the procedure returns zero rows. Extra rows are not
        an error: only the first row is read, the rest are ignored.
        """
        rows = self.fetch_rows(connection, procedure, params, ExpectedRows.ONE)
        if not rows:
            return None
        return _mapper_for(target).map_row(rows[0])

    def fetch_many(
        self,
        connection: ConnectionDescriptor,
        target: type[T] | Mapper[T],
        procedure: str,
        params: Any = None,
    ) -> list[T]:
        """Fetch every row mapped onto *target*, in result order."""
        rows = self.fetch_rows(connection, procedure, params, ExpectedRows.MANY)
        if not rows:
            return []
        return _mapper_for(target).map_rows(rows)

    def run(
        self,
        connection: ConnectionDescriptor,
        procedure: str,
        params: Any = None,
    ) -> None:
        """Call *procedure* without reading any result set."""
        self.fetch_rows(connection, procedure, params, ExpectedRows.NONE)


_default_invoker = ProcedureInvoker()


def fetch_rows(
    connection: ConnectionDescriptor,
    procedure: str,
    params: Any = None,
    expected: ExpectedRows = ExpectedRows.MANY,
) -> list[RawRow]:
    """Module-level shortcut for ``ProcedureInvoker().fetch_rows``."""
    return _default_invoker.fetch_rows(connection, procedure, params, expected)


def fetch_one(
    connection: ConnectionDescriptor,
    target: type[T] | Mapper[T],
    procedure: str,
    params: Any = None,
) -> T | None:
    """Module-level shortcut for ``ProcedureInvoker().fetch_one``."""
    return _default_invoker.fetch_one(connection, target, procedure, params)


def fetch_many(
    connection: ConnectionDescriptor,
    target: type[T] | Mapper[T],
    procedure: str,
    params: Any = None,
) -> list[T]:
    """Module-level shortcut for ``ProcedureInvoker().fetch_many``."""
    return _default_invoker.fetch_many(connection, target, procedure, params)


def run(
    connection: ConnectionDescriptor,
    procedure: str,
    params: Any = None,
) -> None:
    """Module-level shortcut for ``ProcedureInvoker().run``."""
    _default_invoker.run(connection, procedure, params)

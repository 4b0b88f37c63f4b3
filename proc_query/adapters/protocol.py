"""Database adapter protocol.

Every adapter module MUST implement this protocol so the invoker can treat
all backends identically.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from proc_query.core.connection import ConnectionConfig
from proc_query.core.enums import ExpectedRows


@runtime_checkable
class ProcedureAdapter(Protocol):
    """Synchronous stored-procedure adapter protocol."""

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a new connection."""
        ...

    def close(self, connection: Any) -> None:
        """Close a connection opened by ``connect``."""
        ...

    def call_procedure(
        self,
        connection: Any,
        procedure: str,
        params: dict[str, Any],
        expected: ExpectedRows,
    ) -> Any:
        """Call *procedure* with named *params*.

        Returns a cursor-like object positioned on the result set, or
        ``None`` when *expected* is ``ExpectedRows.NONE`` or the procedure
        produced no result set.
        """
        ...

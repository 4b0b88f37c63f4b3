"""Repository base class.

Thin wrapper over ProcedureInvoker for data-access classes that call every
procedure against the same database.
"""

from __future__ import annotations

from typing import Any, TypeVar

from proc_query.core.invoker import ConnectionDescriptor, ProcedureInvoker
from proc_query.core.materializer import RawRow
from proc_query.mapping.protocol import Mapper

T = TypeVar("T")


class ProcedureRepository:
    """Base repository holding a connection descriptor.

    Subclasses define one method per stored procedure::

        class UserRepository(ProcedureRepository):
            def get_user(self, user_id: int) -> User | None:
                return self.fetch_one(User, "GetUser", {"id": user_id})
    """

    def __init__(
        self,
        connection: ConnectionDescriptor,
        invoker: ProcedureInvoker | None = None,
    ) -> None:
        self.connection = connection
        self.invoker = invoker if invoker is not None else ProcedureInvoker()

    def fetch_one(self, target: type[T] | Mapper[T], procedure: str, params: Any = None) -> T | None:
        return self.invoker.fetch_one(self.connection, target, procedure, params)

    def fetch_many(self, target: type[T] | Mapper[T], procedure: str, params: Any = None) -> list[T]:
        return self.invoker.fetch_many(self.connection, target, procedure, params)

    def fetch_rows(self, procedure: str, params: Any = None) -> list[RawRow]:
        return self.invoker.fetch_rows(self.connection, procedure, params)

    def run(self, procedure: str, params: Any = None) -> None:
        self.invoker.run(self.connection, procedure, params)

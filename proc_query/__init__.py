"""ProcQuery - stored-procedure invocation and result mapping."""

from __future__ import annotations

import logging

from proc_query.core.connection import (
    ConnectionConfig,
    ConnectionManager,
    resolve_connection,
)
from proc_query.core.enums import DatabaseBackend, ExpectedRows
from proc_query.core.exceptions import (
    AdapterError,
    ConnectionError,  # noqa: A004
    DuplicateProcedureError,
    ExecutionError,
    FieldMappingError,
    MappingError,
    ProcedureError,
    ProcedureNotFoundError,
    ProcQueryError,
    RegistryError,
    UnsupportedTargetError,
)
from proc_query.core.invoker import ProcedureInvoker, fetch_many, fetch_one, fetch_rows, run
from proc_query.core.materializer import materialize
from proc_query.core.registry import ProcedureRegistry
from proc_query.mapping.model import MappingReport, ObjectMapper
from proc_query.repository.base import ProcedureRepository

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "resolve_connection",
    # Invoker
    "ProcedureInvoker",
    "fetch_one",
    "fetch_many",
    "fetch_rows",
    "run",
    "materialize",
    # Registry
    "ProcedureRegistry",
    # Mapping
    "ObjectMapper",
    "MappingReport",
    # Repository
    "ProcedureRepository",
    # Enums
    "DatabaseBackend",
    "ExpectedRows",
    # Exceptions
    "ProcQueryError",
    "RegistryError",
    "ProcedureNotFoundError",
    "DuplicateProcedureError",
    "ExecutionError",
    "ProcedureError",
    "MappingError",
    "FieldMappingError",
    "UnsupportedTargetError",
    "AdapterError",
    "ConnectionError",
]

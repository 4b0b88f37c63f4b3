"""Database backend and cardinality enumerations."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"


class ExpectedRows(Enum):
    """How many rows a procedure call is expected to produce.

    Advisory only: ONE asks the adapter to read a single row, NONE skips
    reading results altogether. Actual row counts are never validated.
    """

    NONE = "none"
    ONE = "one"
    MANY = "many"

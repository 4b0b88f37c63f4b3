"""ProcQuery exception hierarchy.

Connection and procedure failures are raised to the caller with the driver
exception chained. Field mapping failures are collected by the mapper and
never escape a fetch call.
"""

from __future__ import annotations

from typing import Any


class ProcQueryError(Exception):
    """Base exception for all ProcQuery errors."""


# --- Registry ---


class RegistryError(ProcQueryError):
    """Base for procedure registry errors."""


class ProcedureNotFoundError(RegistryError):
    """Raised when a procedure cannot be found in the registry."""

    def __init__(self, procedure: str) -> None:
        self.procedure = procedure
        super().__init__(f"Procedure not found: '{procedure}'")


class DuplicateProcedureError(RegistryError):
    """Raised when two SQL files resolve to the same procedure name."""

    def __init__(self, procedure: str, path_a: str, path_b: str) -> None:
        self.procedure = procedure
        super().__init__(f"Duplicate procedure name '{procedure}': {path_a} and {path_b}")


# --- Execution ---


class ExecutionError(ProcQueryError):
    """Base for procedure execution errors."""


class ProcedureError(ExecutionError):
    """Raised when the database rejects a procedure call."""

    def __init__(self, procedure: str, detail: str) -> None:
        self.procedure = procedure
        self.detail = detail
        super().__init__(f"Procedure '{procedure}' failed: {detail}")


# --- Mapping ---


class MappingError(ProcQueryError):
    """Base for mapping errors."""


class FieldMappingError(MappingError):
    """A single field could not be located or coerced.

    Collected per field by the object mapper; the field keeps its default
    value and the rest of the row is still mapped.
    """

    def __init__(self, target_class: str, field_name: str, value: Any, detail: str) -> None:
        self.target_class = target_class
        self.field_name = field_name
        self.value = value
        self.detail = detail
        super().__init__(
            f"Cannot map column '{field_name}' of {target_class} from {value!r}: {detail}"
        )


class UnsupportedTargetError(MappingError):
    """Raised when a target class cannot be described or instantiated."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        self.detail = detail
        super().__init__(f"Cannot map rows to {target_class}: {detail}")


# --- Adapter ---


class AdapterError(ProcQueryError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised when a database connection cannot be opened."""

    def __init__(self, target: str, detail: str) -> None:
        self.target = target
        self.detail = detail
        super().__init__(f"Cannot connect to {target}: {detail}")

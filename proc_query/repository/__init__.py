"""Repository layer - per-database data-access base class."""

from __future__ import annotations

from proc_query.repository.base import ProcedureRepository

__all__ = [
    "ProcedureRepository",
]

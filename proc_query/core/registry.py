"""Procedure registry - loads procedure bodies from a directory of SQL files.

Used by backends without native stored procedures. Naming convention:
    procs/GetUser.sql          -> "GetUser"
    procs/dbo/GetUser.sql      -> "dbo.GetUser"
    procs/billing/ListOpen.sql -> "billing.ListOpen"
"""

from __future__ import annotations

from pathlib import Path

from proc_query.core.exceptions import DuplicateProcedureError, ProcedureNotFoundError


class ProcedureRegistry:
    """Loads procedure bodies from a directory structure.

    Lookups are case-insensitive, matching how most databases resolve
    procedure identifiers. The registry is read-only once loaded.

    Args:
        root_dir: Root directory containing ``.sql`` files.

    Raises:
        DuplicateProcedureError: If two files resolve to the same name.
    """

    def __init__(self, root_dir: Path | str) -> None:
        self._root_dir = Path(root_dir)
        self._bodies: dict[str, str] = {}
        self._paths: dict[str, Path] = {}
        self._load()

    def _load(self) -> None:
        if not self._root_dir.exists():
            return

        for sql_file in sorted(self._root_dir.rglob("*.sql")):
            relative = sql_file.relative_to(self._root_dir)
            parts = list(relative.parts)
            parts[-1] = parts[-1].removesuffix(".sql")
            key = ".".join(parts).lower()

            if key in self._bodies:
                raise DuplicateProcedureError(key, str(self._paths[key]), str(sql_file))

            self._bodies[key] = sql_file.read_text(encoding="utf-8").strip()
            self._paths[key] = sql_file

    def get(self, procedure: str) -> str:
        """Return the SQL body of *procedure*.

        Raises:
            ProcedureNotFoundError: If no file matches the name.
        """
        try:
            return self._bodies[procedure.lower()]
        except KeyError:
            raise ProcedureNotFoundError(procedure) from None

    def has(self, procedure: str) -> bool:
        return procedure.lower() in self._bodies

    @property
    def procedure_names(self) -> list[str]:
        """Registered names (lower-cased), sorted alphabetically."""
        return sorted(self._bodies.keys())

    def __len__(self) -> int:
        return len(self._bodies)

"""Unit tests for ProcedureRegistry."""

from __future__ import annotations

from pathlib import Path

import pytest

from proc_query.core.exceptions import DuplicateProcedureError, ProcedureNotFoundError
from proc_query.core.registry import ProcedureRegistry


class TestProcedureRegistry:
    def test_load_directory(self, procs_dir: Path, write_proc) -> None:
        write_proc("GetUser.sql", "SELECT * FROM users WHERE id = :id")
        write_proc("ListUsers.sql", "SELECT * FROM users")
        registry = ProcedureRegistry(procs_dir)
        assert len(registry) == 2

    def test_schema_qualified_name(self, procs_dir: Path, write_proc) -> None:
        write_proc("dbo/GetUser.sql", "SELECT * FROM users WHERE id = :id")
        registry = ProcedureRegistry(procs_dir)
        assert registry.has("dbo.GetUser")
        assert registry.get("dbo.GetUser") == "SELECT * FROM users WHERE id = :id"

    def test_lookup_is_case_insensitive(self, procs_dir: Path, write_proc) -> None:
        write_proc("GetUser.sql", "SELECT 1")
        registry = ProcedureRegistry(procs_dir)
        assert registry.get("getuser") == "SELECT 1"
        assert registry.get("GETUSER") == "SELECT 1"

    def test_body_is_stripped(self, procs_dir: Path, write_proc) -> None:
        write_proc("GetUser.sql", "\n  SELECT 1\n\n")
        registry = ProcedureRegistry(procs_dir)
        assert registry.get("GetUser") == "SELECT 1"

    def test_has_returns_false_for_missing(self, procs_dir: Path, write_proc) -> None:
        write_proc("GetUser.sql", "SELECT 1")
        registry = ProcedureRegistry(procs_dir)
        assert registry.has("DeleteUser") is False

    def test_procedure_names_sorted(self, procs_dir: Path, write_proc) -> None:
        write_proc("b/Proc.sql", "SELECT 1")
        write_proc("a/Proc.sql", "SELECT 2")
        write_proc("c/Proc.sql", "SELECT 3")
        registry = ProcedureRegistry(procs_dir)
        assert registry.procedure_names == ["a.proc", "b.proc", "c.proc"]

    def test_procedure_not_found_error(self, procs_dir: Path, write_proc) -> None:
        write_proc("GetUser.sql", "SELECT 1")
        registry = ProcedureRegistry(procs_dir)
        with pytest.raises(ProcedureNotFoundError, match="MissingProc"):
            registry.get("MissingProc")

    def test_duplicate_names_differing_in_case(self, procs_dir: Path, write_proc) -> None:
        write_proc("GetUser.sql", "SELECT 1")
        write_proc("getuser.sql", "SELECT 2")
        with pytest.raises(DuplicateProcedureError):
            ProcedureRegistry(procs_dir)

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        registry = ProcedureRegistry(tmp_path / "nope")
        assert len(registry) == 0

    def test_non_sql_files_ignored(self, procs_dir: Path, write_proc) -> None:
        write_proc("GetUser.sql", "SELECT 1")
        write_proc("README.md", "docs")
        registry = ProcedureRegistry(procs_dir)
        assert len(registry) == 1

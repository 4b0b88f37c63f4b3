"""
Example 01: Basic Procedure Calls

This example demonstrates calling procedures and mapping their rows to dataclasses.
SQLite has no stored procedures, so procedure bodies live in a directory of .sql files.
"""

from proc_query import ConnectionConfig, ProcedureInvoker
from dataclasses import dataclass
from typing import Optional
import tempfile
import sqlite3
from pathlib import Path


@dataclass
class User:
    """User row"""
    id: int = 0
    name: str = ""
    email: Optional[str] = None
    active: bool = False


@dataclass
class DeleteUser:
    """Parameter bag for DeleteUser"""
    id: int


def main():
    # Set up database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE users (
            Id INTEGER PRIMARY KEY,
            Name TEXT NOT NULL,
            Email TEXT,
            Active INTEGER DEFAULT 1
        )
    """)
    conn.execute("INSERT INTO users (Name, Email) VALUES ('Alice', 'alice@example.com')")
    conn.execute("INSERT INTO users (Name, Email) VALUES ('Bob', NULL)")
    conn.commit()
    conn.close()

    # Procedure bodies
    procs_dir = Path(tempfile.mkdtemp())
    (procs_dir / "GetUser.sql").write_text("SELECT * FROM users WHERE Id = :id")
    (procs_dir / "ListUsers.sql").write_text("SELECT * FROM users ORDER BY Id")
    (procs_dir / "DeleteUser.sql").write_text("DELETE FROM users WHERE Id = :id")

    config = ConnectionConfig(driver="sqlite", database=db_path, procedures_dir=procs_dir)
    invoker = ProcedureInvoker()

    print("=== Basic Procedure Calls ===\n")

    print("1. fetch_one:")
    user = invoker.fetch_one(config, User, "GetUser", {"id": 1})
    print(f"   {user}\n")

    print("2. fetch_many:")
    for u in invoker.fetch_many(config, User, "ListUsers"):
        print(f"   {u}")
    print()

    print("3. run:")
    invoker.run(config, "DeleteUser", DeleteUser(id=2))
    print(f"   Remaining: {len(invoker.fetch_many(config, User, 'ListUsers'))} user(s)\n")

    print("4. zero rows:")
    print(f"   fetch_one -> {invoker.fetch_one(config, User, 'GetUser', {'id': 99})}")

    # Cleanup
    Path(db_path).unlink()


if __name__ == "__main__":
    main()

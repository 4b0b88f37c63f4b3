"""
Example 02: Model Mapping

This example demonstrates mapping procedure rows to dataclasses, Pydantic models and
plain classes, and how bad cells are reported without failing the row.
"""

from proc_query import ConnectionConfig, ObjectMapper, ProcedureInvoker
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pydantic import BaseModel
from typing import Optional
import logging
import tempfile
import sqlite3
from pathlib import Path


@dataclass
class OrderDataclass:
    """Order model using dataclass"""
    id: int = 0
    customer: str = ""
    total: Decimal = Decimal("0")
    shipped: Optional[date] = None


class OrderPydantic(BaseModel):
    """Order model using Pydantic"""
    id: int
    customer: str
    total: Decimal


class OrderPlain:
    """Order model using a plain class"""
    id: int = 0
    customer: str = ""


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    # Set up database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE orders (ID INTEGER, Customer TEXT, Total TEXT, Shipped TEXT)")
    conn.execute("INSERT INTO orders VALUES (1, 'alice', '19.99', '2024-03-01')")
    conn.execute("INSERT INTO orders VALUES (2, 'bob', 'n/a', NULL)")
    conn.commit()
    conn.close()

    procs_dir = Path(tempfile.mkdtemp())
    (procs_dir / "ListOrders.sql").write_text("SELECT * FROM orders ORDER BY ID")

    config = ConnectionConfig(driver="sqlite", database=db_path, procedures_dir=procs_dir)
    invoker = ProcedureInvoker()

    print("=== Model Mapping ===\n")

    print("1. Dataclass Mapping (the bad total on order 2 is logged and left at default):")
    for order in invoker.fetch_many(config, OrderDataclass, "ListOrders"):
        print(f"   {order}")
    print()

    print("2. Pydantic Model Mapping:")
    for order in invoker.fetch_many(config, OrderPydantic, "ListOrders"):
        print(f"   {order!r}")
    print()

    print("3. Plain Class Mapping:")
    for order in invoker.fetch_many(config, OrderPlain, "ListOrders"):
        print(f"   id={order.id} customer={order.customer}")
    print()

    print("4. Mapping Reports:")
    mapper = ObjectMapper(OrderDataclass)
    for row in invoker.fetch_rows(config, "ListOrders"):
        report = mapper.build(row)
        print(f"   row {row['id']}: ok={report.ok} failed={report.failed_fields}")

    # Cleanup
    Path(db_path).unlink()


if __name__ == "__main__":
    main()

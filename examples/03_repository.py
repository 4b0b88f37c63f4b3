"""
Example 03: Repository Pattern

This example demonstrates grouping procedure calls for one database in a repository class.
"""

from proc_query import ProcedureRepository
from dataclasses import dataclass
from typing import Optional
import tempfile
import sqlite3
from pathlib import Path


@dataclass
class Product:
    """Product entity"""
    sku: str = ""
    name: str = ""
    price: float = 0.0
    stock: Optional[int] = None


@dataclass
class SetStock:
    """Parameter bag for SetStock"""
    sku: str
    stock: int


class ProductRepository(ProcedureRepository):
    """Repository for Product rows"""

    def find(self, sku: str) -> Optional[Product]:
        return self.fetch_one(Product, "GetProduct", {"sku": sku})

    def list_all(self) -> list[Product]:
        return self.fetch_many(Product, "ListProducts")

    def set_stock(self, sku: str, stock: int) -> None:
        self.run("SetStock", SetStock(sku=sku, stock=stock))


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE products (SKU TEXT PRIMARY KEY, Name TEXT, Price REAL, Stock INTEGER)")
    conn.execute("INSERT INTO products VALUES ('A-1', 'Widget', 2.5, 10)")
    conn.execute("INSERT INTO products VALUES ('B-2', 'Gadget', 12.0, NULL)")
    conn.commit()
    conn.close()

    procs_dir = Path(tempfile.mkdtemp())
    (procs_dir / "GetProduct.sql").write_text("SELECT * FROM products WHERE SKU = :sku")
    (procs_dir / "ListProducts.sql").write_text("SELECT * FROM products ORDER BY SKU")
    (procs_dir / "SetStock.sql").write_text("UPDATE products SET Stock = :stock WHERE SKU = :sku")

    repo = ProductRepository(f"sqlite:///{db_path}?procedures={procs_dir}")

    print("=== Repository Pattern ===\n")
    print(f"find('A-1') -> {repo.find('A-1')}")
    repo.set_stock("B-2", 5)
    for product in repo.list_all():
        print(f"   {product}")

    # Cleanup
    Path(db_path).unlink()


if __name__ == "__main__":
    main()

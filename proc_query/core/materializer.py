"""Row materializer.

Flattens driver-native result rows into raw rows: ``{column: text | None}``
with lower-cased column names. No type coercion happens here; the object
mapper parses the text into whatever the target type declares.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, time
from typing import Any

logger = logging.getLogger(__name__)

RawRow = dict[str, str | None]


def render_cell(value: Any) -> str | None:
    """Render one cell as text, keeping SQL NULL as ``None``."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _cells(row: Any, columns: list[str]) -> list[Any]:
    # Dict rows (psycopg dict_row, mysql dictionary cursors) are keyed by
    # column name; tuples and sqlite3.Row are positional.
    if isinstance(row, dict):
        return [row[column] for column in columns]
    return list(row)


def materialize(cursor: Any, limit: int | None = None) -> list[RawRow]:
    """Read the rows of a DB-API cursor into raw rows.

    Args:
        cursor: Cursor positioned on a result set. ``None`` or a cursor
            without ``description`` produces no rows.
        limit: ``1`` reads a single row with ``fetchone``; ``None`` reads
            everything the cursor yields.

    Returns:
        Raw rows in cursor traversal order.
    """
    if cursor is None or cursor.description is None:
        return []

    columns = [desc[0] for desc in cursor.description]
    keys = [column.lower() for column in columns]

    if limit == 1:
        first = cursor.fetchone()
        fetched = [] if first is None else [first]
    else:
        fetched = cursor.fetchall()
        if limit is not None:
            fetched = fetched[:limit]

    rows: list[RawRow] = []
    for row in fetched:
        cells = _cells(row, columns)
        rows.append({key: render_cell(cell) for key, cell in zip(keys, cells, strict=True)})

    logger.debug("Materialized %d row(s) with columns %s", len(rows), keys)
    return rows

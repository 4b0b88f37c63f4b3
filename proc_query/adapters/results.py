"""Result cursors that own the cursor which ran the procedure.

Drivers that hand back procedure results on child cursors (MySQL stored
results, Oracle implicit results) leave the calling cursor open. Wrapping the
child keeps a single ``close()`` for the invoker to call.
"""

from __future__ import annotations

from typing import Any


class OwnedResultCursor:
    """Read from *result*; closing also closes *parent*."""

    def __init__(self, result: Any, parent: Any) -> None:
        self._result = result
        self._parent = parent

    @property
    def description(self) -> Any:
        return self._result.description

    def fetchone(self) -> Any:
        return self._result.fetchone()

    def fetchall(self) -> list[Any]:
        return self._result.fetchall()

    def close(self) -> None:
        try:
            self._result.close()
        finally:
            self._parent.close()


def first_result(results: Any, parent: Any) -> OwnedResultCursor | None:
    """Wrap the first child result cursor, or close *parent* when there is none."""
    result = next(iter(results or ()), None)
    if result is None:
        parent.close()
        return None
    return OwnedResultCursor(result, parent)

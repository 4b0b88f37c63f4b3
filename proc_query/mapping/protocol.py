"""Mapper protocol.

The invoker calls map_row for fetch_one results and map_rows for fetch_many
results. ObjectMapper is the default implementation; any object with these
two methods can be passed in its place.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class Mapper(Protocol[T_co]):
    """Base mapper protocol."""

    def map_row(self, row: Mapping[str, str | None]) -> T_co:
        """Map a single raw row to a target object."""
        ...

    def map_rows(self, rows: list[Mapping[str, str | None]]) -> list[T_co]:
        """Map multiple raw rows to a list of target objects."""
        ...

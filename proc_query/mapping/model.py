"""Row-to-object mapper.

Supports dataclasses, Pydantic models, and plain annotated classes. Fields
are matched to raw-row columns case-insensitively; each cell is coerced to
the field's declared type. Mapping is best-effort per field: a failed field
keeps its default value, is reported and logged, and the rest of the row is
still mapped.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from proc_query.core.exceptions import FieldMappingError, UnsupportedTargetError
from proc_query.mapping.coercion import coerce
from proc_query.mapping.fields import FieldSpec, describe_fields

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class MappingReport(Generic[T]):
    """Outcome of mapping one row: the object plus per-field failures."""

    value: T
    errors: list[FieldMappingError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def failed_fields(self) -> list[str]:
        return [error.field_name for error in self.errors]


class ObjectMapper(Generic[T]):
    """Maps raw rows onto instances of *target_class*.

    Construction strategy:
    1. Pydantic BaseModel -> ``model_construct`` with already-coerced values
    2. dataclass -> ``target_class(**values)``
    3. Plain class -> ``target_class()`` then ``setattr`` per field

    Fields that are not mapped, or fail to map, keep their declared default,
    or ``None`` when they declare none.

    Args:
        target_class: The class to build from row data.
    """

    def __init__(self, target_class: type[T]) -> None:
        self._target_class = target_class
        self._fields: dict[str, FieldSpec] = {}
        for spec in describe_fields(target_class):
            key = spec.name.lower()
            if key in self._fields:
                raise UnsupportedTargetError(
                    target_class.__name__,
                    f"fields {self._fields[key].name!r} and {spec.name!r} differ only by case",
                )
            self._fields[key] = spec
        self._is_pydantic = isinstance(target_class, type) and issubclass(target_class, BaseModel)
        self._is_dataclass = dataclasses.is_dataclass(target_class)

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    def matching_fields(self, columns: Iterable[str]) -> list[str]:
        """Lower-cased names present both as fields and as columns."""
        lowered = {column.lower() for column in columns}
        return [name for name in self._fields if name in lowered]

    def build(
        self,
        row: Mapping[str, str | None],
        field_names: Iterable[str] | None = None,
    ) -> MappingReport[T]:
        """Map one row and report every field that could not be mapped.

        Args:
            row: Raw row; column names are matched case-insensitively.
            field_names: Precomputed ``matching_fields`` for the row set;
                computed from *row* when omitted.
        """
        row = {key.lower(): value for key, value in row.items()}
        if field_names is None:
            field_names = self.matching_fields(row.keys())

        values: dict[str, Any] = {}
        errors: list[FieldMappingError] = []
        for name in field_names:
            name = name.lower()
            spec = self._fields.get(name)
            if spec is None:
                errors.append(self._error(name, row.get(name), "no such field"))
                continue
            if name not in row:
                errors.append(self._error(spec.name, None, "column missing from row"))
                continue
            text = row[name]
            try:
                values[spec.name] = self._convert(spec, text)
            except (ValueError, TypeError, ArithmeticError) as e:
                errors.append(self._error(spec.name, text, str(e)))

        return MappingReport(self._construct(values, errors), errors)

    def map_row(
        self,
        row: Mapping[str, str | None],
        field_names: Iterable[str] | None = None,
    ) -> T:
        """Map one row, logging field failures instead of raising them."""
        report = self.build(row, field_names)
        for error in report.errors:
            logger.warning("Field mapping failed: %s", error)
        return report.value

    def map_rows(self, rows: list[Mapping[str, str | None]]) -> list[T]:
        """Map every row, computing the field/column intersection once."""
        if not rows:
            return []
        field_names = self.matching_fields(rows[0].keys())
        return [self.map_row(row, field_names) for row in rows]

    def _convert(self, spec: FieldSpec, text: str | None) -> Any:
        if text is None:
            if spec.optional:
                return None
            raise ValueError("NULL value for a non-optional field")
        return coerce(text, spec.base_type)

    def _error(self, field_name: str, value: Any, detail: str) -> FieldMappingError:
        return FieldMappingError(self._target_class.__name__, field_name, value, detail)

    def _construct(self, values: dict[str, Any], errors: list[FieldMappingError]) -> T:
        if self._is_pydantic:
            kwargs = {
                spec.name: values[spec.name] if spec.name in values else spec.default_value()
                for spec in self._fields.values()
            }
            return self._target_class.model_construct(**kwargs)  # type: ignore[attr-defined, no-any-return]

        if self._is_dataclass:
            kwargs = {
                spec.name: values[spec.name] if spec.name in values else spec.default_value()
                for spec in self._fields.values()
                if spec.init
            }
            try:
                instance = self._target_class(**kwargs)
            except (TypeError, ValueError) as e:
                raise UnsupportedTargetError(self._target_class.__name__, str(e)) from e
            for spec in self._fields.values():
                if not spec.init and spec.name in values:
                    object.__setattr__(instance, spec.name, values[spec.name])
            return instance

        try:
            instance = self._target_class()
        except TypeError as e:
            raise UnsupportedTargetError(
                self._target_class.__name__, f"cannot default-construct: {e}"
            ) from e
        for name, value in values.items():
            try:
                setattr(instance, name, value)
            except AttributeError as e:
                errors.append(self._error(name, value, str(e)))
        return instance

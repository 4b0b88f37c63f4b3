"""Text-to-type coercion.

Raw rows carry every cell as text. ``coerce`` parses that text into the base
type a target field declares. Common scalar types have explicit parsers;
any other annotation is handed to a Pydantic ``TypeAdapter``.

All failures surface as ``ValueError`` or ``TypeError``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from functools import lru_cache
from typing import Any, get_origin
from uuid import UUID

from pydantic import TypeAdapter

_TRUE = frozenset({"true", "t", "yes", "y", "on", "1"})
_FALSE = frozenset({"false", "f", "no", "n", "off", "0"})


def _to_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _to_decimal(text: str) -> Decimal:
    try:
        return Decimal(text.strip())
    except InvalidOperation:
        raise ValueError(f"not a decimal: {text!r}") from None


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        # NUMERIC columns render as "3.00"
        value = _to_decimal(text)
        if not value.is_finite() or value != value.to_integral_value():
            raise ValueError(f"not an integer: {text!r}") from None
        return int(value)


def _to_datetime(text: str) -> datetime:
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _to_date(text: str) -> date:
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        # DATETIME columns mapped onto a date field
        return _to_datetime(text).date()


def _to_time(text: str) -> time:
    return time.fromisoformat(text.strip())


def _to_enum(text: str, enum_type: type[Enum]) -> Enum:
    try:
        return enum_type(text)
    except ValueError:
        pass
    for member in enum_type:
        if str(member.value) == text or member.name.lower() == text.lower():
            return member
    raise ValueError(f"{text!r} is not a valid {enum_type.__name__}")


def _to_json(text: str, target: Any) -> Any:
    value = json.loads(text)
    if get_origin(target) is None:
        if not isinstance(value, target):
            raise TypeError(f"expected JSON {target.__name__}, got {type(value).__name__}")
        return value
    return _type_adapter(target).validate_python(value)


_CONVERTERS: dict[Any, Callable[[str], Any]] = {
    str: str,
    int: _to_int,
    float: float,
    bool: _to_bool,
    Decimal: _to_decimal,
    datetime: _to_datetime,
    date: _to_date,
    time: _to_time,
    UUID: UUID,
    bytes: bytes.fromhex,
}


@lru_cache(maxsize=256)
def _type_adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def coerce(text: str, target: Any) -> Any:
    """Parse *text* into an instance of *target*.

    Args:
        text: Cell text as produced by the row materializer.
        target: Base type of the field (already unwrapped from Optional).

    Raises:
        ValueError: If the text cannot be parsed (Pydantic's
            ``ValidationError`` is a ``ValueError``).
        TypeError: If the parsed value has the wrong shape.
    """
    if target is Any or target is object:
        return text

    converter = _CONVERTERS.get(target)
    if converter is not None:
        return converter(text)

    origin = get_origin(target)
    if target in (dict, list) or origin in (dict, list):
        return _to_json(text, target)

    if origin is None and isinstance(target, type) and issubclass(target, Enum):
        return _to_enum(text, target)

    return _type_adapter(target).validate_python(text)

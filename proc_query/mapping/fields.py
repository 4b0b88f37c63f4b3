"""Target type descriptors.

Describes the writable fields of a target class (dataclass, Pydantic model,
or plain annotated class) once per class: name, declared annotation, the
base type used for coercion, whether ``None`` is allowed, and the default.
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from proc_query.core.exceptions import UnsupportedTargetError

MISSING: Any = dataclasses.MISSING


@dataclass(frozen=True)
class FieldSpec:
    """One writable field of a target class."""

    name: str
    annotation: Any
    base_type: Any
    optional: bool
    default: Any = MISSING
    default_factory: Callable[[], Any] | None = None
    init: bool = True

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def default_value(self) -> Any:
        """The declared default, or ``None`` for fields without one."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not MISSING:
            return self.default
        return None


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Split ``Optional[X]`` / ``X | None`` into ``(X, True)``.

    ``Any`` and ``None`` itself count as optional. Unions of several
    non-None members are returned unchanged, with the optional flag set
    when ``None`` is one of them.
    """
    if annotation is Any:
        return Any, True

    origin = get_origin(annotation)
    if origin not in {Union, types.UnionType}:
        return annotation, annotation is type(None)

    all_args = get_args(annotation)
    args = [arg for arg in all_args if arg is not type(None)]
    optional = len(args) != len(all_args)
    if len(args) == 1:
        return args[0], optional
    return annotation, optional


def _spec(name: str, annotation: Any, **kwargs: Any) -> FieldSpec:
    base_type, optional = unwrap_optional(annotation)
    return FieldSpec(name=name, annotation=annotation, base_type=base_type, optional=optional, **kwargs)


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except Exception as e:
        raise UnsupportedTargetError(cls.__name__, f"cannot resolve annotations: {e}") from e


def _pydantic_fields(cls: type[BaseModel]) -> tuple[FieldSpec, ...]:
    specs = []
    for name, info in cls.model_fields.items():
        specs.append(
            _spec(
                name,
                info.annotation,
                default=MISSING if info.is_required() or info.default_factory else info.default,
                default_factory=info.default_factory,
            )
        )
    return tuple(specs)


def _dataclass_fields(cls: type) -> tuple[FieldSpec, ...]:
    hints = _type_hints(cls)
    specs = []
    for f in dataclasses.fields(cls):
        factory = None if f.default_factory is MISSING else f.default_factory
        specs.append(
            _spec(
                f.name,
                hints.get(f.name, f.type),
                default=f.default,
                default_factory=factory,
                init=f.init,
            )
        )
    return tuple(specs)


def _plain_fields(cls: type) -> tuple[FieldSpec, ...]:
    hints = _type_hints(cls)
    specs = []
    for name, annotation in hints.items():
        if name.startswith("_") or get_origin(annotation) is ClassVar:
            continue
        specs.append(_spec(name, annotation, default=getattr(cls, name, MISSING)))
    return tuple(specs)


@lru_cache(maxsize=None)
def describe_fields(cls: type) -> tuple[FieldSpec, ...]:
    """Describe the mappable fields of *cls*.

    Detection order:
    1. Pydantic BaseModel -> ``model_fields``
    2. dataclass -> ``dataclasses.fields``
    3. Plain class -> public class annotations

    Raises:
        UnsupportedTargetError: If annotations cannot be resolved.
    """
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return _pydantic_fields(cls)
    if dataclasses.is_dataclass(cls):
        return _dataclass_fields(cls)
    return _plain_fields(cls)

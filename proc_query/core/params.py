"""Parameter binding.

Turns a caller's parameter bag into a ``{name: value}`` dict, one entry per
public field, and checks procedure identifiers before they are placed into
call statements.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from proc_query.core.exceptions import ProcedureError

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][\w$#]*$")


def bind_params(params: Any) -> dict[str, Any]:
    """Collect the named fields of *params* into a parameter dict.

    Supported bags:

    * ``None`` -> no parameters.
    * ``Mapping`` -> copied as-is.
    * Pydantic model -> declared fields, by attribute name.
    * Dataclass instance -> dataclass fields.
    * Named tuple -> ``_asdict()``.
    * Any other object -> public instance attributes.

    Names are used verbatim and values are never converted; a field set to
    ``None`` is bound as SQL NULL.
    """
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return dict(params)
    if isinstance(params, BaseModel):
        return {name: getattr(params, name) for name in type(params).model_fields}
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        return {f.name: getattr(params, f.name) for f in dataclasses.fields(params)}
    if isinstance(params, tuple) and hasattr(params, "_asdict"):
        return dict(params._asdict())

    if isinstance(params, type) or not hasattr(params, "__dict__"):
        raise TypeError(
            f"Cannot bind parameters from {type(params).__name__}: "
            "expected a mapping, dataclass, pydantic model, named tuple or object"
        )
    return {name: value for name, value in vars(params).items() if not name.startswith("_")}


def is_identifier(name: str) -> bool:
    """True for a bare SQL identifier (letters, digits, ``_``, ``$``, ``#``)."""
    return bool(_IDENTIFIER_PATTERN.match(name))


def check_procedure_name(procedure: str) -> str:
    """Return *procedure* unchanged if it is a plain or dot-qualified identifier.

    Accepts ``GetUser``, ``dbo.GetUser``, ``pkg.proc$1``.

    Raises:
        ProcedureError: If the name is empty or not an identifier.
    """
    if not procedure or not all(is_identifier(part) for part in procedure.split(".")):
        raise ProcedureError(procedure, "invalid procedure name")
    return procedure

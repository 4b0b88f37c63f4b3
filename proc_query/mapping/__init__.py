"""Mapping layer - turn raw rows into typed objects."""

from __future__ import annotations

from proc_query.mapping.coercion import coerce
from proc_query.mapping.fields import FieldSpec, describe_fields, unwrap_optional
from proc_query.mapping.model import MappingReport, ObjectMapper
from proc_query.mapping.protocol import Mapper

__all__ = [
    "ObjectMapper",
    "MappingReport",
    "Mapper",
    "FieldSpec",
    "describe_fields",
    "unwrap_optional",
    "coerce",
]

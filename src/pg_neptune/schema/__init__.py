"""
Schema-level building blocks for the Neo4j -> Neptune conversion.

This package holds the scalar type engine (classification, widening and
rendering of cell values) and the column descriptors that accumulate the
discovered schema while rows stream through the transcoders.
"""

from pg_neptune.schema.datatypes import (
    DataType,
    NULL_LITERALS,
    classify,
    widen,
    widen_all,
    format_value,
)
from pg_neptune.schema.models import Token, PropertyHeader, PropertyValue, Headers

__all__ = [
    "DataType",
    "NULL_LITERALS",
    "classify",
    "widen",
    "widen_all",
    "format_value",
    "Token",
    "PropertyHeader",
    "PropertyValue",
    "Headers",
]

"""
Entity schema registry for the qfilter service.

This module holds the typed field descriptors and loads entity schemas from
the schemas configuration file.
"""

from .schema import (
    ALWAYS_QUERYABLE,
    QUERYABLE_MARKER,
    FieldDescriptor,
    EntitySchema,
)
from .registry import Registry, SCHEMAS_FILE_SCHEMA

__all__ = [
    "ALWAYS_QUERYABLE",
    "QUERYABLE_MARKER",
    "FieldDescriptor",
    "EntitySchema",
    "Registry",
    "SCHEMAS_FILE_SCHEMA",
]

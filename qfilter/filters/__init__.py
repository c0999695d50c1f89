"""
Filter parsing for the qfilter service.

This module turns raw filter query values (JSON text or "{key=value}" text)
into filter mappings.
"""

from .parser import (
    InvalidFilterFormat,
    build_filter_object,
    string_to_object,
    to_jsonable,
)

__all__ = [
    "InvalidFilterFormat",
    "build_filter_object",
    "string_to_object",
    "to_jsonable",
]

"""
Validation module for the qfilter service.

This module restricts parsed filters to the fields an entity allows.
"""

from .rules import RejectSink, validate_filter_fields

__all__ = [
    "RejectSink",
    "validate_filter_fields",
]

from __future__ import annotations
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Union
import json
import logging
import math
import re

from dateutil import parser as date_parser

log = logging.getLogger("filters")

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class InvalidFilterFormat(ValueError):
    """
    Raised when a raw filter query cannot be decoded as JSON.
    """


# ---------------------------------------------------------------------------
# JSON path
# ---------------------------------------------------------------------------

def _reject_constant(name: str) -> Any:
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def build_filter_object(filter_query: Optional[Union[str, bytes]]) -> Any:
    """
    Decode the raw filter query (usually a query-string value) as JSON.
    Empty input yields an empty filter. The decoded structure is returned
    as-is; field checks happen in validate_filter_fields.
    """
    if not filter_query:
        return {}
    try:
        return json.loads(filter_query, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise InvalidFilterFormat("Invalid filter query format") from e


# ---------------------------------------------------------------------------
# "{key=value,key=op:value}" path
# ---------------------------------------------------------------------------

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_PREFIXED_RE = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITY_RE = re.compile(r"^[+-]?Infinity$")


def _to_number(value: str) -> Optional[Union[int, float]]:
    """
    Numeric coercion for a trimmed, non-empty value. Returns None when the
    value is not a number; 0 is a valid result, so callers test for None.
    """
    if _INTEGER_RE.match(value):
        try:
            return int(value)
        except ValueError:
            # past the int/str digit limit
            return float(value)
    if _DECIMAL_RE.match(value):
        number = float(value)
        # '1e3' is whole, keep it integral
        if "." not in value and number.is_integer():
            return int(number)
        return number
    if _PREFIXED_RE.match(value):
        return int(value, 0)
    if _INFINITY_RE.match(value):
        return float(value.replace("Infinity", "inf"))
    return None


# Two unrelated fill-in dates; a string that parses identically under both
# spells out its own year, month and day.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2004, 6, 15)


def _to_date(value: str) -> Optional[datetime]:
    """
    Parse an operator operand as a date, or None if it is not one.
    Operands like '30' or 'may' are partial dates and stay strings.
    """
    # dateutil rejects '' anyway, skip the round trip
    if not value:
        return None
    try:
        return date_parser.isoparse(value)
    except (ValueError, OverflowError):
        pass
    try:
        first = date_parser.parse(value, default=_DEFAULT_A)
        second = date_parser.parse(value, default=_DEFAULT_B)
    except (date_parser.ParserError, ValueError, OverflowError):
        return None
    return first if first == second else None


def _strip_braces(text: str) -> str:
    text = text.strip()
    if text.startswith("{"):
        text = text[1:]
    if text.endswith("}"):
        text = text[:-1]
    return text


def string_to_object(value: Any) -> Mapping[str, Any]:
    """
    Convert "{key=value,key=op:value}" into a dict.

      - '{age=30}'                    -> {'age': 30}
      - '{name=Bob}'                  -> {'name': 'Bob'}
      - '{status=eq:active}'          -> {'status': {'eq': 'active'}}
      - '{createdAt=$gte:2023-01-01}' -> {'createdAt': {'$gte': datetime(2023, 1, 1)}}

    Mappings are returned unchanged so already-decoded filters can share
    the same entry point. Pairs without a key or a value are skipped.
    Commas inside values are not supported.
    """
    if not value or value == "{}":
        return {}

    if isinstance(value, Mapping):
        return value

    if not isinstance(value, str):
        raise TypeError(f"Unsupported filter type: {type(value).__name__}")

    result: Dict[str, Any] = {}
    for pair in _strip_braces(value).split(","):
        key, _, raw = pair.partition("=")
        key, raw = key.strip(), raw.strip()

        if not key or not raw:
            log.debug("Skipping malformed filter pair: %r", pair)
            continue

        if ":" in raw:
            operator, _, operand = raw.partition(":")
            operator, operand = operator.strip(), operand.strip()
            parsed = _to_date(operand)
            result[key] = {operator: parsed if parsed is not None else operand}
        else:
            number = _to_number(raw)
            result[key] = number if number is not None else raw

    return result


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def to_jsonable(value: Any) -> Any:
    """
    Render a parsed filter as JSON-safe data (dates as ISO-8601 strings,
    non-finite numbers as null).
    """
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Public exports
# ---------------------------------------------------------------------------

__all__ = [
    "InvalidFilterFormat",
    "build_filter_object",
    "string_to_object",
    "to_jsonable",
]

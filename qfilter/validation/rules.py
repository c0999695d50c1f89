import logging
from typing import Any, Callable, Mapping, Optional, Union

from ..filters import string_to_object
from ..registry import EntitySchema

_log = logging.getLogger("filters")

# Receives one diagnostic message per rejected field.
RejectSink = Callable[[str], Any]


def _as_schema(schema: Union[EntitySchema, Mapping[str, Any]]) -> EntitySchema:
    if isinstance(schema, EntitySchema):
        return schema
    return EntitySchema.from_descriptor("", schema)


def validate_filter_fields(
    filter: Any,
    schema: Union[EntitySchema, Mapping[str, Any]],
    *,
    log: Optional[RejectSink] = None,
) -> dict[str, Any]:
    """
    Keep only the filter keys the schema marks queryable (plus createdAt and
    updatedAt). Rejected keys are dropped and reported to `log`, which
    defaults to a warning on the "filters" logger.
    """
    sink = log if log is not None else _log.warning
    entity = _as_schema(schema)
    sanitized: dict[str, Any] = {}

    for key, value in string_to_object(filter).items():
        if entity.is_queryable(key):
            sanitized[key] = value
        elif entity.has_field(key):
            sink(f"Field '{key}' is not queryable.")
        else:
            sink(f"Field '{key}' is not defined on the schema.")

    return sanitized

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

# Timestamp fields every entity may be filtered on, declared or not.
ALWAYS_QUERYABLE = frozenset({"createdAt", "updatedAt"})

# Descriptor key that marks a field as queryable in raw schema mappings.
QUERYABLE_MARKER = "q"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    A single schema field. `queryable` is fixed when the schema is built.
    """
    name: str
    queryable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "queryable": self.queryable}


@dataclass
class EntitySchema:
    """
    Field catalogue of one entity, used to decide which filter keys a
    caller may use.
    """
    name: str
    fields: Dict[str, FieldDescriptor] = field(default_factory=dict)

    def has_field(self, key: str) -> bool:
        return key in self.fields

    def is_queryable(self, key: str) -> bool:
        if key in ALWAYS_QUERYABLE:
            return True
        fd = self.fields.get(key)
        return bool(fd and fd.queryable)

    def queryable_fields(self) -> List[str]:
        return [k for k, fd in self.fields.items() if fd.queryable]

    @classmethod
    def from_descriptor(cls, name: str, descriptor: Mapping[str, Any]) -> "EntitySchema":
        """
        Build from a raw descriptor such as {"name": {"q": True}, "age": {}}.
        A field is queryable when its metadata is a mapping that carries the
        marker key, whatever the marker's value.
        """
        fields = {
            key: FieldDescriptor(
                name=key,
                queryable=isinstance(meta, Mapping) and QUERYABLE_MARKER in meta,
            )
            for key, meta in descriptor.items()
        }
        return cls(name=name, fields=fields)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "EntitySchema":
        """
        Build from the schemas-file form:

            fields:
              title: {queryable: true}
              notes: ~
        """
        fields: Dict[str, FieldDescriptor] = {}
        for key, meta in (data.get("fields") or {}).items():
            queryable = bool((meta or {}).get("queryable", False))
            fields[key] = FieldDescriptor(name=key, queryable=queryable)
        return cls(name=name, fields=fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity": self.name,
            "fields": [fd.to_dict() for fd in self.fields.values()],
            "queryable": self.queryable_fields(),
        }


__all__ = [
    "ALWAYS_QUERYABLE",
    "QUERYABLE_MARKER",
    "FieldDescriptor",
    "EntitySchema",
]

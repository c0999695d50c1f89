import json, logging, os, typing as t
from pathlib import Path

import jsonschema
import yaml

from .schema import EntitySchema

log = logging.getLogger("registry")

SCHEMAS_PATH = Path(os.getenv("SCHEMAS_FILE", "config/schemas.yaml"))

SCHEMAS_FILE_SCHEMA: dict[str, t.Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://example.com/schemas-file.schema.json",
    "title": "Entity Schemas",
    "type": "object",
    "properties": {
        "entities": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "fields": {
                        "type": "object",
                        "additionalProperties": {
                            "oneOf": [
                                {"type": "null"},
                                {
                                    "type": "object",
                                    "properties": {"queryable": {"type": "boolean"}},
                                },
                            ]
                        },
                    },
                },
                "required": ["fields"],
            },
        },
    },
    "required": ["entities"],
}


class Registry:
    def __init__(self, path: t.Optional[Path] = None):
        self.path = Path(path) if path is not None else SCHEMAS_PATH
        self.entities: dict[str, EntitySchema] = {}

    def _read(self) -> dict[str, t.Any]:
        if not self.path.exists():
            raise RuntimeError(f"Schemas file not found: {self.path}")
        with self.path.open("r", encoding="utf-8") as f:
            if self.path.suffix.lower() in (".yaml", ".yml"):
                cfg = yaml.safe_load(f)
            else:
                cfg = json.load(f)
        jsonschema.validate(instance=cfg, schema=SCHEMAS_FILE_SCHEMA)
        return cfg

    def load_schemas(self) -> None:
        cfg = self._read()
        loaded = {
            name: EntitySchema.from_dict(name, data)
            for name, data in cfg["entities"].items()
        }
        self.entities = loaded
        log.info("Loaded %d entity schemas from %s", len(loaded), self.path)

    def get(self, name: str) -> EntitySchema:
        if name not in self.entities:
            raise KeyError(f"Unknown entity: {name}")
        return self.entities[name]

    def refresh_all(self) -> dict[str, str]:
        """Re-read the schemas file and summarise each entity."""
        self.load_schemas()
        return {
            name: f"ok ({len(schema.queryable_fields())} queryable)"
            for name, schema in self.entities.items()
        }

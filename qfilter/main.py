from __future__ import annotations
from dotenv import load_dotenv

load_dotenv()

import os, logging

from typing import Any, List, Optional
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .filters import InvalidFilterFormat, build_filter_object, to_jsonable
from .registry import Registry
from .validation import validate_filter_fields

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)

log = logging.getLogger("qfilter")

app = FastAPI(title="qfilter Filter Service", version="1.0.0")

origins_raw = os.getenv("CORS_ALLOW_ORIGINS", "")
origins = [o.strip() for o in origins_raw.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

REG = Registry()


class FilterResponse(BaseModel):
    """Sanitized filter for one entity."""

    entity: str
    filter: dict[str, Any]
    rejected: List[str] = []


@app.on_event("startup")
def _startup():
    REG.load_schemas()


@app.get("/healthz")
def health():
    return {"ok": True, "entities": list(REG.entities.keys())}


@app.get("/entities")
def list_entities():
    """
    List configured entities with their field catalogue.
    """
    return {"entities": [schema.to_dict() for schema in REG.entities.values()]}


@app.get("/entities/{entity}/filter", response_model=FilterResponse)
def parse_filter(
    entity: str,
    filter: Optional[str] = Query(None, description="Raw filter query"),
    format: str = Query("pairs", pattern="^(pairs|json)$"),
):
    """
    Parse and sanitize a filter for `entity`.

    - format=pairs: '{name=Bob,age=30,createdAt=$gte:2023-01-01}'
    - format=json:  '{"name": "Bob", "age": 30}'

    Fields the entity does not allow are dropped and listed in `rejected`.
    """
    rejected: List[str] = []
    try:
        schema = REG.get(entity)
        raw = build_filter_object(filter) if format == "json" else filter
        sanitized = validate_filter_fields(raw, schema, log=rejected.append)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidFilterFormat, TypeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    for message in rejected:
        log.warning("%s: %s", entity, message)

    return FilterResponse(entity=entity, filter=to_jsonable(sanitized), rejected=rejected)


@app.post("/reload")
def reload_registry():
    try:
        summary = REG.refresh_all()
        return {"reloaded": summary}
    except Exception as e:
        log.exception("Schema reload failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

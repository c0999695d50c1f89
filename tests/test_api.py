"""
Tests for the HTTP surface of the filter service.
"""

import pytest
from fastapi.testclient import TestClient

import qfilter.main as main_module


@pytest.fixture
def client(registry, monkeypatch):
    """TestClient backed by the temp-file registry (startup hook not run)."""
    monkeypatch.setattr(main_module, "REG", registry)
    return TestClient(main_module.app)


def test_health(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "entities": ["users", "orders"]}


def test_list_entities(client):
    entities = client.get("/entities").json()["entities"]
    assert [e["entity"] for e in entities] == ["users", "orders"]
    assert entities[0]["queryable"] == ["name", "email"]


def test_pairs_filter_is_sanitized(client):
    resp = client.get(
        "/entities/users/filter",
        params={"filter": "{name=Bob,age=30,secret=x,createdAt=$gte:2023-01-01}"},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "entity": "users",
        "filter": {"name": "Bob", "createdAt": {"$gte": "2023-01-01T00:00:00"}},
        "rejected": [
            "Field 'age' is not queryable.",
            "Field 'secret' is not defined on the schema.",
        ],
    }


def test_json_filter_is_sanitized(client):
    resp = client.get(
        "/entities/orders/filter",
        params={"filter": '{"status": {"$in": ["open", "paid"]}, "total": 5}', "format": "json"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["filter"] == {"status": {"$in": ["open", "paid"]}}
    assert body["rejected"] == ["Field 'total' is not queryable."]


def test_missing_filter_is_empty(client):
    resp = client.get("/entities/users/filter")
    assert resp.status_code == 200
    assert resp.json() == {"entity": "users", "filter": {}, "rejected": []}


def test_invalid_json_is_400(client):
    resp = client.get("/entities/users/filter", params={"filter": "{not json", "format": "json"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid filter query format"


def test_json_array_is_400(client):
    resp = client.get("/entities/users/filter", params={"filter": "[1, 2]", "format": "json"})
    assert resp.status_code == 400


def test_unknown_format_is_422(client):
    resp = client.get("/entities/users/filter", params={"format": "xml"})
    assert resp.status_code == 422


def test_unknown_entity_is_404(client):
    resp = client.get("/entities/nope/filter", params={"filter": "{a=1}"})
    assert resp.status_code == 404


def test_reload(client, schemas_file):
    schemas_file.write_text(
        "entities:\n  users:\n    fields:\n      name: {queryable: true}\n",
        encoding="utf-8",
    )
    resp = client.post("/reload")
    assert resp.status_code == 200
    assert resp.json() == {"reloaded": {"users": "ok (1 queryable)"}}
    assert client.get("/healthz").json()["entities"] == ["users"]


def test_reload_failure_is_500(client, schemas_file):
    schemas_file.unlink()
    resp = client.post("/reload")
    assert resp.status_code == 500


def test_very_long_number_is_not_a_server_error(client):
    resp = client.get("/entities/users/filter", params={"filter": "{name=%s}" % ("9" * 5000)})
    assert resp.status_code == 200
    assert resp.json()["filter"] == {"name": None}


def test_numeric_operator_bound_stays_string(client):
    resp = client.get("/entities/users/filter", params={"filter": "{name=$lte:30}"})
    assert resp.json()["filter"] == {"name": {"$lte": "30"}}

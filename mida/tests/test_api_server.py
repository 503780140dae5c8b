from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient

from mida.api.server import ServiceConfig, create_app
from mida.core import ValidationConfig

REVIEW = {
    "type": "http://data-vocabulary.org/Review",
    "properties": {
        "summary": ["Solid"],
        "reviewer": [{"type": "http://data-vocabulary.org/Person", "properties": {"name": ["Ann"]}}],
        "colour": ["red"],
    },
}


def _client(**cfg) -> TestClient:
    return TestClient(create_app(config=ServiceConfig(**cfg)))


def test_api_health_and_request_id() -> None:
    client = _client()

    r = client.get("/health", headers={"X-Request-ID": "abc123"})

    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["vocabularies"] >= 2
    assert r.headers.get("x-request-id") == "abc123"


def test_api_lists_vocabularies() -> None:
    r = _client().get("/vocabularies")

    assert r.status_code == 200
    ids = [v["vocabulary_id"] for v in r.json()]
    assert "http://data-vocabulary.org/Review" in ids
    assert ids[-1] == "mida:generic"


def test_api_validate_roundtrip() -> None:
    client = _client()

    r = client.post("/validate", json={"items": [REVIEW, {"type": "x", "properties": {"a": ["1"]}}]})

    assert r.status_code == 200
    data = r.json()
    review, generic = data["items"]
    assert set(review["properties"]) == {"summary", "reviewer"}
    assert review["properties"]["reviewer"][0]["properties"]["name"] == ["Ann"]
    assert generic["vocabulary"] == "mida:generic"
    assert len(data["digests"]) == 2
    assert r.headers.get("x-request-id")


def test_api_validate_coerce_values_override() -> None:
    rating = {"type": "http://data-vocabulary.org/Rating", "properties": {"value": ["5"]}}

    r = _client().post("/validate", json={"items": [rating], "coerce_values": True})

    assert r.status_code == 200
    assert r.json()["items"][0]["properties"]["value"] == ["5.0"]


def test_api_validate_malformed_input() -> None:
    r = _client().post("/validate", json={"items": [{"type": "x", "properties": {"a": [1]}}]})

    assert r.status_code == 422
    body = r.json()
    assert body["error"] == "malformed_input"
    assert body["path"] == "$.properties.a[0]"


def test_api_validate_depth_limit() -> None:
    client = _client(validation=ValidationConfig(max_depth=0))

    r = client.post("/validate", json={"items": [REVIEW]})

    assert r.status_code == 422
    assert r.json() == {
        "error": "recursion_limit_exceeded",
        "detail": "item-scope nesting depth 1 exceeds maximum 0",
        "depth": 1,
    }


def test_api_validate_rejects_too_many_items() -> None:
    r = _client(max_items=1).post("/validate", json={"items": [REVIEW, REVIEW]})

    assert r.status_code == 413


def test_api_loads_vocabulary_pack(tmp_path: Path) -> None:
    pack = tmp_path / "pack.json"
    pack.write_text(
        json.dumps({"vocabularies": [{"id": "http://example.com/Thing", "properties": {"name": {"num": "one"}}}]}),
        encoding="utf-8",
    )
    client = _client(vocabulary_pack=str(pack))

    r = client.post(
        "/validate",
        json={"items": [{"type": "http://example.com/Thing", "properties": {"name": ["a"], "b": ["c"]}}]},
    )

    assert r.status_code == 200
    item = r.json()["items"][0]
    assert item["vocabulary"] == "http://example.com/Thing"
    assert item["properties"] == {"name": ["a"]}


def test_api_validate_deep_mapping_returns_422() -> None:
    data = {"type": "leaf"}
    for _ in range(40):
        data = {"type": "node", "properties": {"child": [data]}}

    r = _client().post("/validate", json={"items": [data]})

    assert r.status_code == 422
    assert r.json()["error"] == "recursion_limit_exceeded"
    assert r.json()["depth"] == 33

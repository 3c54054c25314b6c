"""Tests for the openslo-editor REST API."""

from __future__ import annotations

import json
from typing import Any

import pytest
from fastapi.testclient import TestClient

from openslo_editor.api import create_app
from openslo_editor.assistant import ConfigGenerator
from openslo_editor.library import InMemoryLibraryStore
from openslo_editor.settings import EditorSettings
from openslo_editor.slo.spec import DEFAULT_CONFIGURATION


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _payload(**overrides: Any) -> dict[str, Any]:
    data = DEFAULT_CONFIGURATION.to_dict()
    data.update(overrides)
    return data


@pytest.fixture()
def store() -> InMemoryLibraryStore:
    return InMemoryLibraryStore()


@pytest.fixture()
def client(store: InMemoryLibraryStore) -> TestClient:
    return TestClient(create_app(store=store))


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["version"] == "0.1.0"


# ---------------------------------------------------------------------------
# Validate / render / export
# ---------------------------------------------------------------------------


class TestDocuments:
    def test_validate_valid(self, client: TestClient) -> None:
        resp = client.post("/api/v1/validate", json=_payload())
        assert resp.status_code == 200
        assert resp.json() == {"errors": {}, "valid": True}

    def test_validate_invalid(self, client: TestClient) -> None:
        resp = client.post("/api/v1/validate", json=_payload(name="Bad_Name", target=None))
        body = resp.json()
        assert body["valid"] is False
        assert set(body["errors"]) == {"name", "target"}

    def test_render_invalid_still_renders(self, client: TestClient) -> None:
        resp = client.post("/api/v1/render", json=_payload(service=""))
        body = resp.json()
        assert resp.status_code == 200
        assert body["exportable"] is False
        assert body["errors"] == {"service": "Service is required"}
        assert body["document"].startswith("apiVersion: openslo/v1\nkind: SLO\n")

    def test_render_reference(self, client: TestClient) -> None:
        payload = _payload(indicatorMode="reference", indicatorRef="worker-latency-sli")
        body = client.post("/api/v1/render", json=payload).json()
        assert body["exportable"] is True
        assert "  indicatorRef: worker-latency-sli" in body["document"]

    def test_null_reference_name_is_a_validation_error(self, client: TestClient) -> None:
        resp = client.post("/api/v1/validate", json=_payload(indicatorMode="reference", indicatorRef=None))
        assert resp.status_code == 200
        assert resp.json()["errors"] == {"indicatorRef": "SLI Reference name is required"}

    def test_render_unknown_budgeting_method(self, client: TestClient) -> None:
        body = client.post("/api/v1/render", json=_payload(budgetingMethod="RatioTimeslices")).json()
        assert "  budgetingMethod: RatioTimeslices\n" in body["document"]
        assert body["exportable"] is True

    def test_malformed_body(self, client: TestClient) -> None:
        resp = client.post("/api/v1/validate", json=_payload(kind="SLX"))
        assert resp.status_code == 422

    def test_export(self, client: TestClient) -> None:
        resp = client.post("/api/v1/export", json=_payload())
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/yaml")
        assert 'filename="my-service-availability.yaml"' in resp.headers["content-disposition"]
        assert resp.text.endswith("      value: 0.5\n")

    def test_export_invalid(self, client: TestClient) -> None:
        resp = client.post("/api/v1/export", json=_payload(timeWindowCount=0))
        assert resp.status_code == 422
        assert resp.json()["detail"]["errors"] == {"timeWindowCount": "Must be a positive integer"}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TestTemplates:
    def test_list(self, client: TestClient) -> None:
        body = client.get("/api/v1/templates").json()
        assert "latency" in body["templates"]

    def test_get(self, client: TestClient) -> None:
        body = client.get("/api/v1/templates/sli-reference").json()
        assert body["indicatorRef"] == "worker-latency-sli"
        assert body["id"] == ""

    def test_unknown(self, client: TestClient) -> None:
        assert client.get("/api/v1/templates/nope").status_code == 404


# ---------------------------------------------------------------------------
# Library
# ---------------------------------------------------------------------------


class TestLibrary:
    def test_save_list_delete(self, client: TestClient, store: InMemoryLibraryStore) -> None:
        resp = client.post("/api/v1/library", json=_payload())
        assert resp.status_code == 201
        item_id = resp.json()["id"]
        assert item_id

        body = client.get("/api/v1/library").json()
        assert body["count"] == 1
        assert body["items"][0]["id"] == item_id
        assert [item.id for item in store.get_all()] == [item_id]

        resaved = client.post("/api/v1/library", json=_payload(id=item_id, displayName="Renamed"))
        assert resaved.json()["id"] == item_id
        assert client.get("/api/v1/library").json()["count"] == 1

        assert client.get(f"/api/v1/library/{item_id}").json()["displayName"] == "Renamed"

        assert client.delete(f"/api/v1/library/{item_id}").json() == {"deleted": item_id, "current": None}
        assert client.get(f"/api/v1/library/{item_id}").status_code == 404
        assert client.delete(f"/api/v1/library/{item_id}").status_code == 404

    def test_save_invalid(self, client: TestClient, store: InMemoryLibraryStore) -> None:
        resp = client.post("/api/v1/library", json=_payload(name=""))
        assert resp.status_code == 422
        assert resp.json()["detail"]["action"] == "save"
        assert store.get_all() == []

    def test_delete_clears_current_identifier(self, client: TestClient) -> None:
        saved = client.post("/api/v1/library", json=_payload()).json()
        resp = client.request("DELETE", f"/api/v1/library/{saved['id']}", json=saved)
        assert resp.status_code == 200
        body = resp.json()
        assert body["deleted"] == saved["id"]
        assert body["current"]["id"] == ""
        assert body["current"]["name"] == saved["name"]

    def test_delete_keeps_other_current(self, client: TestClient) -> None:
        first = client.post("/api/v1/library", json=_payload()).json()
        second = client.post("/api/v1/library", json=_payload(name="second")).json()
        resp = client.request("DELETE", f"/api/v1/library/{first['id']}", json=second)
        assert resp.json()["current"]["id"] == second["id"]
        assert [item["id"] for item in client.get("/api/v1/library").json()["items"]] == [second["id"]]


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------

REPLY = {
    "name": "checkout-availability",
    "displayName": "Checkout Availability",
    "service": "checkout",
    "target": 0.995,
    "indicator": {
        "type": "ratio",
        "good": {"type": "prometheus", "query": "sum(rate(ok[5m]))"},
        "total": {"type": "prometheus", "query": "sum(rate(all[5m]))"},
    },
}


def _assistant_client(reply: str, store: InMemoryLibraryStore) -> TestClient:
    generator = ConfigGenerator(lambda prompt: reply)
    return TestClient(create_app(store=store, generator=generator))


class TestAssistant:
    def test_draft(self, store: InMemoryLibraryStore) -> None:
        client = _assistant_client(json.dumps(REPLY), store)
        resp = client.post("/api/v1/assistant", json={"description": "99.5% of checkouts succeed"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["valid"] is True
        assert body["errors"] == {}
        assert body["draft"]["name"] == "checkout-availability"
        assert body["draft"]["id"] == ""
        assert "    ratioMetric:\n" in body["document"]
        assert store.get_all() == []

    def test_invalid_draft_reported(self, store: InMemoryLibraryStore) -> None:
        reply = json.dumps({**REPLY, "name": None, "target": 5})
        body = _assistant_client(reply, store).post("/api/v1/assistant", json={"description": "x"}).json()
        assert body["valid"] is False
        assert body["errors"] == {"name": "Name is required", "target": "Must be between 0.0 and 1.0"}

    def test_backend_failure(self, store: InMemoryLibraryStore) -> None:
        resp = _assistant_client("not json", store).post("/api/v1/assistant", json={"description": "x"})
        assert resp.status_code == 502

    def test_empty_description(self, store: InMemoryLibraryStore) -> None:
        resp = _assistant_client("{}", store).post("/api/v1/assistant", json={"description": ""})
        assert resp.status_code == 422

    def test_not_configured(self, store: InMemoryLibraryStore, tmp_path) -> None:
        settings = EditorSettings(library_path=tmp_path / "library.json", gemini_api_key="")
        client = TestClient(create_app(store=store, settings=settings))
        resp = client.post("/api/v1/assistant", json={"description": "x"})
        assert resp.status_code == 503

"""
Tests: HTTP layer — status codes, error bodies and correlation header.

Run with:
    pytest supplychain_negotiation/tests/test_api.py -v
"""

import json

import pytest
from fastapi.testclient import TestClient

from supplychain_negotiation.api import create_app
from supplychain_negotiation.api.routes import CORRELATION_HEADER, get_negotiation_service
from supplychain_negotiation.services.audit_service import AuditService
from supplychain_negotiation.services.negotiation_service import NegotiationService
from supplychain_negotiation.utils.hashing import sha256_hash

from conftest import request_payload

NEGOTIATE_URL = "/api/negotiation/negotiate"


class _ExplodingService:
    def negotiate(self, payload, correlation_id=None):
        raise RuntimeError("boom")


@pytest.fixture
def audit():
    return AuditService(mock_mode=True)


@pytest.fixture
def client(audit):
    app = create_app()
    app.dependency_overrides[get_negotiation_service] = lambda: NegotiationService(audit=audit)
    with TestClient(app) as c:
        yield c


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestNegotiateEndpoint:
    def test_consensus_response(self, client, audit):
        resp = client.post(NEGOTIATE_URL, json=request_payload(), headers={CORRELATION_HEADER: "cid-1"})

        assert resp.status_code == 200
        assert resp.headers[CORRELATION_HEADER] == "cid-1"
        body = resp.json()
        assert [s["strategyId"] for s in body["result"]["balancedStrategies"]] == ["B", "C", "A"]
        assert "conflictEscalation" not in body["result"]
        assert body["metadata"]["correlationId"] == "cid-1"
        assert body["metadata"]["negotiationMethod"] == "multi-objective-weighted"
        assert len(audit.get_trail("SCN-001")) == 1

    def test_conflict_is_still_ok(self, client):
        payload = request_payload(userPreferences={"maxCostImpact": 5_000})
        resp = client.post(NEGOTIATE_URL, json=payload)

        assert resp.status_code == 200
        escalation = resp.json()["result"]["conflictEscalation"]
        assert escalation["reason"] == "threshold_violations"
        assert escalation["conflictingObjectives"] == ["cost"]
        assert escalation["requiresUserInput"] is True

    def test_unbounded_thresholds_serialize_as_null(self, client):
        body = client.post(NEGOTIATE_URL, json=request_payload()).json()
        params = body["result"]["negotiationParameters"]
        assert params["thresholds"]["maxCostImpact"] is None
        assert params["thresholds"]["minRiskReduction"] == 0.0
        region = body["result"]["tradeoffVisualizations"][0]["optimalRegion"]
        assert region["xMax"] is None

    def test_generated_correlation_id_echoed(self, client):
        resp = client.post(NEGOTIATE_URL, json=request_payload())
        cid = resp.headers[CORRELATION_HEADER]
        assert cid.startswith("negotiation-")
        assert resp.json()["metadata"]["correlationId"] == cid

    def test_empty_impacts_object_accepted(self, client):
        resp = client.post(NEGOTIATE_URL, json=request_payload(impacts={}))
        assert resp.status_code == 200
        assert len(resp.json()["result"]["balancedStrategies"]) == 3

    def test_audit_digest_matches_returned_result(self, client, audit):
        resp = client.post(NEGOTIATE_URL, json=request_payload(), headers={CORRELATION_HEADER: "cid-d"})
        wire_result = json.dumps(resp.json()["result"], separators=(",", ":"), ensure_ascii=False)

        (entry,) = audit.get_trail("SCN-001")
        assert entry["resultDigest"] == sha256_hash(wire_result)


class TestErrors:
    def test_empty_body(self, client):
        resp = client.post(NEGOTIATE_URL, headers={CORRELATION_HEADER: "cid-e"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Request body is required", "correlationId": "cid-e"}
        assert resp.headers[CORRELATION_HEADER] == "cid-e"

    def test_invalid_json(self, client):
        resp = client.post(
            NEGOTIATE_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Request body must be valid JSON"

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"scenarioId": ""}, "scenarioId is required"),
            ({"impacts": None}, "impacts is required"),
            ({"strategies": []}, "strategies array is required and must not be empty"),
        ],
    )
    def test_missing_fields(self, client, audit, overrides, message):
        resp = client.post(NEGOTIATE_URL, json=request_payload(**overrides))
        assert resp.status_code == 400
        assert resp.json()["error"] == message
        assert audit.get_all() == []

    def test_internal_error(self):
        app = create_app()
        app.dependency_overrides[get_negotiation_service] = lambda: _ExplodingService()
        with TestClient(app) as c:
            resp = c.post(NEGOTIATE_URL, json=request_payload(), headers={CORRELATION_HEADER: "cid-x"})

        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Internal server error",
            "message": "boom",
            "correlationId": "cid-x",
        }

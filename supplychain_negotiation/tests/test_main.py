"""Tests: file-driven entry point."""

import json

from supplychain_negotiation.main import run

from conftest import request_payload


def test_run_from_request_file(tmp_path, caplog):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request_payload(correlationId="file-1")), encoding="utf-8")

    with caplog.at_level("INFO"):
        response = run(str(path))

    assert response.metadata.correlation_id == "file-1"
    assert response.result.balanced_strategies[0].strategy_id == "B"
    assert "NEGOTIATION RESULT SUMMARY" in caplog.text

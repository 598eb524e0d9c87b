"""
Negotiation Service — request handling around the pure negotiation pipeline.

Validates the request contract before any computation, resolves the
correlation id, runs the graph, hands the audit record to the sink and
wraps the result with response metadata.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from pydantic import ValidationError

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.models.schemas import (
    NegotiationRequest,
    NegotiationResponse,
    ResponseMetadata,
)
from supplychain_negotiation.orchestration.graph import build_graph, run_negotiation
from supplychain_negotiation.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class NegotiationValidationError(ValueError):
    """Caller-correctable request problem (HTTP 400)."""


def resolve_correlation_id(
    header_value: Optional[str] = None,
    payload: Optional[dict[str, Any]] = None,
) -> str:
    """Header first, then the request body, then a generated id."""
    if header_value:
        return header_value
    if isinstance(payload, dict) and payload.get("correlationId"):
        return str(payload["correlationId"])
    return f"negotiation-{int(time.time() * 1000)}"


def validate_request(payload: Any) -> NegotiationRequest:
    """Reject malformed requests before any scoring happens."""
    if not payload:
        raise NegotiationValidationError("Request body is required")
    if not isinstance(payload, dict):
        raise NegotiationValidationError("Request body must be a JSON object")
    if not payload.get("scenarioId"):
        raise NegotiationValidationError("scenarioId is required")
    if payload.get("impacts") is None:
        raise NegotiationValidationError("impacts is required")
    strategies = payload.get("strategies")
    if not isinstance(strategies, list) or not strategies:
        raise NegotiationValidationError("strategies array is required and must not be empty")

    try:
        return NegotiationRequest.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise NegotiationValidationError(f"Invalid negotiation request: {problems}") from e


class NegotiationService:
    """Runs one negotiation per call; holds no per-call state."""

    def __init__(self, audit: AuditService | None = None):
        self.settings = get_settings()
        self.audit = audit or AuditService()
        self._graph = build_graph()

    def negotiate(
        self,
        payload: Any,
        correlation_id: Optional[str] = None,
    ) -> NegotiationResponse:
        t0 = time.perf_counter()
        cid = correlation_id or resolve_correlation_id(
            payload=payload if isinstance(payload, dict) else None
        )

        try:
            request = validate_request(payload)
        except NegotiationValidationError as e:
            logger.warning(f"[{cid}] Request validation failed: {e}")
            raise

        logger.info(
            f"[{cid}] Starting cross-agent negotiation — scenario={request.scenario_id}, "
            f"strategy_count={len(request.strategies)}"
        )

        final_state = run_negotiation(request, correlation_id=cid, compiled=self._graph)
        result = final_state.to_result()

        if final_state.audit_record is not None:
            self.audit.publish(final_state.audit_record)

        elapsed_ms = (time.perf_counter() - t0) * 1000
        logger.info(
            f"[{cid}] Negotiation completed in {elapsed_ms:.1f}ms — "
            f"balanced={len(result.balanced_strategies)}, "
            f"consensus={result.conflict_escalation is None}"
        )

        return NegotiationResponse(
            result=result,
            metadata=ResponseMetadata(
                correlation_id=cid,
                execution_time_ms=elapsed_ms,
                negotiation_method=self.settings.negotiation_method,
            ),
        )

"""
API routes — thin HTTP layer that delegates to the NegotiationService.

Routes:
  GET  /health                        → API health check
  POST /api/negotiation/negotiate     → Run one negotiation
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from supplychain_negotiation.services.negotiation_service import (
    NegotiationService,
    NegotiationValidationError,
    resolve_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-Id"

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
negotiation_router = APIRouter()


@lru_cache()
def get_negotiation_service() -> NegotiationService:
    return NegotiationService()


def _error(status_code: int, correlation_id: str, **body: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={**body, "correlationId": correlation_id},
        headers={CORRELATION_HEADER: correlation_id},
    )


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Negotiation ──────────────────────────────────────────

@negotiation_router.post("/negotiate")
async def negotiate(
    request: Request,
    service: NegotiationService = Depends(get_negotiation_service),
):
    """
    Rank, filter and explain the submitted mitigation strategies.
    A detected conflict is still a 200 — see result.conflictEscalation.
    """
    raw = await request.body()
    payload: Any = None
    if raw:
        try:
            payload = json.loads(raw)
        except ValueError:
            cid = resolve_correlation_id(request.headers.get(CORRELATION_HEADER))
            logger.warning(f"[{cid}] Request body is not valid JSON")
            return _error(400, cid, error="Request body must be valid JSON")

    cid = resolve_correlation_id(
        request.headers.get(CORRELATION_HEADER),
        payload if isinstance(payload, dict) else None,
    )
    logger.info(f"[{cid}] Negotiation requested: {request.method} {request.url.path}")

    try:
        response = service.negotiate(payload, correlation_id=cid)
    except NegotiationValidationError as e:
        return _error(400, cid, error=str(e))
    except Exception as e:
        logger.exception(f"[{cid}] Negotiation failed: {e}")
        return _error(500, cid, error="Internal server error", message=str(e))

    return Response(
        content=response.to_wire_json(),
        media_type="application/json",
        headers={CORRELATION_HEADER: cid},
    )

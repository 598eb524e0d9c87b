"""
Supply Chain Negotiation Engine — Main Entry Point

Run one negotiation from a JSON request file (CLI):
    python -m supplychain_negotiation path/to/request.json

Run as an API server (for the dashboard):
    python -m supplychain_negotiation --serve
    # or: uvicorn supplychain_negotiation.api:app --reload --port 8000

Or import and run programmatically:
    from supplychain_negotiation.main import run
    response = run("path/to/request.json")
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.models.schemas import NegotiationResponse
from supplychain_negotiation.services.negotiation_service import NegotiationService
from supplychain_negotiation.utils.logger import setup_logging


def run(request_path: str) -> NegotiationResponse:
    """Run one negotiation for the request stored at `request_path`."""
    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    payload = json.loads(Path(request_path).read_text(encoding="utf-8"))
    response = NegotiationService().negotiate(payload)

    _print_summary(response)
    logger.debug(response.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return response


def _print_summary(response: NegotiationResponse) -> None:
    """Print a human-readable summary of the negotiation result."""
    logger = logging.getLogger(__name__)
    result = response.result
    params = result.negotiation_parameters

    logger.info("-" * 60)
    logger.info("  NEGOTIATION RESULT SUMMARY")
    logger.info("-" * 60)
    logger.info(f"  Correlation ID: {response.metadata.correlation_id}")
    logger.info(
        f"  Weights:        cost={params.cost_weight:.2f} "
        f"risk={params.risk_weight:.2f} sustainability={params.sustainability_weight:.2f}"
    )
    for rank, strategy in enumerate(result.balanced_strategies, start=1):
        logger.info(
            f"  #{rank} {strategy.name} ({strategy.strategy_id}) — "
            f"cost {strategy.cost_impact:,.0f}, risk {strategy.risk_reduction:.0%}, "
            f"CO2 {strategy.sustainability_impact:,.0f} kg"
        )
    if result.conflict_escalation is not None:
        logger.info(f"  Escalation:     {result.conflict_escalation.reason.value}")
        logger.info(f"  Explanation:    {result.conflict_escalation.explanation}")
    else:
        logger.info("  Escalation:     none (consensus reached)")
    logger.info(f"  Execution time: {response.metadata.execution_time_ms:.1f}ms")
    logger.info("-" * 60)


def serve(host: str | None = None, port: int | None = None) -> None:
    """Start the FastAPI server."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    host = host or settings.api_host
    port = port or settings.api_port
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("supplychain_negotiation.api:app", host=host, port=port, reload=settings.debug)


if __name__ == "__main__":
    if "--serve" in sys.argv:
        serve()
    elif len(sys.argv) > 1:
        run(sys.argv[1])
    else:
        print("usage: python -m supplychain_negotiation <request.json> | --serve")
        sys.exit(2)

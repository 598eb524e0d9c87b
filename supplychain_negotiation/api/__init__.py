"""
FastAPI application factory and API package.

Run with:
    uvicorn supplychain_negotiation.api:app --reload --port 8000

Or via main.py:
    python -m supplychain_negotiation --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.api.routes import health_router, negotiation_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Supply Chain Negotiation API",
        description="Ranks mitigation strategies across cost, risk and sustainability",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS: allow the dashboard (adjust origins in production)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-Id"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(
        negotiation_router, prefix="/api/negotiation", tags=["Negotiation"]
    )

    logger.info(f"{settings.app_name} API configured")
    return application


# Module-level instance for `uvicorn supplychain_negotiation.api:app`
app = create_app()

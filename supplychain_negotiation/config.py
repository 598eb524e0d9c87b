"""
Application configuration using Pydantic Settings.
All environment-specific values and tunable negotiation constants are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import model_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Supply Chain Negotiation Engine"
    debug: bool = False

    # ── Negotiation weights ──────────────────────────────
    # 0.34 breaks the three-way tie of the default ordering
    default_cost_weight: float = 0.33
    default_risk_weight: float = 0.33
    default_sustainability_weight: float = 0.34

    # ── Negotiation limits ───────────────────────────────
    ambiguity_variance_threshold: float = 0.001
    max_balanced_strategies: int = 3
    negotiation_method: str = "multi-objective-weighted"

    # ── Audit sink ───────────────────────────────────────
    audit_backend: str = "memory"  # "memory" | "mongodb"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "supply_chain"
    audit_collection: str = "negotiation_audit"

    # ── API ──────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> "Settings":
        total = (
            self.default_cost_weight
            + self.default_risk_weight
            + self.default_sustainability_weight
        )
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Default negotiation weights must sum to 1.0, got {total}")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()

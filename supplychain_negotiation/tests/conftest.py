"""Shared fixtures for the negotiation engine tests."""

import pytest
from hypothesis import HealthCheck, settings

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.models.schemas import (
    ImpactAnalysis,
    MitigationStrategy,
    NegotiationRequest,
    UserPreferences,
)

# _fresh_settings is autouse and idempotent, so hypothesis may share it.
settings.register_profile("negotiation", suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("negotiation")


def make_strategy(strategy_id: str, cost: float, risk: float, sustainability: float, name: str = "") -> MitigationStrategy:
    return MitigationStrategy(
        strategy_id=strategy_id,
        name=name or f"Strategy {strategy_id}",
        cost_impact=cost,
        risk_reduction=risk,
        sustainability_impact=sustainability,
    )


def reference_strategies() -> list[MitigationStrategy]:
    """Alternate supplier (cheap), air freight (safe, clean), safety stock (middle)."""
    return [
        make_strategy("A", 10_000, 0.60, 500, name="Alternate supplier"),
        make_strategy("B", 50_000, 0.90, 200, name="Expedited air freight"),
        make_strategy("C", 30_000, 0.75, 350, name="Safety stock buffer"),
    ]


def near_tie_strategies() -> list[MitigationStrategy]:
    """Composite scores 0.500 / 0.495 / 0.505 under the default weights."""
    return [
        make_strategy("A", 10_000, 0.5, 200),
        make_strategy("B", 20_000, 0.7, 300),
        make_strategy("C", 30_000, 0.6, 100),
    ]


def request_payload(**overrides) -> dict:
    payload = {
        "scenarioId": "SCN-001",
        "userId": "user-42",
        "impacts": {
            "costImpact": 120_000,
            "deliveryTimeImpact": 72,
            "inventoryImpact": 0.3,
        },
        "strategies": [s.model_dump(by_alias=True) for s in reference_strategies()],
    }
    payload.update(overrides)
    return payload


def make_request(preferences: UserPreferences | None = None, strategies=None) -> NegotiationRequest:
    return NegotiationRequest(
        scenario_id="SCN-001",
        user_id="user-42",
        impacts=ImpactAnalysis(cost_impact=120_000, delivery_time_impact=72),
        strategies=strategies if strategies is not None else reference_strategies(),
        user_preferences=preferences,
    )


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

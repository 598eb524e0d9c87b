"""
Parameter Deriver — turns optional decision-maker preferences into the
weight triple and threshold triple used by every later stage.
"""

from __future__ import annotations

import logging

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.engine.base_stage import BaseStage
from supplychain_negotiation.models.enums import StageName
from supplychain_negotiation.models.schemas import (
    NegotiationParameters,
    NegotiationThresholds,
    UserPreferences,
)
from supplychain_negotiation.models.state import NegotiationState

logger = logging.getLogger(__name__)

WeightTriple = tuple[float, float, float]  # (cost, risk, sustainability)

# Checked in order; the first flag set on the preferences wins.
PRIORITY_CHAIN: list[tuple[str, WeightTriple]] = [
    ("prioritize_cost", (0.50, 0.25, 0.25)),
    ("prioritize_risk", (0.25, 0.50, 0.25)),
    ("prioritize_sustainability", (0.25, 0.25, 0.50)),
]


class ParameterDeriver(BaseStage):
    name = StageName.PARAMETER_DERIVER

    def __init__(self, default_weights: WeightTriple | None = None):
        if default_weights is None:
            settings = get_settings()
            default_weights = (
                settings.default_cost_weight,
                settings.default_risk_weight,
                settings.default_sustainability_weight,
            )
        self.default_weights = default_weights

    def _real_process(self, state: NegotiationState) -> NegotiationState:
        state.negotiation_parameters = self.derive(state.user_preferences)
        logger.debug(
            f"[{state.correlation_id}] Negotiation parameters defined: "
            f"{state.negotiation_parameters.model_dump()}"
        )
        return state

    def derive(self, preferences: UserPreferences | None = None) -> NegotiationParameters:
        """Resolve weights through the priority chain and apply any thresholds."""
        cost_w, risk_w, sustainability_w = self.resolve_weights(preferences)

        thresholds = NegotiationThresholds()
        if preferences is not None:
            if preferences.max_cost_impact is not None:
                thresholds.max_cost_impact = preferences.max_cost_impact
            if preferences.min_risk_reduction is not None:
                thresholds.min_risk_reduction = preferences.min_risk_reduction
            if preferences.max_sustainability_impact is not None:
                thresholds.max_sustainability_impact = preferences.max_sustainability_impact

        return NegotiationParameters(
            cost_weight=cost_w,
            risk_weight=risk_w,
            sustainability_weight=sustainability_w,
            thresholds=thresholds,
        )

    def resolve_weights(self, preferences: UserPreferences | None) -> WeightTriple:
        if preferences is None:
            return self.default_weights
        for flag, weights in PRIORITY_CHAIN:
            if getattr(preferences, flag):
                return weights
        return self.default_weights

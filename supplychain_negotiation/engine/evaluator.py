"""
Strategy Evaluator — min-max normalizes each strategy's three raw impacts
against the candidate set and folds them into one weighted negotiation score.

Normalization direction:
  - cost and sustainability impact: lower raw value → higher score
  - risk reduction: higher raw value → higher score
A dimension on which every candidate ties scores a neutral 0.5.
"""

from __future__ import annotations

import logging
from typing import Sequence

from supplychain_negotiation.engine.base_stage import BaseStage
from supplychain_negotiation.models.enums import StageName
from supplychain_negotiation.models.schemas import (
    EvaluatedStrategy,
    MitigationStrategy,
    NegotiationParameters,
    NegotiationThresholds,
)
from supplychain_negotiation.models.state import NegotiationState

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5


class StrategyEvaluator(BaseStage):
    name = StageName.STRATEGY_EVALUATOR

    def _real_process(self, state: NegotiationState) -> NegotiationState:
        if state.negotiation_parameters is None:
            raise ValueError("No negotiation parameters in state — PARAMETER_DERIVER must run first")

        state.evaluated_strategies = self.evaluate(state.strategies, state.negotiation_parameters)
        meeting = sum(1 for e in state.evaluated_strategies if e.meets_thresholds)
        logger.debug(
            f"[{state.correlation_id}] Strategies evaluated: "
            f"total={len(state.evaluated_strategies)}, meeting_thresholds={meeting}"
        )
        return state

    def evaluate(
        self,
        strategies: Sequence[MitigationStrategy],
        params: NegotiationParameters,
    ) -> list[EvaluatedStrategy]:
        """Score every strategy; output order matches input order."""
        if not strategies:
            raise ValueError("Cannot evaluate an empty strategy set")

        cost_range = _bounds(s.cost_impact for s in strategies)
        risk_range = _bounds(s.risk_reduction for s in strategies)
        sustainability_range = _bounds(s.sustainability_impact for s in strategies)

        evaluated: list[EvaluatedStrategy] = []
        for strategy in strategies:
            cost_score = 1.0 - _normalize(strategy.cost_impact, *cost_range)
            risk_score = _normalize(strategy.risk_reduction, *risk_range)
            sustainability_score = 1.0 - _normalize(
                strategy.sustainability_impact, *sustainability_range
            )

            negotiation_score = (
                params.cost_weight * cost_score
                + params.risk_weight * risk_score
                + params.sustainability_weight * sustainability_score
            )

            evaluated.append(EvaluatedStrategy(
                strategy=strategy,
                cost_score=_clamp(cost_score),
                risk_score=_clamp(risk_score),
                sustainability_score=_clamp(sustainability_score),
                negotiation_score=_clamp(negotiation_score),
                meets_thresholds=meets_thresholds(strategy, params.thresholds),
            ))

        return evaluated


def meets_thresholds(strategy: MitigationStrategy, thresholds: NegotiationThresholds) -> bool:
    """Check the raw (unnormalized) impacts against the absolute thresholds."""
    return (
        strategy.cost_impact <= thresholds.max_cost_impact
        and strategy.risk_reduction >= thresholds.min_risk_reduction
        and strategy.sustainability_impact <= thresholds.max_sustainability_impact
    )


# ── Helpers ──────────────────────────────────────────────

def _bounds(values) -> tuple[float, float]:
    values = list(values)
    return min(values), max(values)


def _normalize(value: float, low: float, high: float) -> float:
    """Position of value within [low, high]; 0.5 when the range is degenerate."""
    if high > low:
        return (value - low) / (high - low)
    return NEUTRAL_SCORE


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))

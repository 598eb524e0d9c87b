"""
Conflict Detector — decides whether the negotiation needs a human.

Two failure modes, checked in order, at most one reported:
  1. threshold_violations — no candidate satisfies every threshold.
  2. ambiguous_trade_offs — the top candidates' scores are statistically
     indistinguishable (population variance below a tunable cutoff).
The variance cutoff is a heuristic, not a proof that no clear winner exists.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Sequence, Union

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.engine.base_stage import BaseStage
from supplychain_negotiation.engine.selector import rank_strategies
from supplychain_negotiation.models.enums import Objective, StageName
from supplychain_negotiation.models.schemas import (
    AmbiguousTradeOffConflict,
    ConflictEscalation,
    EvaluatedStrategy,
    MitigationStrategy,
    NegotiationParameters,
    NegotiationThresholds,
    ThresholdViolationConflict,
)
from supplychain_negotiation.models.state import NegotiationState

logger = logging.getLogger(__name__)

AMBIGUITY_SAMPLE_SIZE = 3

AMBIGUOUS_EXPLANATION = (
    "The top strategies have very similar overall scores, making it difficult to "
    "determine a clear winner. This suggests that the objectives are in tension and "
    "require careful consideration of trade-offs. Please review the detailed trade-off "
    "visualizations to make an informed decision."
)

_Limit = Callable[[NegotiationThresholds], float]
_Violation = Callable[[MitigationStrategy, float], bool]

# (objective, threshold, violation check, sentence template) in reporting order
_THRESHOLD_CHECKS: list[tuple[Objective, _Limit, _Violation, str]] = [
    (
        Objective.COST,
        lambda t: t.max_cost_impact,
        lambda s, limit: s.cost_impact > limit,
        "All strategies exceed the maximum cost threshold of {value}.",
    ),
    (
        Objective.RISK,
        lambda t: t.min_risk_reduction,
        lambda s, limit: s.risk_reduction < limit,
        "All strategies fail to meet the minimum risk reduction threshold of {value}.",
    ),
    (
        Objective.SUSTAINABILITY,
        lambda t: t.max_sustainability_impact,
        lambda s, limit: s.sustainability_impact > limit,
        "All strategies exceed the maximum sustainability impact threshold of {value}.",
    ),
]


class ConflictDetector(BaseStage):
    name = StageName.CONFLICT_DETECTOR

    def __init__(self, variance_threshold: float | None = None):
        if variance_threshold is None:
            variance_threshold = get_settings().ambiguity_variance_threshold
        self.variance_threshold = variance_threshold

    def _real_process(self, state: NegotiationState) -> NegotiationState:
        if state.negotiation_parameters is None:
            raise ValueError("No negotiation parameters in state — PARAMETER_DERIVER must run first")

        conflict = self.detect(state.evaluated_strategies, state.negotiation_parameters)
        state.conflict = conflict
        if conflict is not None:
            state.conflict_escalation = ConflictEscalation.from_conflict(conflict)
            logger.warning(
                f"[{state.correlation_id}] Conflict detected: reason={conflict.reason.value}, "
                f"objectives={[o.value for o in conflict.objectives]}"
            )
        else:
            state.conflict_escalation = None
        return state

    def detect(
        self,
        evaluated: Sequence[EvaluatedStrategy],
        params: NegotiationParameters,
    ) -> Optional[Union[ThresholdViolationConflict, AmbiguousTradeOffConflict]]:
        if not any(e.meets_thresholds for e in evaluated):
            return self._threshold_conflict(evaluated, params.thresholds)

        top_scores = [
            e.negotiation_score
            for e in rank_strategies(evaluated)[:AMBIGUITY_SAMPLE_SIZE]
        ]
        if len(top_scores) >= 2:
            variance = population_variance(top_scores)
            if variance < self.variance_threshold:
                logger.debug(
                    f"Top scores {top_scores} have variance {variance:.6f} "
                    f"< {self.variance_threshold}"
                )
                return AmbiguousTradeOffConflict(explanation=AMBIGUOUS_EXPLANATION)

        return None

    def _threshold_conflict(
        self,
        evaluated: Sequence[EvaluatedStrategy],
        thresholds: NegotiationThresholds,
    ) -> ThresholdViolationConflict:
        """Name every objective that every candidate violates."""
        objectives: list[Objective] = []
        sentences = ["None of the available strategies satisfy all defined constraints."]

        for objective, limit_of, violates, template in _THRESHOLD_CHECKS:
            limit = limit_of(thresholds)
            if all(violates(e.strategy, limit) for e in evaluated):
                objectives.append(objective)
                sentences.append(template.format(value=format_threshold(limit)))

        sentences.append(
            "Please consider adjusting your constraints or accepting a strategy with trade-offs."
        )
        return ThresholdViolationConflict(objectives=objectives, explanation=" ".join(sentences))


def population_variance(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def format_threshold(value: float) -> str:
    """Whole numbers get thousands separators; fractions print as-is."""
    if math.isinf(value):
        return "unbounded"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:g}"

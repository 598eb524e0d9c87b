"""
Strategy Selector — ranks evaluated strategies and keeps the shortlist.
"""

from __future__ import annotations

import logging
from typing import Sequence

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.engine.base_stage import BaseStage
from supplychain_negotiation.models.enums import StageName
from supplychain_negotiation.models.schemas import EvaluatedStrategy, MitigationStrategy
from supplychain_negotiation.models.state import NegotiationState

logger = logging.getLogger(__name__)


def rank_strategies(evaluated: Sequence[EvaluatedStrategy]) -> list[EvaluatedStrategy]:
    """Best score first. sorted() is stable, so ties keep their input order."""
    return sorted(evaluated, key=lambda e: e.negotiation_score, reverse=True)


class StrategySelector(BaseStage):
    name = StageName.STRATEGY_SELECTOR

    def __init__(self, limit: int | None = None):
        self.limit = limit if limit is not None else get_settings().max_balanced_strategies

    def _real_process(self, state: NegotiationState) -> NegotiationState:
        ranked = rank_strategies(state.evaluated_strategies)
        state.balanced_strategies = [e.strategy for e in ranked[: self.limit]]
        logger.info(
            f"[{state.correlation_id}] Balanced strategies selected: "
            f"count={len(state.balanced_strategies)}, "
            f"top_score={ranked[0].negotiation_score if ranked else None}"
        )
        return state

    def select(self, evaluated: Sequence[EvaluatedStrategy]) -> list[MitigationStrategy]:
        return [e.strategy for e in rank_strategies(evaluated)[: self.limit]]

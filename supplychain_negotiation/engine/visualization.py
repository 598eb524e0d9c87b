"""
Visualization Generator — three pairwise trade-off datasets for the
selected strategies, each annotated with the optimal region implied by
the thresholds that apply to its two axes.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from supplychain_negotiation.engine.base_stage import BaseStage
from supplychain_negotiation.models.enums import StageName, VisualizationType
from supplychain_negotiation.models.schemas import (
    DataPoint,
    MitigationStrategy,
    NegotiationThresholds,
    OptimalRegion,
    TradeoffVisualization,
)
from supplychain_negotiation.models.state import NegotiationState

logger = logging.getLogger(__name__)

COST_AXIS = "Cost Impact"
RISK_AXIS = "Risk Reduction"
SUSTAINABILITY_AXIS = "Sustainability Impact"

_Metric = Callable[[MitigationStrategy], float]
_Region = Callable[[NegotiationThresholds], OptimalRegion]

_cost: _Metric = lambda s: s.cost_impact
_risk: _Metric = lambda s: s.risk_reduction
_sustainability: _Metric = lambda s: s.sustainability_impact

# (type, x label, y label, x metric, y metric, optimal region)
_CHARTS: list[tuple[VisualizationType, str, str, _Metric, _Metric, _Region]] = [
    (
        VisualizationType.COST_VS_RISK,
        COST_AXIS, RISK_AXIS, _cost, _risk,
        lambda t: OptimalRegion(x_max=t.max_cost_impact, y_min=t.min_risk_reduction),
    ),
    (
        VisualizationType.COST_VS_SUSTAINABILITY,
        COST_AXIS, SUSTAINABILITY_AXIS, _cost, _sustainability,
        lambda t: OptimalRegion(x_max=t.max_cost_impact, y_max=t.max_sustainability_impact),
    ),
    (
        VisualizationType.RISK_VS_SUSTAINABILITY,
        RISK_AXIS, SUSTAINABILITY_AXIS, _risk, _sustainability,
        lambda t: OptimalRegion(x_min=t.min_risk_reduction, y_max=t.max_sustainability_impact),
    ),
]


class VisualizationGenerator(BaseStage):
    name = StageName.VISUALIZATION_GENERATOR

    def _real_process(self, state: NegotiationState) -> NegotiationState:
        if state.negotiation_parameters is None:
            raise ValueError("No negotiation parameters in state — PARAMETER_DERIVER must run first")

        state.tradeoff_visualizations = self.generate(
            state.balanced_strategies, state.negotiation_parameters.thresholds
        )
        return state

    def generate(
        self,
        strategies: Sequence[MitigationStrategy],
        thresholds: NegotiationThresholds,
    ) -> list[TradeoffVisualization]:
        """Raw, unnormalized values; only the strategies passed in are plotted."""
        return [
            TradeoffVisualization(
                type=chart_type,
                x_axis=x_label,
                y_axis=y_label,
                data_points=[
                    DataPoint(
                        x=x_of(s),
                        y=y_of(s),
                        strategy_id=s.strategy_id,
                        strategy_name=s.name,
                    )
                    for s in strategies
                ],
                optimal_region=region_of(thresholds),
            )
            for chart_type, x_label, y_label, x_of, y_of, region_of in _CHARTS
        ]

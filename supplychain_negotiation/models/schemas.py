"""
Data schemas for the negotiation engine.
Each schema is a clearly-bounded object produced or consumed by one stage.
All models serialize with camelCase aliases to match the dashboard's JSON contract.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import AuditEventType, ConflictReason, Objective, VisualizationType


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire_json(self) -> str:
        """camelCase JSON with unset optionals omitted; the one form sent and fingerprinted."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


# ── Inputs ───────────────────────────────────────────────


class MitigationStrategy(_CamelModel):
    """A candidate mitigation produced upstream by the strategy agents."""
    model_config = ConfigDict(frozen=True)

    strategy_id: str
    name: str
    description: str = ""
    cost_impact: float = Field(allow_inf_nan=False)            # currency, lower is better
    risk_reduction: float = Field(allow_inf_nan=False)         # fraction, higher is better
    sustainability_impact: float = Field(allow_inf_nan=False)  # kg CO2e, lower is better
    implementation_time: float = 0.0  # hours
    tradeoffs: list[str] = []


class SustainabilityMetrics(_CamelModel):
    carbon_footprint: float = 0.0  # kg CO2
    emissions_by_route: dict[str, float] = {}
    sustainability_score: float = 0.0  # 0-100


class ImpactAnalysis(_CamelModel):
    """Baseline impact of the disruption being mitigated (context only)."""
    cost_impact: float = 0.0
    delivery_time_impact: float = 0.0  # hours
    inventory_impact: float = 0.0
    sustainability_impact: Optional[SustainabilityMetrics] = None


class UserPreferences(_CamelModel):
    prioritize_cost: bool = False
    prioritize_risk: bool = False
    prioritize_sustainability: bool = False
    max_cost_impact: Optional[float] = Field(default=None, allow_inf_nan=False)
    min_risk_reduction: Optional[float] = Field(default=None, allow_inf_nan=False)
    max_sustainability_impact: Optional[float] = Field(default=None, allow_inf_nan=False)


# ── Parameter Deriver ────────────────────────────────────


class NegotiationThresholds(_CamelModel):
    max_cost_impact: float = math.inf
    min_risk_reduction: float = 0.0
    max_sustainability_impact: float = math.inf


class NegotiationParameters(_CamelModel):
    cost_weight: float
    risk_weight: float
    sustainability_weight: float
    thresholds: NegotiationThresholds = Field(default_factory=NegotiationThresholds)

    @property
    def weights(self) -> tuple[float, float, float]:
        return (self.cost_weight, self.risk_weight, self.sustainability_weight)


# ── Strategy Evaluator ───────────────────────────────────


class EvaluatedStrategy(_CamelModel):
    strategy: MitigationStrategy
    cost_score: float
    risk_score: float
    sustainability_score: float
    negotiation_score: float
    meets_thresholds: bool


# ── Conflict Detector ────────────────────────────────────


class ThresholdViolationConflict(_CamelModel):
    """No candidate satisfies every threshold."""
    reason: Literal[ConflictReason.THRESHOLD_VIOLATIONS] = ConflictReason.THRESHOLD_VIOLATIONS
    objectives: list[Objective] = []
    explanation: str


class AmbiguousTradeOffConflict(_CamelModel):
    """Top candidates are too close to call."""
    reason: Literal[ConflictReason.AMBIGUOUS_TRADE_OFFS] = ConflictReason.AMBIGUOUS_TRADE_OFFS
    objectives: list[Objective] = Field(default_factory=lambda: list(Objective))
    explanation: str


Conflict = Annotated[
    Union[ThresholdViolationConflict, AmbiguousTradeOffConflict],
    Field(discriminator="reason"),
]


class ConflictEscalation(_CamelModel):
    """A conflict as presented to the decision-maker."""
    reason: ConflictReason
    conflicting_objectives: list[Objective]
    explanation: str
    requires_user_input: bool = True

    @classmethod
    def from_conflict(
        cls, conflict: Union[ThresholdViolationConflict, AmbiguousTradeOffConflict]
    ) -> ConflictEscalation:
        return cls(
            reason=conflict.reason,
            conflicting_objectives=list(conflict.objectives),
            explanation=conflict.explanation,
        )


# ── Visualization Generator ──────────────────────────────


class DataPoint(_CamelModel):
    x: float
    y: float
    strategy_id: str
    strategy_name: str


class OptimalRegion(_CamelModel):
    """Target zone on a trade-off plot; inf means unbounded on that side."""
    x_min: Optional[float] = None
    x_max: Optional[float] = None
    y_min: Optional[float] = None
    y_max: Optional[float] = None


class TradeoffVisualization(_CamelModel):
    type: VisualizationType
    x_axis: str
    y_axis: str
    data_points: list[DataPoint] = []
    optimal_region: OptimalRegion = Field(default_factory=OptimalRegion)


# ── Result ───────────────────────────────────────────────


class NegotiationResult(_CamelModel):
    balanced_strategies: list[MitigationStrategy] = []
    tradeoff_visualizations: list[TradeoffVisualization] = []
    conflict_escalation: Optional[ConflictEscalation] = None
    negotiation_parameters: NegotiationParameters


# ── Rationale Composer / audit ───────────────────────────


class SelectedStrategySummary(_CamelModel):
    """Trimmed strategy copy kept in the audit trail."""
    strategy_id: str
    name: str
    cost_impact: float
    risk_reduction: float
    sustainability_impact: float


class DecisionAuditRecord(_CamelModel):
    """Append-only fact describing one negotiation call."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: AuditEventType = AuditEventType.NEGOTIATION_DECISION
    scenario_id: str
    user_id: str = ""
    correlation_id: str = ""
    selected_strategies: list[SelectedStrategySummary] = []
    negotiation_parameters: NegotiationParameters
    conflict_escalated: bool = False
    conflict_reason: Optional[ConflictReason] = None
    rationale: str = ""
    result_digest: str = ""


# ── Request / response contract ──────────────────────────


class NegotiationRequest(_CamelModel):
    scenario_id: str = Field(min_length=1)
    impacts: ImpactAnalysis
    strategies: list[MitigationStrategy] = Field(min_length=1)
    user_preferences: Optional[UserPreferences] = None
    user_id: str = ""
    correlation_id: Optional[str] = None


class ResponseMetadata(_CamelModel):
    correlation_id: str
    execution_time_ms: float
    negotiation_method: str = "multi-objective-weighted"


class NegotiationResponse(_CamelModel):
    result: NegotiationResult
    metadata: ResponseMetadata

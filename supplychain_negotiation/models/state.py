"""
LangGraph shared state — the single object that flows through every stage.

Design rules:
  1. Each field is "owned" by one stage (see comments).
  2. Stages may READ any field but should only WRITE to their owned fields.
  3. The state lives for exactly one negotiation call.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field

from .schemas import (
    Conflict,
    ConflictEscalation,
    DecisionAuditRecord,
    EvaluatedStrategy,
    ImpactAnalysis,
    MitigationStrategy,
    NegotiationParameters,
    NegotiationResult,
    TradeoffVisualization,
    UserPreferences,
)


class NegotiationState(BaseModel):
    """The shared graph state passed through every LangGraph node."""

    # ── Pipeline control ─────────────────────────────────
    current_stage: str = ""
    completed_stages: list[str] = Field(default_factory=list)

    # ── Request (owner: caller) ──────────────────────────
    scenario_id: str = ""
    user_id: str = ""
    correlation_id: str = ""
    impacts: ImpactAnalysis = Field(default_factory=ImpactAnalysis)
    strategies: list[MitigationStrategy] = Field(default_factory=list)
    user_preferences: Optional[UserPreferences] = None

    # ── Parameter Deriver ────────────────────────────────
    negotiation_parameters: Optional[NegotiationParameters] = None

    # ── Strategy Evaluator ───────────────────────────────
    evaluated_strategies: list[EvaluatedStrategy] = Field(default_factory=list)

    # ── Conflict Detector ────────────────────────────────
    conflict: Optional[Conflict] = None
    conflict_escalation: Optional[ConflictEscalation] = None

    # ── Strategy Selector ────────────────────────────────
    balanced_strategies: list[MitigationStrategy] = Field(default_factory=list)

    # ── Visualization Generator ──────────────────────────
    tradeoff_visualizations: list[TradeoffVisualization] = Field(default_factory=list)

    # ── Rationale Composer ───────────────────────────────
    rationale: str = ""
    audit_record: Optional[DecisionAuditRecord] = None

    # ── Helper ───────────────────────────────────────────

    def to_result(self) -> NegotiationResult:
        if self.negotiation_parameters is None:
            raise ValueError("Negotiation parameters missing — PARAMETER_DERIVER must run first")
        return NegotiationResult(
            balanced_strategies=list(self.balanced_strategies),
            tradeoff_visualizations=list(self.tradeoff_visualizations),
            conflict_escalation=self.conflict_escalation,
            negotiation_parameters=self.negotiation_parameters,
        )

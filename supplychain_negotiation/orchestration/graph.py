"""
LangGraph State Machine — six-stage negotiation pipeline.

    parameter_deriver → strategy_evaluator → conflict_detector
        → strategy_selector → visualization_generator → rationale_composer → END

Every node delegates to stage.process(state), which returns the full
updated state dict. The graph is linear: a detected conflict is carried
through to the result rather than short-circuiting the pipeline.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from langgraph.graph import StateGraph, END

from supplychain_negotiation.engine import (
    ParameterDeriver,
    StrategyEvaluator,
    ConflictDetector,
    StrategySelector,
    VisualizationGenerator,
    RationaleComposer,
)
from supplychain_negotiation.models.schemas import (
    ImpactAnalysis,
    MitigationStrategy,
    NegotiationRequest,
    NegotiationResult,
    UserPreferences,
)
from supplychain_negotiation.models.state import NegotiationState

logger = logging.getLogger(__name__)

NODE_ORDER = [
    "parameter_deriver",
    "strategy_evaluator",
    "conflict_detector",
    "strategy_selector",
    "visualization_generator",
    "rationale_composer",
]


def build_graph():
    """
    Construct and compile the negotiation state machine.
    Stages are instantiated here so they pick up the current settings.
    """
    stages = {
        "parameter_deriver": ParameterDeriver(),
        "strategy_evaluator": StrategyEvaluator(),
        "conflict_detector": ConflictDetector(),
        "strategy_selector": StrategySelector(),
        "visualization_generator": VisualizationGenerator(),
        "rationale_composer": RationaleComposer(),
    }

    graph = StateGraph(dict)

    for node in NODE_ORDER:
        graph.add_node(node, stages[node].process)

    graph.set_entry_point(NODE_ORDER[0])
    for current, following in zip(NODE_ORDER, NODE_ORDER[1:]):
        graph.add_edge(current, following)
    graph.add_edge(NODE_ORDER[-1], END)

    return graph.compile()


# ── Convenience runners ──────────────────────────────────

def run_negotiation(
    request: NegotiationRequest,
    correlation_id: str = "",
    compiled: Optional[Any] = None,
) -> NegotiationState:
    """
    Run the graph end-to-end for one validated request.
    Returns the final state (result, rationale and audit record).
    """
    compiled = compiled or build_graph()

    initial = NegotiationState(
        scenario_id=request.scenario_id,
        user_id=request.user_id,
        correlation_id=correlation_id or request.correlation_id or "",
        impacts=request.impacts,
        strategies=request.strategies,
        user_preferences=request.user_preferences,
    )

    logger.info(
        f"[{initial.correlation_id}] Negotiation starting — scenario={initial.scenario_id}, "
        f"strategies={len(initial.strategies)}"
    )

    final_state = NegotiationState(**compiled.invoke(initial.model_dump()))

    logger.info(
        f"[{initial.correlation_id}] Negotiation finished — "
        f"balanced={len(final_state.balanced_strategies)}, "
        f"consensus={final_state.conflict_escalation is None}"
    )
    return final_state


def negotiate(
    strategies: list[MitigationStrategy],
    impacts: ImpactAnalysis | None = None,
    preferences: UserPreferences | None = None,
    scenario_id: str = "adhoc",
) -> NegotiationResult:
    """Library entry point: rank, filter and explain a strategy set."""
    request = NegotiationRequest(
        scenario_id=scenario_id,
        impacts=impacts or ImpactAnalysis(),
        strategies=strategies,
        user_preferences=preferences,
    )
    return run_negotiation(request).to_result()

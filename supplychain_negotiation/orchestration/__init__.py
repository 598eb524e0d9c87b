"""Orchestration — the LangGraph pipeline that runs the negotiation stages."""

from .graph import build_graph, run_negotiation, negotiate

__all__ = ["build_graph", "run_negotiation", "negotiate"]

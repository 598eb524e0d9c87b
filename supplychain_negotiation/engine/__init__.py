"""
Engine — the six negotiation stages, leaves first.

Each stage is a BaseStage (LangGraph node via `process()`) that also exposes
its pure operation as a public method.
"""

from .base_stage import BaseStage
from .parameters import ParameterDeriver
from .evaluator import StrategyEvaluator
from .conflicts import ConflictDetector
from .selector import StrategySelector
from .visualization import VisualizationGenerator
from .rationale import RationaleComposer

__all__ = [
    "BaseStage",
    "ParameterDeriver",
    "StrategyEvaluator",
    "ConflictDetector",
    "StrategySelector",
    "VisualizationGenerator",
    "RationaleComposer",
]

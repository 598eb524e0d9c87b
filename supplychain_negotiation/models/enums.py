from enum import Enum

class Objective(str, Enum):
    COST = "cost"
    RISK = "risk"
    SUSTAINABILITY = "sustainability"

class ConflictReason(str, Enum):
    THRESHOLD_VIOLATIONS = "threshold_violations"
    AMBIGUOUS_TRADE_OFFS = "ambiguous_trade_offs"

class VisualizationType(str, Enum):
    COST_VS_RISK = "cost_vs_risk"
    COST_VS_SUSTAINABILITY = "cost_vs_sustainability"
    RISK_VS_SUSTAINABILITY = "risk_vs_sustainability"

class StageName(str, Enum):
    PARAMETER_DERIVER = "PARAMETER_DERIVER"
    STRATEGY_EVALUATOR = "STRATEGY_EVALUATOR"
    CONFLICT_DETECTOR = "CONFLICT_DETECTOR"
    STRATEGY_SELECTOR = "STRATEGY_SELECTOR"
    VISUALIZATION_GENERATOR = "VISUALIZATION_GENERATOR"
    RATIONALE_COMPOSER = "RATIONALE_COMPOSER"

class AuditEventType(str, Enum):
    NEGOTIATION_DECISION = "negotiation_decision"

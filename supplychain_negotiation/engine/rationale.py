"""
Rationale Composer — explains the outcome in plain language and packages
the DecisionAuditRecord that is handed to the audit sink.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable

from supplychain_negotiation.engine.base_stage import BaseStage
from supplychain_negotiation.models.enums import StageName
from supplychain_negotiation.models.schemas import (
    DecisionAuditRecord,
    NegotiationResult,
    SelectedStrategySummary,
)
from supplychain_negotiation.models.state import NegotiationState
from supplychain_negotiation.utils.hashing import sha256_hash

logger = logging.getLogger(__name__)


class RationaleComposer(BaseStage):
    name = StageName.RATIONALE_COMPOSER

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _real_process(self, state: NegotiationState) -> NegotiationState:
        result = state.to_result()
        state.rationale = self.compose_rationale(result)
        state.audit_record = self.compose_audit_record(
            result,
            rationale=state.rationale,
            scenario_id=state.scenario_id,
            user_id=state.user_id,
            correlation_id=state.correlation_id,
        )
        logger.info(
            f"[{state.correlation_id}] Decision rationale logged: "
            f"{state.audit_record.model_dump_json(by_alias=True)}"
        )
        return state

    def compose_rationale(self, result: NegotiationResult) -> str:
        parts = ["Cross-agent negotiation completed."]

        if result.conflict_escalation is not None:
            parts.append(f"Conflict detected: {result.conflict_escalation.explanation}")
        else:
            parts.append(
                f"Consensus reached on {len(result.balanced_strategies)} balanced strategies."
            )

        params = result.negotiation_parameters
        parts.append(
            "Negotiation weights applied: "
            f"Cost ({_percent(params.cost_weight)}%), "
            f"Risk ({_percent(params.risk_weight)}%), "
            f"Sustainability ({_percent(params.sustainability_weight)}%)."
        )

        if result.balanced_strategies:
            top = result.balanced_strategies[0]
            parts.append(
                f'Top recommended strategy: "{top.name}" '
                f"with cost impact of {_round_half_up(top.cost_impact):,}, "
                f"risk reduction of {_percent(top.risk_reduction)}%, "
                f"and sustainability impact of {_round_half_up(top.sustainability_impact):,} kg CO2."
            )

        return " ".join(parts)

    def compose_audit_record(
        self,
        result: NegotiationResult,
        rationale: str,
        scenario_id: str,
        user_id: str = "",
        correlation_id: str = "",
    ) -> DecisionAuditRecord:
        escalation = result.conflict_escalation
        return DecisionAuditRecord(
            timestamp=self._clock(),
            scenario_id=scenario_id,
            user_id=user_id,
            correlation_id=correlation_id,
            selected_strategies=[
                SelectedStrategySummary(
                    strategy_id=s.strategy_id,
                    name=s.name,
                    cost_impact=s.cost_impact,
                    risk_reduction=s.risk_reduction,
                    sustainability_impact=s.sustainability_impact,
                )
                for s in result.balanced_strategies
            ],
            negotiation_parameters=result.negotiation_parameters,
            conflict_escalated=escalation is not None,
            conflict_reason=escalation.reason if escalation is not None else None,
            rationale=rationale,
            result_digest=sha256_hash(result.to_wire_json()),
        )


def _round_half_up(value: float) -> int:
    # .5 always rounds up, so 2500.5 reads as 2,501
    return math.floor(value + 0.5)


def _percent(fraction: float) -> int:
    return _round_half_up(fraction * 100)

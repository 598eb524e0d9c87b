"""
Base stage class that every negotiation stage inherits.

Design:
  - `process()` is called by the LangGraph node.
  - `_real_process()` is the single abstract method — override in each stage.
  - Each stage also exposes its pure operation as a public method so it can be
    used without the graph.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from supplychain_negotiation.models.enums import StageName
from supplychain_negotiation.models.state import NegotiationState

logger = logging.getLogger(__name__)


class BaseStage(ABC):
    """Abstract base for all negotiation stages."""

    name: StageName  # set in each subclass

    # ── Public entry point (called by LangGraph node) ────

    def process(self, state: dict[str, Any]) -> dict[str, Any]:
        """
        LangGraph calls this as the node function.
        Accepts and returns a dict so the whole state replaces the graph's root value.
        """
        t0 = time.perf_counter()
        cid = state.get("correlation_id", "")
        logger.info(f"[{cid}] ▶ {self.name.value} STARTING")

        _log_state_summary("INPUT STATE", state)

        negotiation_state = NegotiationState(**state)
        negotiation_state.current_stage = self.name.value

        try:
            updated = self._real_process(negotiation_state)
        except Exception as exc:
            elapsed = time.perf_counter() - t0
            logger.exception(
                f"[{cid}] ✘ {self.name.value} FAILED after {elapsed:.3f}s: {exc}"
            )
            raise

        updated.completed_stages.append(self.name.value)
        elapsed = time.perf_counter() - t0
        logger.info(f"[{cid}] ✔ {self.name.value} COMPLETED in {elapsed:.3f}s")

        out_dict = updated.model_dump()
        _log_state_diff("STATE CHANGES", state, out_dict)
        return out_dict

    # ── Subclass hook ────────────────────────────────────

    @abstractmethod
    def _real_process(self, state: NegotiationState) -> NegotiationState:
        """Run the stage against the hydrated state and return it."""
        ...


# ── Debug helpers (module-level) ─────────────────────────

def _state_counts(state: dict[str, Any]) -> str:
    """One-line shape of a negotiation state: what each stage has produced so far."""
    reason = (state.get("conflict") or {}).get("reason", "-")
    return (
        f"strategies={len(state.get('strategies') or [])} "
        f"evaluated={len(state.get('evaluated_strategies') or [])} "
        f"balanced={len(state.get('balanced_strategies') or [])} "
        f"charts={len(state.get('tradeoff_visualizations') or [])} "
        f"params={'set' if state.get('negotiation_parameters') else '-'} "
        f"conflict={getattr(reason, 'value', reason)} "
        f"audit={'set' if state.get('audit_record') else '-'}"
    )


def _log_state_summary(label: str, state: dict[str, Any]) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(f"[{state.get('correlation_id', '')}] {label}: {_state_counts(state)}")


def _log_state_diff(label: str, before: dict[str, Any], after: dict[str, Any]) -> None:
    """Log which state fields the stage wrote."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    changed = sorted(
        key for key in after
        if key not in ("current_stage", "completed_stages") and before.get(key) != after[key]
    )
    logger.debug(
        f"[{after.get('correlation_id', '')}] {label}: "
        f"{', '.join(changed) or 'no fields'} → {_state_counts(after)}"
    )

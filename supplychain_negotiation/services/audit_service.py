"""
Audit Service — the sink that receives one DecisionAuditRecord per negotiation.

Hand-off is fire-and-forget: the negotiation never waits for persistence
and a failing sink never fails the negotiation (best-effort, not transactional).
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from supplychain_negotiation.config import get_settings
from supplychain_negotiation.models.schemas import DecisionAuditRecord

logger = logging.getLogger(__name__)


class AuditService:
    """
    Records negotiation decisions.
    In mock mode, uses an in-memory list. Otherwise writes to MongoDB
    on a background thread.
    """

    def __init__(self, mock_mode: bool | None = None):
        self.settings = get_settings()
        if mock_mode is None:
            mock_mode = self.settings.audit_backend != "mongodb"
        self.mock_mode = mock_mode
        self._entries: list[dict[str, Any]] = []
        self._lock = threading.Lock()
        self._client_lock = threading.Lock()
        self._collection = None

    def publish(self, record: DecisionAuditRecord) -> None:
        """Hand the record off to the sink without waiting for confirmation."""
        entry = record.model_dump(mode="json", by_alias=True)

        if self.mock_mode:
            with self._lock:
                self._entries.append(entry)
            logger.debug(f"[AUDIT] {record.scenario_id} → {record.event_type.value}")
            return

        thread = threading.Thread(
            target=self._write_mongo,
            args=(entry,),
            name=f"audit-{record.correlation_id}",
            daemon=True,
        )
        thread.start()

    def get_trail(self, scenario_id: str) -> list[dict[str, Any]]:
        """Return all in-memory audit entries for a scenario."""
        with self._lock:
            return [e for e in self._entries if e["scenarioId"] == scenario_id]

    def get_all(self) -> list[dict[str, Any]]:
        """Return all in-memory audit entries (for debugging)."""
        with self._lock:
            return list(self._entries)

    # ── MongoDB backend ──────────────────────────────────

    def _get_collection(self):
        # writer threads race on the first insert; only one may build the client
        with self._client_lock:
            if self._collection is None:
                from pymongo import MongoClient

                client = MongoClient(self.settings.mongodb_uri)
                db = client[self.settings.mongodb_database]
                self._collection = db[self.settings.audit_collection]
            return self._collection

    def _write_mongo(self, entry: dict[str, Any]) -> None:
        try:
            self._get_collection().insert_one(dict(entry))
            logger.debug(f"[AUDIT] Persisted decision for {entry.get('scenarioId')}")
        except Exception as e:
            logger.error(
                f"[{entry.get('correlationId', '')}] Failed to persist audit record "
                f"for {entry.get('scenarioId')}: {e}"
            )

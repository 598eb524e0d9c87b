"""Services — AuditService, NegotiationService."""

from supplychain_negotiation.services.audit_service import AuditService
from supplychain_negotiation.services.negotiation_service import (
    NegotiationService,
    NegotiationValidationError,
)

__all__ = ["AuditService", "NegotiationService", "NegotiationValidationError"]

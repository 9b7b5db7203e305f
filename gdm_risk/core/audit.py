"""Audit logging for risk assessments.

Every scoring request leaves one audit record: what was computed, for whom
and whether it succeeded. Raw clinical measurements are never written to the
audit trail, only the resulting score and risk level.
"""

import logging
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from gdm_risk.core.config import settings
from gdm_risk.schemas.base import RiskLevel

# Separate audit logger for clinical decision events
audit_logger = logging.getLogger("audit")


class AuditAction(str, Enum):
    """Types of auditable actions."""

    ASSESS = "assess"
    SCORE = "score"
    INTERPRET = "interpret"

    # System
    ERROR = "error"


class AuditEvent(BaseModel):
    """Audit event record."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    action: AuditAction = Field(..., description="Type of action performed")
    resource_type: str = Field(..., description="Type of resource produced")
    patient_id: str | None = Field(None, description="Patient ID if supplied by the caller")
    user_id: str | None = Field(None, description="User who performed action")
    ip_address: str | None = Field(None, description="Client IP address")
    details: dict | None = Field(None, description="Additional context")
    success: bool = Field(True, description="Whether action succeeded")


def log_audit(
    action: AuditAction,
    resource_type: str,
    patient_id: str | None = None,
    user_id: str | None = None,
    ip_address: str | None = None,
    details: dict | None = None,
    success: bool = True,
) -> AuditEvent:
    """Log an audit event.

    The event is always returned; it is only emitted to the audit logger
    when auditing is enabled in settings.

    Args:
        action: Type of action being audited
        resource_type: The type of resource produced
        patient_id: Patient ID if the caller supplied one
        user_id: User performing the action
        ip_address: Client IP address
        details: Additional context
        success: Whether the action succeeded

    Returns:
        The created AuditEvent
    """
    event = AuditEvent(
        action=action,
        resource_type=resource_type,
        patient_id=patient_id,
        user_id=user_id,
        ip_address=ip_address,
        details=details,
        success=success,
    )

    if settings.audit_enabled:
        log_level = logging.INFO if success else logging.WARNING
        audit_logger.log(
            log_level,
            f"AUDIT: {action.value} {resource_type}"
            f"{f' patient={patient_id}' if patient_id else ''}"
            f" success={success}",
            extra={"audit_event": event.model_dump()},
        )

    return event


def log_assessment(
    score: int,
    risk_level: RiskLevel,
    action: AuditAction = AuditAction.ASSESS,
    patient_id: str | None = None,
    ip_address: str | None = None,
) -> AuditEvent:
    """Log a completed GDM risk assessment.

    Args:
        score: Computed risk score
        risk_level: Resulting risk level
        action: ASSESS for a full assessment, INTERPRET for a raw score
        patient_id: Patient ID if the caller supplied one
        ip_address: Client IP address

    Returns:
        The created AuditEvent
    """
    return log_audit(
        action=action,
        resource_type="gdm_risk_assessment",
        patient_id=patient_id,
        ip_address=ip_address,
        details={"score": score, "risk_level": risk_level.value},
    )

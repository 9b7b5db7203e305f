"""Core application configuration and utilities."""

from gdm_risk.core.audit import AuditAction, AuditEvent, log_assessment, log_audit
from gdm_risk.core.config import settings
from gdm_risk.core.logging import configure_logging

__all__ = [
    # Config
    "settings",
    # Logging
    "configure_logging",
    # Audit
    "AuditAction",
    "AuditEvent",
    "log_assessment",
    "log_audit",
]

"""Pydantic schemas for the GDM Risk Engine."""

from gdm_risk.schemas.base import RiskLevel
from gdm_risk.schemas.assessment import (
    AssessmentResponse,
    ClinicalInputRequest,
    RiskAssessmentResponse,
    RiskLevelInfo,
    ScoreResponse,
    ScoringBandInfo,
    ScoringRuleInfo,
)

__all__ = [
    # Enums
    "RiskLevel",
    # Assessment
    "AssessmentResponse",
    "ClinicalInputRequest",
    "RiskAssessmentResponse",
    "RiskLevelInfo",
    "ScoreResponse",
    "ScoringBandInfo",
    "ScoringRuleInfo",
]

"""Services for the GDM Risk Engine.

- GDMRiskService: gestational diabetes risk scoring and interpretation
"""

from gdm_risk.services.gdm_risk import (
    ClinicalInput,
    GDMRiskService,
    RiskAssessment,
    assess,
    compute_score,
    get_gdm_risk_service,
    get_risk_level_class,
    get_risk_level_label,
    interpret,
    reset_gdm_risk_service,
    score_breakdown,
    score_with_breakdown,
)

__all__ = [
    "ClinicalInput",
    "GDMRiskService",
    "RiskAssessment",
    "assess",
    "compute_score",
    "get_gdm_risk_service",
    "get_risk_level_class",
    "get_risk_level_label",
    "interpret",
    "reset_gdm_risk_service",
    "score_breakdown",
    "score_with_breakdown",
]

"""GDM risk assessment API endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Path, Request

from gdm_risk.core.audit import AuditAction, log_assessment, log_audit
from gdm_risk.schemas.assessment import (
    AssessmentResponse,
    ClinicalInputRequest,
    RiskAssessmentResponse,
    RiskLevelInfo,
    ScoreResponse,
    ScoringRuleInfo,
)
from gdm_risk.services.gdm_risk import get_gdm_risk_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gdm", tags=["GDM Risk"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.post(
    "/assess",
    response_model=AssessmentResponse,
    summary="Assess gestational diabetes risk",
    description="Score maternal measurements and interpret the score into a risk level and recommendation.",
)
async def assess_risk(body: ClinicalInputRequest, request: Request) -> AssessmentResponse:
    """Run the full GDM risk assessment for one set of measurements."""
    service = get_gdm_risk_service()
    data = body.to_clinical_input()

    score, components = service.score_with_breakdown(data)
    assessment = service.interpret(score)

    log_assessment(
        score,
        assessment.risk_level,
        patient_id=body.patient_id,
        ip_address=_client_ip(request),
    )

    return AssessmentResponse(
        score=score,
        probability=assessment.probability,
        risk_level=assessment.risk_level,
        risk_label=service.get_label(assessment.risk_level),
        risk_class=service.get_css_class(assessment.risk_level),
        recommendation=assessment.recommendation,
        components=components,
    )


@router.post(
    "/score",
    response_model=ScoreResponse,
    summary="Compute the raw GDM risk score",
)
async def score_risk(body: ClinicalInputRequest, request: Request) -> ScoreResponse:
    """Compute the score and list the bands that contributed to it."""
    service = get_gdm_risk_service()
    data = body.to_clinical_input()
    score, components = service.score_with_breakdown(data)

    log_audit(
        action=AuditAction.SCORE,
        resource_type="gdm_risk_score",
        patient_id=body.patient_id,
        ip_address=_client_ip(request),
        details={"score": score},
    )

    return ScoreResponse(score=score, components=components)


@router.get(
    "/interpret/{score}",
    response_model=RiskAssessmentResponse,
    summary="Interpret a GDM risk score",
)
async def interpret_score(
    request: Request,
    score: int = Path(..., description="Risk score (0-100)"),
) -> RiskAssessmentResponse:
    """Interpret an already computed score."""
    service = get_gdm_risk_service()

    try:
        assessment = service.interpret(score)
    except ValueError as e:
        logger.warning(f"Rejected score interpretation: {e}")
        log_audit(
            action=AuditAction.INTERPRET,
            resource_type="gdm_risk_assessment",
            ip_address=_client_ip(request),
            details={"score": score, "error": str(e)},
            success=False,
        )
        raise HTTPException(status_code=400, detail=str(e))

    log_assessment(
        score,
        assessment.risk_level,
        action=AuditAction.INTERPRET,
        ip_address=_client_ip(request),
    )

    return RiskAssessmentResponse(
        score=score,
        probability=assessment.probability,
        risk_level=assessment.risk_level,
        risk_label=service.get_label(assessment.risk_level),
        risk_class=service.get_css_class(assessment.risk_level),
        recommendation=assessment.recommendation,
    )


@router.get(
    "/risk-levels",
    response_model=list[RiskLevelInfo],
    summary="List risk levels",
    description="The four risk bands with their score ranges, labels and recommendations.",
)
async def list_risk_levels() -> list[RiskLevelInfo]:
    """List the four risk bands, lowest first."""
    return [RiskLevelInfo(**level) for level in get_gdm_risk_service().get_risk_levels()]


@router.get(
    "/rules",
    response_model=list[ScoringRuleInfo],
    summary="List scoring rules",
    description="The scoring rule table in evaluation order.",
)
async def list_scoring_rules() -> list[ScoringRuleInfo]:
    """List the scoring rules in evaluation order."""
    return [ScoringRuleInfo(**rule) for rule in get_gdm_risk_service().get_rules()]

"""Gestational Diabetes Risk Scoring Service.

Deterministic screening score for gestational diabetes mellitus (GDM) built
from routine prenatal measurements: OGTT glucose values, weight, blood
pressure, hemoglobin and urine/edema findings. The additive score is then
interpreted into a probability estimate, a risk category and a fixed
clinical recommendation.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

from gdm_risk.schemas.base import RiskLevel

logger = logging.getLogger(__name__)

MAX_SCORE = 100


@dataclass(frozen=True, kw_only=True)
class ClinicalInput:
    """Maternal measurements collected for GDM risk screening.

    Gestational age, prenatal visit count and uterine height travel with the
    record but are not read by any scoring rule.
    """

    current_weight_kg: float
    initial_weight_kg: float
    systolic_bp: float  # mmHg
    diastolic_bp: float  # mmHg
    fasting_glucose: float  # g/L
    glucose_1h: float  # g/L
    glucose_2h: float  # g/L
    hemoglobin: float  # g/dL
    has_anemia: bool
    has_glucosuria: bool
    has_albuminuria: bool
    has_edema: bool
    gestational_age_weeks: float
    prenatal_visit_count: float
    uterine_height_cm: float

    @property
    def weight_gain_kg(self) -> float:
        """Weight gained since pre-pregnancy."""
        return self.current_weight_kg - self.initial_weight_kg


@dataclass(frozen=True)
class RiskAssessment:
    """Interpretation of a GDM risk score."""

    probability: float
    risk_level: RiskLevel
    recommendation: str


# ============================================================================
# Score Calculator
# ============================================================================

@dataclass(frozen=True)
class ScoreBand:
    """One band of a scoring rule and the points it adds."""

    label: str
    points: int
    matches: Callable[[ClinicalInput], bool]


@dataclass(frozen=True)
class ScoringRule:
    """An independent risk factor made of mutually exclusive bands.

    Bands are ordered from the highest threshold down. Only the first band
    that matches contributes to the score.
    """

    factor: str
    bands: tuple[ScoreBand, ...]

    def evaluate(self, data: ClinicalInput) -> ScoreBand | None:
        """Return the band that fires for this input, if any."""
        for band in self.bands:
            if band.matches(data):
                return band
        return None


def _at_least(attr: str, threshold: float) -> Callable[[ClinicalInput], bool]:
    return lambda data: getattr(data, attr) >= threshold


def _above(attr: str, threshold: float) -> Callable[[ClinicalInput], bool]:
    return lambda data: getattr(data, attr) > threshold


def _below(attr: str, threshold: float) -> Callable[[ClinicalInput], bool]:
    return lambda data: getattr(data, attr) < threshold


def _flagged(attr: str) -> Callable[[ClinicalInput], bool]:
    return lambda data: bool(getattr(data, attr))


def _blood_pressure_at_least(
    systolic: float,
    diastolic: float,
) -> Callable[[ClinicalInput], bool]:
    return lambda data: data.systolic_bp >= systolic or data.diastolic_bp >= diastolic


SCORING_RULES: tuple[ScoringRule, ...] = (
    # OGTT glucose values carry the most weight
    ScoringRule(
        factor="fasting_glucose",
        bands=(
            ScoreBand("Fasting glucose ≥0.92 g/L", 15, _at_least("fasting_glucose", 0.92)),
            ScoreBand("Fasting glucose ≥0.85 g/L", 8, _at_least("fasting_glucose", 0.85)),
        ),
    ),
    ScoringRule(
        factor="glucose_1h",
        bands=(
            ScoreBand("1h glucose ≥1.80 g/L", 15, _at_least("glucose_1h", 1.80)),
            ScoreBand("1h glucose ≥1.65 g/L", 8, _at_least("glucose_1h", 1.65)),
        ),
    ),
    ScoringRule(
        factor="glucose_2h",
        bands=(
            ScoreBand("2h glucose ≥1.53 g/L", 10, _at_least("glucose_2h", 1.53)),
            ScoreBand("2h glucose ≥1.40 g/L", 5, _at_least("glucose_2h", 1.40)),
        ),
    ),
    # Initial weight and weight gain both derive from the weight fields;
    # they are scored separately.
    ScoringRule(
        factor="initial_weight",
        bands=(
            ScoreBand("Initial weight >85 kg", 10, _above("initial_weight_kg", 85)),
            ScoreBand("Initial weight >75 kg", 5, _above("initial_weight_kg", 75)),
        ),
    ),
    ScoringRule(
        factor="weight_gain",
        bands=(
            ScoreBand("Weight gain >15 kg", 10, _above("weight_gain_kg", 15)),
            ScoreBand("Weight gain >12 kg", 5, _above("weight_gain_kg", 12)),
        ),
    ),
    ScoringRule(
        factor="blood_pressure",
        bands=(
            ScoreBand("Blood pressure ≥140/90 mmHg", 15, _blood_pressure_at_least(140, 90)),
            ScoreBand("Blood pressure ≥130/85 mmHg", 8, _blood_pressure_at_least(130, 85)),
        ),
    ),
    ScoringRule(
        factor="glucosuria",
        bands=(ScoreBand("Glucosuria", 10, _flagged("has_glucosuria")),),
    ),
    ScoringRule(
        factor="anemia",
        bands=(ScoreBand("Anemia", 5, _flagged("has_anemia")),),
    ),
    ScoringRule(
        factor="hemoglobin",
        bands=(ScoreBand("Hemoglobin <10 g/dL", 5, _below("hemoglobin", 10)),),
    ),
    ScoringRule(
        factor="albuminuria",
        bands=(ScoreBand("Albuminuria", 5, _flagged("has_albuminuria")),),
    ),
    ScoringRule(
        factor="edema",
        bands=(ScoreBand("Edema", 5, _flagged("has_edema")),),
    ),
)


def score_breakdown(data: ClinicalInput) -> dict[str, int]:
    """List the scoring bands that fire for an input.

    Args:
        data: Maternal measurements.

    Returns:
        Mapping of fired band label to points, in rule table order.
    """
    components: dict[str, int] = {}
    for rule in SCORING_RULES:
        band = rule.evaluate(data)
        if band is not None:
            components[band.label] = band.points
    return components


def score_with_breakdown(data: ClinicalInput) -> tuple[int, dict[str, int]]:
    """Calculate the GDM risk score together with its fired bands.

    The rule table is evaluated once.

    Args:
        data: Maternal measurements.

    Returns:
        Tuple of the score capped at MAX_SCORE and the fired band mapping.
    """
    components = score_breakdown(data)
    raw_score = sum(components.values())
    score = min(raw_score, MAX_SCORE)
    logger.debug(f"GDM risk score computed: raw={raw_score} capped={score}")
    return score, components


def compute_score(data: ClinicalInput) -> int:
    """Calculate the GDM risk score.

    Args:
        data: Maternal measurements.

    Returns:
        Sum of the fired band points, capped at MAX_SCORE.
    """
    score, _ = score_with_breakdown(data)
    return score


# ============================================================================
# Risk Interpreter
# ============================================================================

@dataclass(frozen=True)
class RiskBand:
    """Contiguous score interval mapped to one risk level.

    probability = min(base_probability + (score - min_score) * slope, ceiling)
    """

    risk_level: RiskLevel
    min_score: int
    base_probability: float
    slope: float
    ceiling: float = 1.0

    def probability(self, score: int) -> float:
        return min(self.base_probability + (score - self.min_score) * self.slope, self.ceiling)


# Highest threshold first; the first band whose min_score is reached wins.
RISK_BANDS: tuple[RiskBand, ...] = (
    RiskBand(RiskLevel.VERY_HIGH, 60, 0.85, 0.003, ceiling=0.98),
    RiskBand(RiskLevel.HIGH, 40, 0.50, 0.0175),
    RiskBand(RiskLevel.MODERATE, 20, 0.20, 0.015),
    RiskBand(RiskLevel.LOW, 0, 0.0, 0.01),
)

RECOMMENDATIONS: dict[RiskLevel, str] = {
    RiskLevel.VERY_HIGH: (
        "Very high risk of gestational diabetes. Urgent consultation with a "
        "diabetologist is recommended. An oral glucose tolerance test (OGTT) "
        "should be performed immediately."
    ),
    RiskLevel.HIGH: (
        "High risk of gestational diabetes. Reinforced monitoring is recommended. "
        "An adapted diet and regular blood glucose follow-up are advised."
    ),
    RiskLevel.MODERATE: (
        "Moderate risk. Continue regular prenatal follow-up. Maintain a balanced "
        "diet and appropriate physical activity."
    ),
    RiskLevel.LOW: (
        "Low risk. Continue normal prenatal consultations. Maintain a healthy lifestyle."
    ),
}

RISK_LEVEL_LABELS: dict[RiskLevel, str] = {
    RiskLevel.LOW: "Low",
    RiskLevel.MODERATE: "Moderate",
    RiskLevel.HIGH: "High",
    RiskLevel.VERY_HIGH: "Very high",
}

RISK_LEVEL_CLASSES: dict[RiskLevel, str] = {
    RiskLevel.LOW: "risk-low",
    RiskLevel.MODERATE: "risk-moderate",
    RiskLevel.HIGH: "risk-high",
    RiskLevel.VERY_HIGH: "risk-very-high",
}


def interpret(score: int) -> RiskAssessment:
    """Interpret a GDM risk score.

    Args:
        score: Risk score between 0 and MAX_SCORE.

    Returns:
        RiskAssessment with probability, risk level and recommendation.

    Raises:
        ValueError: If the score is outside 0..MAX_SCORE.
    """
    if not 0 <= score <= MAX_SCORE:
        raise ValueError(f"Score must be between 0 and {MAX_SCORE}, got {score}")

    for band in RISK_BANDS:
        if score >= band.min_score:
            return RiskAssessment(
                probability=band.probability(score),
                risk_level=band.risk_level,
                recommendation=RECOMMENDATIONS[band.risk_level],
            )

    raise ValueError(f"No risk band covers score {score}")


def assess(data: ClinicalInput) -> RiskAssessment:
    """Score an input and interpret the result."""
    return interpret(compute_score(data))


# ============================================================================
# Label Lookups
# ============================================================================

def _coerce_risk_level(level: RiskLevel | str) -> RiskLevel:
    try:
        return RiskLevel(level)
    except ValueError:
        available = ", ".join(member.value for member in RiskLevel)
        raise ValueError(f"Unknown risk level: {level!r}. Available: {available}") from None


def get_risk_level_label(level: RiskLevel | str) -> str:
    """Get the display label for a risk level.

    Raises:
        ValueError: If the level is not one of the four risk levels.
    """
    return RISK_LEVEL_LABELS[_coerce_risk_level(level)]


def get_risk_level_class(level: RiskLevel | str) -> str:
    """Get the presentation class for a risk level.

    Raises:
        ValueError: If the level is not one of the four risk levels.
    """
    return RISK_LEVEL_CLASSES[_coerce_risk_level(level)]


def get_recommendation(level: RiskLevel | str) -> str:
    """Get the fixed recommendation text for a risk level."""
    return RECOMMENDATIONS[_coerce_risk_level(level)]


# ============================================================================
# Service
# ============================================================================

class GDMRiskService:
    """Service for gestational diabetes risk screening.

    Thin facade over the module-level scoring functions; holds no state.

    Usage:
        service = get_gdm_risk_service()
        result = service.assess(clinical_input)
        label = service.get_label(result.risk_level)
    """

    def compute_score(self, data: ClinicalInput) -> int:
        return compute_score(data)

    def score_breakdown(self, data: ClinicalInput) -> dict[str, int]:
        return score_breakdown(data)

    def score_with_breakdown(self, data: ClinicalInput) -> tuple[int, dict[str, int]]:
        return score_with_breakdown(data)

    def interpret(self, score: int) -> RiskAssessment:
        return interpret(score)

    def assess(self, data: ClinicalInput) -> RiskAssessment:
        return assess(data)

    def get_label(self, level: RiskLevel | str) -> str:
        return get_risk_level_label(level)

    def get_css_class(self, level: RiskLevel | str) -> str:
        return get_risk_level_class(level)

    def get_risk_levels(self) -> list[dict[str, Any]]:
        """Describe the risk bands, lowest first.

        Returns:
            One dict per risk level with its score range, label, class
            and recommendation.
        """
        levels = []
        upper = MAX_SCORE
        for band in RISK_BANDS:
            levels.append(
                {
                    "risk_level": band.risk_level,
                    "label": RISK_LEVEL_LABELS[band.risk_level],
                    "css_class": RISK_LEVEL_CLASSES[band.risk_level],
                    "min_score": band.min_score,
                    "max_score": upper,
                    "recommendation": RECOMMENDATIONS[band.risk_level],
                }
            )
            upper = band.min_score - 1
        levels.reverse()
        return levels

    def get_rules(self) -> list[dict[str, Any]]:
        """Describe the scoring rule table in evaluation order."""
        return [
            {
                "factor": rule.factor,
                "bands": [{"label": band.label, "points": band.points} for band in rule.bands],
            }
            for rule in SCORING_RULES
        ]

    def get_stats(self) -> dict[str, Any]:
        """Get statistics about the scoring tables.

        Returns:
            Dictionary with rule and band counts.
        """
        return {
            "total_rules": len(SCORING_RULES),
            "total_bands": sum(len(rule.bands) for rule in SCORING_RULES),
            "risk_levels": [band.risk_level.value for band in RISK_BANDS],
            "max_score": MAX_SCORE,
        }


# Singleton instance and lock
_gdm_risk_service: GDMRiskService | None = None
_gdm_risk_lock = Lock()


def get_gdm_risk_service() -> GDMRiskService:
    """Get the singleton GDMRiskService instance.

    Returns:
        The singleton GDMRiskService instance.
    """
    global _gdm_risk_service

    if _gdm_risk_service is None:
        with _gdm_risk_lock:
            if _gdm_risk_service is None:
                logger.info("Creating singleton GDMRiskService instance")
                _gdm_risk_service = GDMRiskService()

    return _gdm_risk_service


def reset_gdm_risk_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _gdm_risk_service
    with _gdm_risk_lock:
        _gdm_risk_service = None

"""Request and response schemas for GDM risk assessment."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from gdm_risk.schemas.base import RiskLevel

if TYPE_CHECKING:
    from gdm_risk.services.gdm_risk import ClinicalInput


class ClinicalInputRequest(BaseModel):
    """Maternal measurements submitted for GDM risk screening.

    Values are taken as given; physiological range checks belong to the
    form that collects them.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "current_weight_kg": 70,
                "initial_weight_kg": 65,
                "systolic_bp": 120,
                "diastolic_bp": 80,
                "fasting_glucose": 0.9,
                "glucose_1h": 1.5,
                "glucose_2h": 1.2,
                "hemoglobin": 12,
                "has_anemia": False,
                "has_glucosuria": False,
                "has_albuminuria": False,
                "has_edema": False,
                "gestational_age_weeks": 24,
                "prenatal_visit_count": 5,
                "uterine_height_cm": 24,
            }
        }
    )

    patient_id: str | None = Field(None, description="Optional patient identifier for the audit trail")
    current_weight_kg: float = Field(..., description="Current maternal weight (kg)")
    initial_weight_kg: float = Field(..., description="Pre-pregnancy weight (kg)")
    systolic_bp: float = Field(..., description="Systolic blood pressure (mmHg)")
    diastolic_bp: float = Field(..., description="Diastolic blood pressure (mmHg)")
    fasting_glucose: float = Field(..., description="Fasting plasma glucose (g/L)")
    glucose_1h: float = Field(..., description="1-hour post-load glucose (g/L)")
    glucose_2h: float = Field(..., description="2-hour post-load glucose (g/L)")
    hemoglobin: float = Field(..., description="Hemoglobin (g/dL)")
    has_anemia: bool = Field(..., description="Clinician-flagged anemia")
    has_glucosuria: bool = Field(..., description="Glucose detected in urine")
    has_albuminuria: bool = Field(..., description="Albumin detected in urine")
    has_edema: bool = Field(..., description="Clinically observed edema")
    gestational_age_weeks: float = Field(..., description="Term in weeks")
    prenatal_visit_count: float = Field(..., description="Number of prenatal consultations")
    uterine_height_cm: float = Field(..., description="Uterine height (cm)")

    def to_clinical_input(self) -> "ClinicalInput":
        """Convert to the engine's input record."""
        from gdm_risk.services.gdm_risk import ClinicalInput

        return ClinicalInput(**self.model_dump(exclude={"patient_id"}))


class ScoreResponse(BaseModel):
    """Raw risk score with its contributing bands."""

    score: int = Field(..., description="Risk score (0-100)")
    components: dict[str, int] = Field(default_factory=dict, description="Fired band label to points")


class RiskAssessmentResponse(BaseModel):
    """Interpretation of a risk score."""

    score: int = Field(..., description="Risk score (0-100)")
    probability: float = Field(..., description="Estimated GDM probability (0-1)")
    risk_level: RiskLevel
    risk_label: str = Field(..., description="Display label for the risk level")
    risk_class: str = Field(..., description="Presentation class for the risk level")
    recommendation: str


class AssessmentResponse(RiskAssessmentResponse):
    """Full assessment of a clinical input."""

    components: dict[str, int] = Field(default_factory=dict, description="Fired band label to points")


class RiskLevelInfo(BaseModel):
    """One risk band."""

    risk_level: RiskLevel
    label: str
    css_class: str
    min_score: int
    max_score: int
    recommendation: str


class ScoringBandInfo(BaseModel):
    """One band of a scoring rule."""

    label: str
    points: int


class ScoringRuleInfo(BaseModel):
    """A scoring rule and its bands, highest threshold first."""

    factor: str
    bands: list[ScoringBandInfo]

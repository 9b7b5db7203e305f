"""API routers for the GDM Risk Engine."""

from gdm_risk.api.assessment import router as assessment_router

__all__ = [
    "assessment_router",
]

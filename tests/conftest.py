"""Pytest configuration and fixtures for GDM risk engine tests."""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from gdm_risk.main import app
from gdm_risk.services.gdm_risk import ClinicalInput, reset_gdm_risk_service

# Default values of the intake form
BASELINE_VALUES: dict[str, Any] = {
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


@pytest.fixture
def make_input() -> Callable[..., ClinicalInput]:
    """Build a ClinicalInput from the form defaults with overrides."""

    def _make(**overrides: Any) -> ClinicalInput:
        return ClinicalInput(**{**BASELINE_VALUES, **overrides})

    return _make


@pytest.fixture
def baseline_payload() -> dict[str, Any]:
    """Request body with the form defaults."""
    return dict(BASELINE_VALUES)


@pytest.fixture(autouse=True)
def fresh_service() -> None:
    """Start every test with a new service singleton."""
    reset_gdm_risk_service()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

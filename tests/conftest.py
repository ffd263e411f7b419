"""Shared test fixtures."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.calculators.paye import AssessmentInput, AssessmentResult, compute_assessment
from src.calculators.tax_data import EmploymentType

FIXED_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def make_result() -> Callable[..., AssessmentResult]:
    """Factory for results created a given number of minutes after FIXED_NOW."""

    def _make(
        salary: str = "36000",
        employment_type: EmploymentType = EmploymentType.EMPLOYED,
        minutes: int = 0,
    ) -> AssessmentResult:
        created_at = FIXED_NOW + timedelta(minutes=minutes)
        return compute_assessment(
            AssessmentInput(Decimal(salary), employment_type),
            now=lambda: created_at,
        )

    return _make

"""PAYE calculator — band-by-band income tax plus capped NIS contribution."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple

from pydantic import BaseModel

from src.calculators.errors import InvalidInputError
from src.calculators.tax_data import DEFAULT_RATE_TABLE, EmploymentType, RateTable

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = Decimal("12")

# Salaries must stay below 1e15; huge exponents overflow the decimal context
MAX_SALARY_EXPONENT = 14


class AssessmentInput(NamedTuple):
    """Salary and classification to assess."""

    annual_gross_salary: Decimal
    employment_type: EmploymentType


class AssessmentResult(BaseModel):
    """One computed assessment. Immutable once created."""

    per_band_taxable_amounts: tuple[Decimal, ...]  # tax charged in each band
    annual_income_tax: Decimal
    monthly_income_tax: Decimal
    monthly_social_insurance: Decimal
    annual_gross_salary: Decimal
    employment_type: EmploymentType
    created_at: datetime

    model_config = {"frozen": True}

    @property
    def monthly_gross_salary(self) -> Decimal:
        return self.annual_gross_salary / MONTHS_PER_YEAR

    @property
    def total_monthly_deductions(self) -> Decimal:
        return self.monthly_income_tax + self.monthly_social_insurance

    @property
    def monthly_take_home(self) -> Decimal:
        return self.monthly_gross_salary - self.total_monthly_deductions

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict with float amounts."""
        return {
            "annual_gross_salary": float(self.annual_gross_salary),
            "employment_type": self.employment_type.value,
            "per_band_taxable_amounts": [float(a) for a in self.per_band_taxable_amounts],
            "annual_income_tax": float(self.annual_income_tax),
            "monthly_income_tax": float(self.monthly_income_tax),
            "monthly_social_insurance": float(self.monthly_social_insurance),
            "monthly": {
                "gross": float(self.monthly_gross_salary),
                "total_deductions": float(self.total_monthly_deductions),
                "take_home": float(self.monthly_take_home),
            },
            "created_at": self.created_at.isoformat(),
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_salary(value: Any) -> Decimal:
    # bool is an int subclass; True is not a salary
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float, str)):
        raise InvalidInputError("annual_gross_salary", "Must be a number.")
    try:
        salary = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise InvalidInputError("annual_gross_salary", "Must be a number.") from exc
    if not salary.is_finite() or salary <= 0:
        raise InvalidInputError("annual_gross_salary", "Must be a finite positive number.")
    if salary.adjusted() > MAX_SALARY_EXPONENT:
        raise InvalidInputError(
            "annual_gross_salary", "Must be less than 1,000,000,000,000,000."
        )
    return salary


def _coerce_employment_type(value: Any) -> EmploymentType:
    if isinstance(value, EmploymentType):
        return value
    if isinstance(value, str):
        try:
            return EmploymentType(value)
        except ValueError:
            pass
    valid = ", ".join(t.value for t in EmploymentType)
    raise InvalidInputError("employment_type", f"Must be one of: {valid}.")


def _band_taxes(salary: Decimal, table: RateTable) -> tuple[Decimal, ...]:
    """Tax charged in each band, in table order.

    Each non-final band consumes income between the previous threshold and
    its own. The final band takes whatever remains, uncapped.
    """
    taxes: list[Decimal] = []
    lower = Decimal("0")
    last = len(table.bands) - 1

    for index, band in enumerate(table.bands):
        remaining = max(salary - lower, Decimal("0"))
        if index == last:
            taxable = remaining
        else:
            taxable = min(remaining, band.threshold - lower)
            lower = band.threshold
        taxes.append(taxable * band.rate)

    return tuple(taxes)


def compute_assessment(
    assessment_input: AssessmentInput,
    table: RateTable = DEFAULT_RATE_TABLE,
    now: Callable[[], datetime] | None = None,
) -> AssessmentResult:
    """Compute PAYE and NIS for one salary.

    Args:
        assessment_input: Annual gross salary (> 0) and employment type.
        table: Bands and NIS rules to apply.
        now: Clock for ``created_at``; defaults to UTC now.

    Returns:
        A fully populated AssessmentResult.

    Raises:
        InvalidInputError: salary is not a finite positive number, or the
            employment type is not a known classification.
    """
    salary = _coerce_salary(assessment_input.annual_gross_salary)
    employment_type = _coerce_employment_type(assessment_input.employment_type)

    band_taxes = _band_taxes(salary, table)
    annual_tax = sum(band_taxes, Decimal("0"))

    nis = table.nis
    insurable = min(salary / MONTHS_PER_YEAR, nis.monthly_insurable_ceiling)
    monthly_nis = nis.rate_for(employment_type) * insurable

    result = AssessmentResult(
        per_band_taxable_amounts=band_taxes,
        annual_income_tax=annual_tax,
        monthly_income_tax=annual_tax / MONTHS_PER_YEAR,
        monthly_social_insurance=monthly_nis,
        annual_gross_salary=salary,
        employment_type=employment_type,
        created_at=(now or _utcnow)(),
    )
    logger.debug(
        "Assessed %s (%s): annual PAYE %s, monthly NIS %s",
        salary,
        employment_type.value,
        annual_tax,
        monthly_nis,
    )
    return result


def calculate_paye(
    annual_gross_salary: Decimal | int | float | str,
    employment_type: EmploymentType | str = EmploymentType.EMPLOYED,
    table: RateTable = DEFAULT_RATE_TABLE,
) -> AssessmentResult:
    """Shorthand for ``compute_assessment(AssessmentInput(...))``."""
    return compute_assessment(AssessmentInput(annual_gross_salary, employment_type), table)

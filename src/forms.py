"""Validation of user-entered assessment input.

The calculator assumes clean input; this is the gate in front of it. Raw
text from a prompt or the command line is parsed here and every failing
field gets its own message, so nothing is computed until all fields pass.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from src.calculators.paye import AssessmentInput
from src.calculators.tax_data import EmploymentType

logger = logging.getLogger(__name__)

REQUIRED = "Field is required"
NOT_A_NUMBER = "Must be a number"
NOT_POSITIVE = "Must be more than zero"
BAD_EMPLOYMENT_TYPE = "Must be employed or self-employed"

# Currency symbol and whitespace
_CURRENCY_NOISE_RE = re.compile(r"[\s$]")

# Plain decimal, optionally grouped in thousands: 36000, 1,250,000.50, .5
_AMOUNT_RE = re.compile(r"[-+]?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?|[-+]?\.\d+")


class FormValidationError(ValueError):
    """One or more form fields are invalid."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = errors


class AssessmentForm(BaseModel):
    """The two fields of the salary form."""

    salary: Decimal
    employment_type: EmploymentType

    @field_validator("salary", mode="before")
    @classmethod
    def _parse_salary(cls, value: Any) -> Decimal:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("required", REQUIRED)
        if isinstance(value, bool):
            raise PydanticCustomError("not_a_number", NOT_A_NUMBER)
        if isinstance(value, str):
            text = _CURRENCY_NOISE_RE.sub("", value)
            if not _AMOUNT_RE.fullmatch(text):
                raise PydanticCustomError("not_a_number", NOT_A_NUMBER)
            text = text.replace(",", "")
        else:
            text = str(value)
        try:
            salary = Decimal(text)
        except InvalidOperation:
            raise PydanticCustomError("not_a_number", NOT_A_NUMBER) from None
        if not salary.is_finite():
            raise PydanticCustomError("not_a_number", NOT_A_NUMBER)
        if salary <= 0:
            raise PydanticCustomError("not_positive", NOT_POSITIVE)
        return salary

    @field_validator("employment_type", mode="before")
    @classmethod
    def _parse_employment_type(cls, value: Any) -> EmploymentType:
        if isinstance(value, EmploymentType):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("required", REQUIRED)
        normalized = re.sub(r"[\s_]+", "-", str(value).strip().lower())
        try:
            return EmploymentType(normalized)
        except ValueError:
            raise PydanticCustomError("employment_type", BAD_EMPLOYMENT_TYPE) from None


def parse_assessment_form(salary: Any, employment_type: Any) -> AssessmentInput:
    """Validate raw form values and return calculator input.

    Raises:
        FormValidationError: with a message per failing field.
    """
    try:
        form = AssessmentForm(salary=salary, employment_type=employment_type)
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            errors.setdefault(field, error["msg"])
        logger.debug("Rejected form input: %s", errors)
        raise FormValidationError(errors) from None
    return AssessmentInput(form.salary, form.employment_type)

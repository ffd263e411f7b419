"""Barbados payroll constants — PAYE bands and NIS contribution rules.

Hardcoded Python constants for a single tax regime and year. An alternative
table can be loaded from YAML (see ``load_rate_table``) without touching the
calculator.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, NamedTuple

from config import load_yaml_config


class EmploymentType(str, Enum):
    """Employment classification; selects the NIS contribution rate."""

    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"


class TaxBand(NamedTuple):
    """A single PAYE band."""

    threshold: Decimal | None  # cumulative ceiling; ignored on the final band
    rate: Decimal


class NisRules(NamedTuple):
    """National Insurance Scheme parameters."""

    employed_rate: Decimal
    self_employed_rate: Decimal
    monthly_insurable_ceiling: Decimal

    def rate_for(self, employment_type: EmploymentType) -> Decimal:
        if employment_type is EmploymentType.EMPLOYED:
            return self.employed_rate
        return self.self_employed_rate


class RateTable(NamedTuple):
    """All parameters needed to compute one assessment."""

    bands: tuple[TaxBand, ...]
    nis: NisRules
    label: str = ""


BARBADOS_RATE_TABLE = RateTable(
    bands=(
        TaxBand(Decimal("25000"), Decimal("0")),
        TaxBand(Decimal("50000"), Decimal("0.125")),
        TaxBand(None, Decimal("0.285")),  # unbounded
    ),
    nis=NisRules(
        employed_rate=Decimal("0.111"),
        self_employed_rate=Decimal("0.171"),
        monthly_insurable_ceiling=Decimal("4880"),
    ),
    label="Barbados",
)

DEFAULT_RATE_TABLE = BARBADOS_RATE_TABLE


def validate_rate_table(table: RateTable) -> RateTable:
    """Check the structural rules the calculator relies on.

    Raises:
        ValueError: if the table is empty, a rate is outside [0, 1], or the
            non-final thresholds are missing, negative or not increasing.
    """
    if not table.bands:
        raise ValueError("Rate table must contain at least one band.")

    previous = Decimal("0")
    for index, band in enumerate(table.bands):
        if not band.rate.is_finite() or not Decimal("0") <= band.rate <= Decimal("1"):
            raise ValueError(f"Band {index}: rate {band.rate} is outside [0, 1].")
        if index == len(table.bands) - 1:
            break
        if band.threshold is None:
            raise ValueError(f"Band {index}: only the final band may omit its threshold.")
        if not band.threshold.is_finite() or band.threshold < 0:
            raise ValueError(f"Band {index}: threshold must be non-negative.")
        if index > 0 and band.threshold <= previous:
            raise ValueError(
                f"Band {index}: threshold {band.threshold} must exceed {previous}."
            )
        previous = band.threshold

    nis = table.nis
    for name in ("employed_rate", "self_employed_rate"):
        rate = getattr(nis, name)
        if not rate.is_finite() or not Decimal("0") <= rate <= Decimal("1"):
            raise ValueError(f"NIS {name} {rate} is outside [0, 1].")
    ceiling = nis.monthly_insurable_ceiling
    if not ceiling.is_finite() or ceiling < 0:
        raise ValueError("NIS monthly insurable ceiling must be a non-negative number.")

    return table


def _to_decimal(value: Any, what: str) -> Decimal:
    # YAML booleans would otherwise read as the strings "True"/"False"
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValueError(f"{what}: {value!r} is not a number.")
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"{what}: {value!r} is not a number.") from exc
    if not number.is_finite():
        raise ValueError(f"{what}: {value!r} is not a finite number.")
    return number


def _require(section: dict, key: str, what: str) -> Any:
    if key not in section:
        raise ValueError(f"{what}: missing '{key}'.")
    return section[key]


def load_rate_table(filename: str) -> RateTable:
    """Load a rate table from a YAML file in the config/ directory.

    Expected layout::

        label: Barbados
        bands:
          - {threshold: 25000, rate: 0}
          - {threshold: 50000, rate: 0.125}
          - {rate: 0.285}
        nis:
          employed_rate: 0.111
          self_employed_rate: 0.171
          monthly_insurable_ceiling: 4880

    Raises:
        ValueError: the file is malformed or fails ``validate_rate_table``.
    """
    data = load_yaml_config(filename)
    if not isinstance(data, dict) or "bands" not in data or "nis" not in data:
        raise ValueError(f"{filename}: expected 'bands' and 'nis' sections.")
    if not isinstance(data["bands"], list):
        raise ValueError(f"{filename}: 'bands' must be a list.")
    if not isinstance(data["nis"], dict):
        raise ValueError(f"{filename}: 'nis' must be a mapping.")

    bands = []
    for index, raw in enumerate(data["bands"]):
        if not isinstance(raw, dict):
            raise ValueError(f"{filename}: band {index} must be a mapping.")
        threshold = raw.get("threshold")
        bands.append(
            TaxBand(
                threshold=_to_decimal(threshold, f"band {index} threshold")
                if threshold is not None
                else None,
                rate=_to_decimal(_require(raw, "rate", f"band {index}"), f"band {index} rate"),
            )
        )

    raw_nis = data["nis"]
    table = RateTable(
        bands=tuple(bands),
        nis=NisRules(
            employed_rate=_to_decimal(
                _require(raw_nis, "employed_rate", "NIS"), "NIS employed_rate"
            ),
            self_employed_rate=_to_decimal(
                _require(raw_nis, "self_employed_rate", "NIS"), "NIS self_employed_rate"
            ),
            monthly_insurable_ceiling=_to_decimal(
                _require(raw_nis, "monthly_insurable_ceiling", "NIS"),
                "NIS monthly_insurable_ceiling",
            ),
        ),
        label=str(data.get("label", "")),
    )
    return validate_rate_table(table)

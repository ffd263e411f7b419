"""Text rendering of assessments for the terminal."""

from decimal import Decimal

from src.calculators.paye import AssessmentResult
from src.calculators.tax_data import RateTable
from src.history import AssessmentHistory

DISCLAIMER = (
    "* This calculator does not currently account for any taxable benefits. "
    "Please consult a tax professional for accurate assessments."
)

PRIVACY_NOTICE = (
    "We do not collect any data. All calculations are done on your device "
    "and no data is sent to any server."
)

HISTORY_HEADING = "Your previous assessments are listed below"

_LABEL_WIDTH = 20
_AMOUNT_WIDTH = 14


def format_currency(amount: Decimal | float, symbol: str = "$") -> str:
    """Format a positive amount as currency; zero and negatives render blank."""
    if amount <= 0:
        return ""
    return f"{symbol}{Decimal(str(amount)):,.2f}"


def format_rate(rate: Decimal | float) -> str:
    """0.125 -> '12.50 %'."""
    return f"{Decimal(str(rate)) * 100:.2f} %"


def _line(label: str, value: str, indent: int = 2) -> str:
    return " " * indent + label.ljust(_LABEL_WIDTH) + value.rjust(_AMOUNT_WIDTH)


def render_assessment(
    result: AssessmentResult,
    table: RateTable,
    symbol: str = "$",
) -> str:
    """Render one assessment as a monthly summary with the PAYE workings."""
    def money(amount: Decimal | None) -> str:
        return format_currency(amount, symbol) if amount is not None else ""

    last = len(table.bands) - 1
    lines = [
        f"For a monthly gross salary of {money(result.monthly_gross_salary)} "
        f"({result.employment_type.value}), you will pay the following on a "
        "monthly basis:",
        _line("PAYE", money(result.monthly_income_tax)),
        "    " + "Limit".ljust(16) + "Tax Rate".rjust(10) + "Amount".rjust(_AMOUNT_WIDTH),
    ]

    for index, (band, amount) in enumerate(zip(table.bands, result.per_band_taxable_amounts)):
        # the final band is unbounded whatever its nominal threshold
        limit = "no limit" if index == last else money(band.threshold)
        lines.append(
            "    " + limit.ljust(16) + format_rate(band.rate).rjust(10)
            + money(amount).rjust(_AMOUNT_WIDTH)
        )

    lines.extend([
        _line("Total Annual Tax", money(result.annual_income_tax), indent=4),
        _line("Total Monthly Tax", money(result.monthly_income_tax), indent=4),
        _line("NIS", money(result.monthly_social_insurance)),
        _line("Total Tax", money(result.total_monthly_deductions)),
        _line("Remaining", money(result.monthly_take_home)),
    ])
    return "\n".join(lines)


def render_history(
    history: AssessmentHistory,
    table: RateTable,
    symbol: str = "$",
) -> str:
    """Render every assessment in the session, newest first."""
    if not history:
        return ""
    cards = [render_assessment(result, table, symbol) for result in history.latest_first()]
    return "\n\n".join([HISTORY_HEADING, *cards])

"""Tests for currency formatting and assessment rendering."""

from decimal import Decimal

import pytest

from src.calculators.tax_data import BARBADOS_RATE_TABLE, EmploymentType
from src.formatting import (
    HISTORY_HEADING,
    format_currency,
    format_rate,
    render_assessment,
    render_history,
)
from src.history import AssessmentHistory


class TestFormatCurrency:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("1375"), "$1,375.00"),
            (Decimal("1447.916666"), "$1,447.92"),
            (114.583333, "$114.58"),
            (Decimal("1000000"), "$1,000,000.00"),
            (Decimal("0.01"), "$0.01"),
        ],
    )
    def test_positive_amounts(self, amount: Decimal | float, expected: str) -> None:
        assert format_currency(amount) == expected

    @pytest.mark.parametrize("amount", [Decimal("0"), 0, Decimal("-5"), -0.5])
    def test_non_positive_renders_blank(self, amount: Decimal | float) -> None:
        assert format_currency(amount) == ""

    def test_custom_symbol(self) -> None:
        assert format_currency(Decimal("834.48"), "BBD$") == "BBD$834.48"


class TestFormatRate:
    @pytest.mark.parametrize(
        ("rate", "expected"),
        [(Decimal("0"), "0.00 %"), (Decimal("0.125"), "12.50 %"), (0.285, "28.50 %")],
    )
    def test_percentages(self, rate: Decimal | float, expected: str) -> None:
        assert format_rate(rate) == expected


class TestRenderAssessment:
    def test_monthly_summary(self, make_result) -> None:  # type: ignore[no-untyped-def]
        """$36,000 employed: $114.58 PAYE + $333 NIS out of $3,000."""
        text = render_assessment(make_result("36000"), BARBADOS_RATE_TABLE)
        assert "For a monthly gross salary of $3,000.00 (employed)" in text
        assert "$114.58" in text
        assert "$333.00" in text
        assert "$447.58" in text
        assert "$2,552.42" in text

    def test_band_workings(self, make_result) -> None:  # type: ignore[no-untyped-def]
        text = render_assessment(
            make_result("100000", EmploymentType.SELF_EMPLOYED), BARBADOS_RATE_TABLE
        )
        lines = text.splitlines()
        assert any("$50,000.00" in line and "12.50 %" in line and "$3,125.00" in line
                   for line in lines)
        assert any("no limit" in line and "28.50 %" in line and "$14,250.00" in line
                   for line in lines)
        assert any("Total Annual Tax" in line and "$17,375.00" in line for line in lines)
        assert any("Total Monthly Tax" in line and "$1,447.92" in line for line in lines)
        assert "(self-employed)" in text

    def test_custom_symbol(self, make_result) -> None:  # type: ignore[no-untyped-def]
        text = render_assessment(make_result("36000"), BARBADOS_RATE_TABLE, symbol="BBD$")
        assert "BBD$3,000.00" in text


class TestRenderHistory:
    def test_empty_history(self) -> None:
        assert render_history(AssessmentHistory(), BARBADOS_RATE_TABLE) == ""

    def test_newest_card_first(self, make_result) -> None:  # type: ignore[no-untyped-def]
        history = AssessmentHistory()
        history.append(make_result("36000", minutes=0))
        history.append(make_result("100000", minutes=1))

        text = render_history(history, BARBADOS_RATE_TABLE)

        assert text.startswith(HISTORY_HEADING)
        assert text.index("$8,333.33") < text.index("$3,000.00")

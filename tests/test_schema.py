"""Tests for input forms and lenient numeric parsing."""

from __future__ import annotations

import math
from typing import Any

import pytest
from pydantic import ValidationError

from moneycalc.config.defaults import default_car_loan, default_paycheck
from moneycalc.config.schema import (
    CarLoanForm,
    CreditCardForm,
    PaycheckForm,
    SaveMillionForm,
    SavingsGrowthForm,
    parse_number,
)


class TestParseNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (42, 42.0),
            (3.5, 3.5),
            ("1500", 1500.0),
            (" 7.25", 7.25),
            ("12abc", 12.0),
            ("1,500", 1.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("-2", -2.0),
            ("+3", 3.0),
            ("1e3", 1000.0),
            ("2e", 2.0),
            ("abc", 0.0),
            ("", 0.0),
            (None, 0.0),
        ],
    )
    def test_leading_literal(self, raw: Any, expected: float) -> None:
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["1e999", "Infinity", math.inf, math.nan])
    def test_non_finite_is_zero(self, raw: Any) -> None:
        assert parse_number(raw) == 0.0


class TestForms:
    def test_string_fields_parse(self) -> None:
        form = CarLoanForm(car_price="30000", interest_rate="6.5%", loan_term="")
        assert form.car_price == 30_000.0
        assert form.interest_rate == 6.5
        assert form.loan_term == 0.0

    def test_tax_year_parses(self) -> None:
        assert PaycheckForm(tax_year="2023").tax_year == 2023
        assert PaycheckForm(tax_year="n/a").tax_year == 0

    def test_defaults(self) -> None:
        assert SaveMillionForm().savings_goal == 1_000_000
        assert SavingsGrowthForm().compounding_frequency == "monthly"
        assert CreditCardForm().payoff_timeline_unit == "months"

    def test_unknown_enum_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PaycheckForm(pay_frequency="fortnightly")
        with pytest.raises(ValidationError):
            PaycheckForm(filing_status="married_jointly")

    def test_extra_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CarLoanForm(price=30_000)

    def test_frozen(self) -> None:
        form = default_car_loan()
        with pytest.raises(ValidationError):
            form.car_price = 1.0  # type: ignore[misc]

    def test_model_copy_leaves_original(self) -> None:
        form = default_paycheck()
        richer = form.model_copy(update={"annual_salary": 150_000})
        assert form.annual_salary == 75_000
        assert richer.annual_salary == 150_000

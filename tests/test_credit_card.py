"""Tests for the credit card payoff engine."""

from __future__ import annotations

import inspect
import logging
from datetime import date

import pytest

from moneycalc.calculators.credit_card import (
    NeverPaysOff,
    PaidOff,
    calculate_credit_card_payoff,
)
from moneycalc.config.defaults import default_credit_card
from moneycalc.config.schema import CreditCardForm
from moneycalc.core.amortization import MAX_PERIODS, amortized_payment


def _monthly(balance: float, apr: float, payment: float) -> CreditCardForm:
    return CreditCardForm(
        balance=balance,
        annual_interest_rate=apr,
        payment_approach="monthly-payment",
        monthly_payment=payment,
    )


def _timeline(balance: float, apr: float, months: float, unit: str = "months") -> CreditCardForm:
    return CreditCardForm(
        balance=balance,
        annual_interest_rate=apr,
        payment_approach="payoff-timeline",
        payoff_months=months,
        payoff_timeline_unit=unit,
    )


class TestMonthlyPayment:
    def test_converges(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_monthly(5_000, 20, 100), reference_date)
        assert isinstance(result.outcome, PaidOff)
        months = result.outcome.months
        assert result.schedule[months].balance == 0.0
        assert result.schedule[months - 1].balance > 0
        assert len(result.schedule) == months + 1

    def test_total_cost(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_monthly(5_000, 20, 100), reference_date)
        assert result.total_interest is not None
        assert result.total_interest == pytest.approx(
            sum(row.interest for row in result.schedule)
        )
        assert result.total_cost == pytest.approx(5_000 + result.total_interest)

    def test_never_pays_off(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_monthly(5_000, 20, 80), reference_date)
        assert isinstance(result.outcome, NeverPaysOff)
        assert not result.pays_off
        assert result.months_to_payoff is None
        assert result.payoff_date is None
        out = result.formatted()
        assert out["monthsToPayoff"] == "Never"
        assert out["totalInterest"] == "∞"
        assert out["totalCost"] == "∞"
        assert out["payoffDate"] == "Never"

    def test_payment_equal_to_interest_never_pays_off(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_monthly(1_200, 12, 12), reference_date)
        assert isinstance(result.outcome, NeverPaysOff)

    def test_cap_reached_is_never(
        self, reference_date: date, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="moneycalc.calculators.credit_card"):
            result = calculate_credit_card_payoff(
                _monthly(10_000, 24, 200.0001), reference_date
            )
        assert isinstance(result.outcome, NeverPaysOff)
        assert len(result.schedule) == MAX_PERIODS + 1
        assert "not paid off" in caplog.text

    def test_zero_balance(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_monthly(0, 20, 100), reference_date)
        assert result.outcome == PaidOff(months=0, total_interest=0.0)
        assert result.payoff_date == reference_date

    def test_zero_rate(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_monthly(1_000, 0, 250), reference_date)
        assert result.outcome == PaidOff(months=4, total_interest=0.0)


class TestPayoffTimeline:
    def test_required_payment(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_timeline(5_000, 20, 24), reference_date)
        assert result.monthly_payment == pytest.approx(amortized_payment(5_000, 20 / 1200, 24))
        assert result.months_to_payoff == 24
        assert result.schedule[-1].balance == pytest.approx(0.0, abs=1e-6)

    def test_years_unit(self, reference_date: date) -> None:
        in_years = calculate_credit_card_payoff(_timeline(5_000, 20, 2, "years"), reference_date)
        in_months = calculate_credit_card_payoff(_timeline(5_000, 20, 24), reference_date)
        assert in_years.formatted() == in_months.formatted()

    def test_zero_rate_divides_evenly(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_timeline(1_200, 0, 12), reference_date)
        assert result.monthly_payment == 100.0
        assert result.total_interest == 0.0

    def test_partial_month_rounds_up(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_timeline(1_200, 0, 11.5), reference_date)
        assert result.months_to_payoff == 12

    def test_no_target(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_timeline(1_200, 18, 0), reference_date)
        assert result.monthly_payment == 0.0
        assert result.outcome == PaidOff(months=0, total_interest=0.0)

    def test_target_beyond_simulation_cap(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_timeline(5_000, 20, 60, "years"), reference_date)
        assert result.months_to_payoff == 720
        assert result.monthly_payment == pytest.approx(amortized_payment(5_000, 20 / 1200, 720))
        assert len(result.schedule) == 721
        assert result.schedule[-1].balance == pytest.approx(0.0, abs=1e-6)
        assert result.payoff_date == date(2085, 1, 15)


class TestBaselineAndDates:
    def test_minimum_payment(self, reference_date: date) -> None:
        assert calculate_credit_card_payoff(
            _monthly(5_000, 20, 150), reference_date
        ).minimum_payment == 50.0
        assert calculate_credit_card_payoff(
            _monthly(1_000, 20, 150), reference_date
        ).minimum_payment == 25.0

    def test_savings_against_minimum(self, reference_date: date) -> None:
        result = calculate_credit_card_payoff(_monthly(5_000, 6, 200), reference_date)
        assert result.total_interest is not None
        assert result.minimum_payment_interest > 0
        assert result.savings == pytest.approx(
            result.minimum_payment_interest - result.total_interest
        )
        assert result.savings > 0

    def test_no_savings_when_minimum_never_amortizes(self, reference_date: date) -> None:
        # 1% minimum is below 20% APR interest, so the baseline accrues nothing.
        result = calculate_credit_card_payoff(default_credit_card(), reference_date)
        assert result.minimum_payment_interest == 0.0
        assert result.savings == 0.0

    def test_payoff_date(self) -> None:
        result = calculate_credit_card_payoff(_monthly(100, 0, 100), date(2025, 1, 31))
        assert result.payoff_date == date(2025, 2, 28)
        assert result.formatted()["payoffDate"] == "February 28, 2025"

    def test_schedule_starts_at_month_zero(self, reference_date: date) -> None:
        schedule = calculate_credit_card_payoff(default_credit_card(), reference_date).formatted()[
            "projectedPayoff"
        ]
        assert schedule[0] == {
            "month": 0,
            "balance": "5000.00",
            "payment": "0.00",
            "interest": "0.00",
            "principal": "0.00",
        }
        assert schedule[1]["interest"] == "83.33"
        assert schedule[1]["principal"] == "66.67"

    def test_idempotent(self, reference_date: date) -> None:
        form = default_credit_card()
        first = calculate_credit_card_payoff(form, reference_date).formatted()
        assert calculate_credit_card_payoff(form, reference_date).formatted() == first

    def test_reference_date_is_required(self) -> None:
        parameter = inspect.signature(calculate_credit_card_payoff).parameters["reference_date"]
        assert parameter.default is inspect.Parameter.empty
        with pytest.raises(TypeError):
            calculate_credit_card_payoff(default_credit_card())  # type: ignore[call-arg]

"""Tests for the annuity and amortization helpers."""

from __future__ import annotations

import pytest

from moneycalc.core.amortization import (
    MAX_PERIODS,
    amortize,
    amortized_payment,
    future_value,
    principal_for_payment,
    required_contribution,
)
from moneycalc.core.frequency import monthly_equivalent, periodic_rate


class TestAnnuity:
    def test_known_payment(self) -> None:
        assert amortized_payment(25_000, 0.005, 60) == pytest.approx(483.32, abs=0.005)

    def test_zero_rate_or_term(self) -> None:
        assert amortized_payment(25_000, 0.0, 60) == 0.0
        assert amortized_payment(25_000, 0.005, 0) == 0.0

    def test_principal_inverts_payment(self) -> None:
        payment = amortized_payment(18_000, 0.004, 48)
        assert principal_for_payment(payment, 0.004, 48) == pytest.approx(18_000)

    def test_principal_at_zero_rate(self) -> None:
        assert principal_for_payment(500, 0.0, 60) == 30_000
        assert principal_for_payment(500, 0.01, 0) == 0.0

    @pytest.mark.parametrize("rate", [0.0, 0.003, 0.01])
    def test_required_contribution_round_trip(self, rate: float) -> None:
        payment = required_contribution(50_000, 2_000, rate, 120)
        assert future_value(2_000, payment, rate, 120) == pytest.approx(50_000)

    def test_required_contribution_degenerate(self) -> None:
        assert required_contribution(10_000, 0, 0.01, 0) == 0.0
        assert required_contribution(1_200, 0, 0.0, 12) == 100.0

    def test_required_contribution_negative_when_start_overshoots(self) -> None:
        assert required_contribution(1_000, 5_000, 0.005, 12) < 0


class TestAmortize:
    def test_pays_off(self) -> None:
        run = amortize(1_000, 0.01, 100)
        assert run.paid_off
        assert run.final_balance == 0.0
        assert run.rows[-2].balance > 0
        assert run.total_interest == pytest.approx(sum(row.interest for row in run.rows))

    def test_payment_below_interest_stops_immediately(self) -> None:
        run = amortize(1_000, 0.02, 20)
        assert run.months == 0
        assert not run.paid_off
        assert run.rows == ()

    def test_zero_rate(self) -> None:
        run = amortize(1_000, 0.0, 250)
        assert run.months == 4
        assert run.total_interest == 0.0

    def test_cap(self) -> None:
        run = amortize(10_000, 0.02, 200.0001)
        assert run.months == MAX_PERIODS
        assert not run.paid_off

    def test_explicit_horizon_beyond_cap(self) -> None:
        payment = amortized_payment(10_000, 0.01, 720)
        run = amortize(10_000, 0.01, payment, max_months=720)
        assert run.months == 720
        assert run.final_balance == pytest.approx(0.0, abs=1e-6)

    def test_row_fields(self) -> None:
        first = amortize(1_000, 0.01, 100).rows[0]
        assert first.month == 1
        assert first.interest == pytest.approx(10.0)
        assert first.principal == pytest.approx(90.0)
        assert first.balance == pytest.approx(910.0)


class TestFrequency:
    @pytest.mark.parametrize(
        ("frequency", "expected"),
        [
            ("weekly", 433.0),
            ("biweekly", 217.0),
            ("monthly", 100.0),
            ("quarterly", 100.0 / 3),
            ("yearly", 100.0 / 12),
        ],
    )
    def test_monthly_equivalent(self, frequency: str, expected: float) -> None:
        assert monthly_equivalent(100, frequency) == pytest.approx(expected)

    def test_periodic_rate(self) -> None:
        assert periodic_rate(12, 12) == pytest.approx(0.01)
        assert periodic_rate(6, 4) == pytest.approx(0.015)

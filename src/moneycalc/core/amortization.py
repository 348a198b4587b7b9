"""Annuity and amortization math shared by the loan and savings engines."""

from __future__ import annotations

from dataclasses import dataclass

# Hard bound on every open-ended simulation (50 years of months).
MAX_PERIODS = 600

# Closed-form payments can leave a rounding residue on the last month.
_PAID_OFF_TOLERANCE = 1e-6


def amortized_payment(principal: float, rate: float, n_periods: float) -> float:
    """Level payment that retires ``principal`` over ``n_periods``.

    Returns 0 when ``n_periods <= 0`` or ``rate <= 0``; interest-free and
    zero-term loans are not amortized.
    """
    if n_periods <= 0 or rate <= 0:
        return 0.0
    growth = (1 + rate) ** n_periods
    return principal * rate * growth / (growth - 1)


def principal_for_payment(payment: float, rate: float, n_periods: float) -> float:
    """Inverse of :func:`amortized_payment`: the loan a payment can carry.

    At a zero rate the payment simply accumulates; non-positive terms carry
    nothing.
    """
    if n_periods <= 0:
        return 0.0
    if rate <= 0:
        return payment * n_periods
    growth = (1 + rate) ** n_periods
    return payment * (growth - 1) / (rate * growth)


def future_value(start: float, contribution: float, rate: float, n_periods: int) -> float:
    """Balance after ``n_periods`` of ``balance * (1 + rate) + contribution``."""
    if rate == 0:
        return start + contribution * n_periods
    growth = (1 + rate) ** n_periods
    return start * growth + contribution * (growth - 1) / rate


def required_contribution(goal: float, start: float, rate: float, n_periods: float) -> float:
    """Per-period contribution that grows ``start`` to exactly ``goal``.

    Contributions land at the end of each period, after interest, which is the
    step the savings simulations use. Negative when ``start`` alone overshoots
    the goal; 0 when there are no periods.
    """
    if n_periods <= 0:
        return 0.0
    if rate == 0:
        return (goal - start) / n_periods
    growth = (1 + rate) ** n_periods
    return (goal - start * growth) / ((growth - 1) / rate)


@dataclass(frozen=True, slots=True)
class AmortizationRow:
    """One simulated month of a debt payoff."""

    month: int
    balance: float
    payment: float
    interest: float
    principal: float


@dataclass(frozen=True)
class AmortizationRun:
    """Result of :func:`amortize`.

    Attributes:
        rows: Simulated months, starting at month 1.
        months: Number of months simulated.
        total_interest: Interest accrued over those months.
        paid_off: Whether the balance reached zero.
    """

    rows: tuple[AmortizationRow, ...]
    months: int
    total_interest: float
    paid_off: bool

    @property
    def final_balance(self) -> float:
        return self.rows[-1].balance if self.rows else 0.0


def amortize(
    balance: float,
    rate: float,
    payment: float,
    max_months: int | None = None,
) -> AmortizationRun:
    """Simulate a level monthly payment against a balance.

    Each month interest accrues on the remaining balance and the rest of the
    payment retires principal; the balance never goes below zero. The loop
    stops when the balance is gone, when a payment no longer covers the
    interest, or after ``max_months``. Without an explicit finite horizon the
    run is bounded by :data:`MAX_PERIODS`.
    """
    if max_months is None:
        max_months = MAX_PERIODS
    remaining = balance
    total_interest = 0.0
    rows: list[AmortizationRow] = []
    month = 0
    while remaining > 0 and month < max_months:
        interest = remaining * rate
        principal = payment - interest
        if principal <= 0:
            break
        month += 1
        remaining = max(0.0, remaining - principal)
        total_interest += interest
        rows.append(AmortizationRow(month, remaining, payment, interest, principal))
    return AmortizationRun(
        rows=tuple(rows),
        months=month,
        total_interest=total_interest,
        paid_off=remaining <= _PAID_OFF_TOLERANCE,
    )

"""Credit card payoff engine.

Two approaches are supported: a fixed monthly payment (solve for the months
to payoff) and a fixed payoff timeline (solve for the monthly payment). Every
run is compared against paying the card minimum.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from moneycalc.config.schema import CreditCardForm
from moneycalc.core.amortization import (
    MAX_PERIODS,
    AmortizationRow,
    AmortizationRun,
    amortize,
    amortized_payment,
)
from moneycalc.core.frequency import periodic_rate
from moneycalc.core.timeline import Timeline, add_months
from moneycalc.io.formatting import INFINITE, format_currency

logger = logging.getLogger(__name__)

MINIMUM_PAYMENT_RATE = 0.01
MINIMUM_PAYMENT_FLOOR = 25.0
NEVER = "Never"


@dataclass(frozen=True)
class PaidOff:
    """The balance is retired after ``months`` payments."""

    months: int
    total_interest: float


@dataclass(frozen=True)
class NeverPaysOff:
    """The payment does not retire the balance within the simulation cap."""


PayoffOutcome = PaidOff | NeverPaysOff


@dataclass(frozen=True)
class CreditCardResult:
    """Credit card payoff projection.

    Attributes:
        outcome: ``PaidOff`` or ``NeverPaysOff``.
        monthly_payment: Payment used (entered, or required by the timeline).
        schedule: Month 0 (starting balance, no flows) followed by one row per
            simulated month.
        payoff_date: Reference date plus the months to payoff; ``None`` if the
            card is never paid off.
        minimum_payment: Baseline payment, ``max(1% of balance, $25)``.
        minimum_payment_interest: Interest accrued paying only the baseline
            (up to the simulation cap).
        savings: Interest saved relative to the baseline.
    """

    balance: float
    annual_interest_rate: float
    payment_approach: str
    outcome: PayoffOutcome
    monthly_payment: float
    schedule: tuple[AmortizationRow, ...]
    payoff_date: date | None
    minimum_payment: float
    minimum_payment_interest: float
    savings: float

    @property
    def pays_off(self) -> bool:
        return isinstance(self.outcome, PaidOff)

    @property
    def months_to_payoff(self) -> int | None:
        return self.outcome.months if isinstance(self.outcome, PaidOff) else None

    @property
    def total_interest(self) -> float | None:
        return self.outcome.total_interest if isinstance(self.outcome, PaidOff) else None

    @property
    def total_cost(self) -> float | None:
        if isinstance(self.outcome, PaidOff):
            return self.balance + self.outcome.total_interest
        return None

    def formatted(self) -> dict[str, Any]:
        months = self.months_to_payoff
        return {
            "monthsToPayoff": NEVER if months is None else months,
            "requiredMonthlyPayment": format_currency(self.monthly_payment),
            "totalInterest": _currency_or_infinite(self.total_interest),
            "totalCost": _currency_or_infinite(self.total_cost),
            "payoffDate": NEVER if self.payoff_date is None else _long_date(self.payoff_date),
            "savings": format_currency(self.savings),
            "projectedPayoff": [
                {
                    "month": row.month,
                    "balance": format_currency(row.balance),
                    "payment": format_currency(row.payment),
                    "interest": format_currency(row.interest),
                    "principal": format_currency(row.principal),
                }
                for row in self.schedule
            ],
        }


def _currency_or_infinite(value: float | None) -> str:
    return INFINITE if value is None else format_currency(value)


def _long_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def calculate_credit_card_payoff(
    form: CreditCardForm,
    reference_date: date,
) -> CreditCardResult:
    """Project a credit card payoff.

    Args:
        form: Credit card inputs.
        reference_date: Start of the payoff; the payoff date is counted from
            here.

    Returns:
        CreditCardResult.
    """
    balance = form.balance
    rate = periodic_rate(form.annual_interest_rate, 12)

    if form.payment_approach == "monthly-payment":
        payment = form.monthly_payment
        outcome, run = _fixed_payment(balance, rate, payment)
    else:
        payment, outcome, run = _fixed_timeline(
            balance, rate, form.payoff_months, form.payoff_timeline_unit
        )

    minimum_payment = max(balance * MINIMUM_PAYMENT_RATE, MINIMUM_PAYMENT_FLOOR)
    baseline = amortize(balance, rate, minimum_payment)
    savings = 0.0
    if baseline.total_interest > 0 and isinstance(outcome, PaidOff):
        savings = baseline.total_interest - outcome.total_interest

    payoff_date = None
    if isinstance(outcome, PaidOff):
        payoff_date = add_months(reference_date, outcome.months)

    opening = AmortizationRow(month=0, balance=balance, payment=0.0, interest=0.0, principal=0.0)
    result = CreditCardResult(
        balance=balance,
        annual_interest_rate=form.annual_interest_rate,
        payment_approach=form.payment_approach,
        outcome=outcome,
        monthly_payment=payment,
        schedule=(opening, *run.rows),
        payoff_date=payoff_date,
        minimum_payment=minimum_payment,
        minimum_payment_interest=baseline.total_interest,
        savings=savings,
    )
    logger.debug("credit card: %s payment=%.2f outcome=%s", form.payment_approach, payment, outcome)
    return result


_EMPTY_RUN = AmortizationRun(rows=(), months=0, total_interest=0.0, paid_off=True)


def _fixed_payment(
    balance: float, rate: float, payment: float
) -> tuple[PayoffOutcome, AmortizationRun]:
    if balance <= 0:
        return PaidOff(months=0, total_interest=0.0), _EMPTY_RUN
    if payment <= balance * rate:
        return NeverPaysOff(), _EMPTY_RUN
    run = amortize(balance, rate, payment)
    if not run.paid_off:
        logger.warning("credit card not paid off within %d months", MAX_PERIODS)
        return NeverPaysOff(), run
    return PaidOff(months=run.months, total_interest=run.total_interest), run


def _fixed_timeline(
    balance: float, rate: float, duration: float, unit: str
) -> tuple[float, PayoffOutcome, AmortizationRun]:
    target = Timeline.from_duration(duration, unit).n_steps
    if target <= 0 or balance <= 0:
        return 0.0, PaidOff(months=0, total_interest=0.0), _EMPTY_RUN
    if rate > 0:
        payment = amortized_payment(balance, rate, target)
    else:
        payment = balance / target
    run = amortize(balance, rate, payment, max_months=target)
    return payment, PaidOff(months=target, total_interest=run.total_interest), run

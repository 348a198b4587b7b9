"""Savings goal and growth engines.

All three calculators step a balance forward with
``balance = balance * (1 + periodic_rate) + periodic_contribution`` and
report a projection series:

* save a million: goal over an age window, monthly steps, yearly snapshots
  labelled by age.
* save for goal: goal with an optional timeline, monthly steps, yearly
  checkpoints. Without a timeline the engine searches for the month the goal
  is reached.
* savings growth: fixed number of years at a chosen compounding frequency,
  yearly snapshots.

Contributions are entered per weekly/biweekly/monthly/quarterly/yearly period
and normalized to a monthly equivalent first.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from moneycalc.config.schema import SaveForGoalForm, SaveMillionForm, SavingsGrowthForm
from moneycalc.core.amortization import MAX_PERIODS, required_contribution
from moneycalc.core.frequency import (
    COMPOUNDING_PERIODS_PER_YEAR,
    monthly_equivalent,
    periodic_rate,
)
from moneycalc.core.timeline import Timeline
from moneycalc.io.formatting import format_currency, format_fixed, safe_ratio

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProjectionPoint:
    """Balance snapshot closing one reporting period.

    Attributes:
        period: Reporting label (age, month index or year, by calculator).
        balance: Balance at the end of the period.
        contribution: Contributions made during the period.
        interest: Interest earned during the period.
        total_contributed: Contributions made since the start.
    """

    period: float
    balance: float
    contribution: float
    interest: float
    total_contributed: float


@dataclass(frozen=True)
class Projection:
    """Outcome of :func:`project`."""

    steps: int
    final_balance: float
    total_contributed: float
    interest_earned: float
    points: tuple[ProjectionPoint, ...]
    goal_step: int | None = None


def project(
    start: float,
    rate: float,
    contribution: float,
    n_steps: int,
    steps_per_report: int,
    *,
    goal: float | None = None,
    stop_at_goal: bool = False,
    label: Callable[[int], float] | None = None,
) -> Projection:
    """Step a balance forward and snapshot it every ``steps_per_report`` steps.

    Args:
        start: Opening balance.
        rate: Interest rate per step.
        contribution: Contribution added at the end of each step.
        n_steps: Number of steps to run.
        steps_per_report: Steps per snapshot; a final partial snapshot closes
            the run when ``n_steps`` is not a multiple.
        goal: Optional target; the first step whose balance reaches it is
            recorded as ``goal_step``.
        stop_at_goal: Stop as soon as the goal is reached.
        label: ``label(step)`` gives the snapshot's period label; defaults to
            the step index.

    Returns:
        Projection.
    """
    if label is None:
        label = float
    balance = start
    total_contributed = 0.0
    total_interest = 0.0
    period_contribution = 0.0
    period_interest = 0.0
    points: list[ProjectionPoint] = []
    goal_step = 0 if goal is not None and balance >= goal else None

    step = 0
    while step < n_steps and not (stop_at_goal and goal_step is not None):
        step += 1
        opening = balance
        balance = opening * (1 + rate) + contribution
        interest = balance - opening - contribution
        period_contribution += contribution
        period_interest += interest
        total_contributed += contribution
        total_interest += interest
        if goal_step is None and goal is not None and balance >= goal:
            goal_step = step
        closes_run = step == n_steps or (stop_at_goal and goal_step is not None)
        if step % steps_per_report == 0 or closes_run:
            points.append(
                ProjectionPoint(
                    period=label(step),
                    balance=balance,
                    contribution=period_contribution,
                    interest=period_interest,
                    total_contributed=total_contributed,
                )
            )
            period_contribution = 0.0
            period_interest = 0.0

    return Projection(
        steps=step,
        final_balance=balance,
        total_contributed=total_contributed,
        interest_earned=total_interest,
        points=tuple(points),
        goal_step=goal_step,
    )


def _format_points(points: tuple[ProjectionPoint, ...], key: str) -> list[dict[str, Any]]:
    return [
        {
            key: _label(point.period),
            "balance": format_currency(point.balance),
            "contribution": format_currency(point.contribution),
            "interest": format_currency(point.interest),
            "totalContributed": format_currency(point.total_contributed),
        }
        for point in points
    ]


def _label(value: float) -> float | int:
    return int(value) if float(value).is_integer() else round(value, 2)


# --- Save a million -------------------------------------------------------


@dataclass(frozen=True)
class SaveMillionResult:
    """Projection of a savings goal over an age window."""

    savings_goal: float
    years_to_goal: float
    months_to_goal: int
    monthly_contribution: float
    total_contributed: float
    interest_earned: float
    final_balance: float
    monthly_contribution_needed: float
    achievable: bool
    goal_reached_age: float | None
    projected_growth: tuple[ProjectionPoint, ...]

    def formatted(self) -> dict[str, Any]:
        return {
            "yearsToGoal": _label(self.years_to_goal),
            "monthsToGoal": self.months_to_goal,
            "totalContributed": format_currency(self.total_contributed),
            "interestEarned": format_currency(self.interest_earned),
            "finalBalance": format_currency(self.final_balance),
            "monthlyContributionNeeded": format_currency(self.monthly_contribution_needed),
            "achievable": self.achievable,
            "goalReachedAge": None if self.goal_reached_age is None else _label(
                self.goal_reached_age
            ),
            "projectedGrowth": _format_points(self.projected_growth, "year"),
        }


def calculate_save_million(form: SaveMillionForm) -> SaveMillionResult:
    """Project savings from the current age to the target age.

    The window is simulated month by month with monthly compounding and one
    snapshot per year of age. ``monthly_contribution_needed`` is the monthly
    deposit that lands exactly on the goal at the target age.
    ``goal_reached_age`` is the first age at which the actual contribution
    reaches the goal, searched over at most 600 months.
    """
    timeline = Timeline.from_ages(form.current_age, form.target_age)
    rate = periodic_rate(form.annual_interest_rate, 12)
    monthly = monthly_equivalent(form.contribution_amount, form.contribution_frequency)

    run = project(
        form.current_savings,
        rate,
        monthly,
        timeline.n_steps,
        12,
        goal=form.savings_goal,
        label=timeline.age_at,
    )
    needed = required_contribution(form.savings_goal, form.current_savings, rate, timeline.n_steps)

    search = project(
        form.current_savings,
        rate,
        monthly,
        MAX_PERIODS,
        12,
        goal=form.savings_goal,
        stop_at_goal=True,
    )
    reached_age = None
    if search.goal_step is not None:
        reached_age = timeline.age_at(search.goal_step)

    result = SaveMillionResult(
        savings_goal=form.savings_goal,
        years_to_goal=timeline.years,
        months_to_goal=timeline.n_steps,
        monthly_contribution=monthly,
        total_contributed=run.total_contributed,
        interest_earned=run.interest_earned,
        final_balance=run.final_balance,
        monthly_contribution_needed=needed,
        achievable=run.final_balance >= form.savings_goal,
        goal_reached_age=reached_age,
        projected_growth=run.points,
    )
    logger.debug(
        "save million: %d months final=%.2f needed=%.2f",
        timeline.n_steps,
        run.final_balance,
        needed,
    )
    return result


# --- Save for a goal ------------------------------------------------------


@dataclass(frozen=True)
class SaveForGoalResult:
    """Projection toward a savings goal."""

    goal_amount: float
    starting_balance: float
    months_to_goal: int
    projected_balance: float
    shortfall: float
    required_monthly: float
    monthly_contribution: float
    total_contributed: float
    interest_earned: float
    achievable: bool
    has_target_timeline: bool
    projected_growth: tuple[ProjectionPoint, ...]

    @property
    def years_to_goal(self) -> float:
        """Years to goal, rounded up to one decimal."""
        return math.ceil(self.months_to_goal / 12 * 10) / 10

    def formatted(self) -> dict[str, Any]:
        return {
            "monthsToGoal": self.months_to_goal,
            "yearsToGoal": self.years_to_goal,
            "projectedBalance": format_currency(self.projected_balance),
            "shortfall": format_currency(self.shortfall),
            "requiredMonthly": format_currency(self.required_monthly),
            "totalContributed": format_currency(self.total_contributed),
            "interestEarned": format_currency(self.interest_earned),
            "achievable": self.achievable,
            "projectedGrowth": _format_points(self.projected_growth, "month"),
        }


def calculate_save_for_goal(form: SaveForGoalForm) -> SaveForGoalResult:
    """Project savings toward a goal.

    With a target timeline the balance is simulated for exactly that many
    months and the required monthly deposit is solved. Without one the engine
    simulates until the goal is met, giving up after 600 months.
    """
    starting = form.current_savings + form.other_income
    rate = periodic_rate(form.annual_interest_rate, 12)
    monthly = monthly_equivalent(form.contribution_amount, form.contribution_frequency)
    has_timeline = form.target_timeline > 0

    if has_timeline:
        n_steps = Timeline.from_duration(form.target_timeline, form.timeline_unit).n_steps
        run = project(starting, rate, monthly, n_steps, 12, goal=form.goal_amount)
        required = required_contribution(form.goal_amount, starting, rate, n_steps)
    else:
        run = project(
            starting, rate, monthly, MAX_PERIODS, 12, goal=form.goal_amount, stop_at_goal=True
        )
        if run.goal_step is None:
            logger.warning(
                "goal of %.2f not reached within %d months", form.goal_amount, MAX_PERIODS
            )
        required = 0.0

    result = SaveForGoalResult(
        goal_amount=form.goal_amount,
        starting_balance=starting,
        months_to_goal=run.steps,
        projected_balance=run.final_balance,
        shortfall=form.goal_amount - starting,
        required_monthly=required,
        monthly_contribution=monthly,
        total_contributed=run.total_contributed,
        interest_earned=run.interest_earned,
        achievable=run.final_balance >= form.goal_amount,
        has_target_timeline=has_timeline,
        projected_growth=run.points,
    )
    logger.debug("save for goal: %d months balance=%.2f", run.steps, run.final_balance)
    return result


# --- Savings growth -------------------------------------------------------


@dataclass(frozen=True)
class SavingsGrowthResult:
    """Compound growth over a fixed number of years."""

    initial_balance: float
    periods_per_year: int
    periodic_contribution: float
    final_balance: float
    total_contributed: float
    interest_earned: float
    growth_percentage: float | None
    target_amount: float | None
    required_monthly_contribution: float | None
    achievable: bool | None
    growth_chart: tuple[ProjectionPoint, ...]

    def formatted(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "finalBalance": format_currency(self.final_balance),
            "totalContributed": format_currency(self.total_contributed),
            "interestEarned": format_currency(self.interest_earned),
            "growthChart": _format_points(self.growth_chart, "year"),
            "breakdown": {
                "initialAmount": format_currency(self.initial_balance),
                "contributionsTotal": format_currency(self.total_contributed),
                "interestTotal": format_currency(self.interest_earned),
                "growthPercentage": format_fixed(self.growth_percentage, 2),
            },
        }
        if self.target_amount is not None:
            data["requiredMonthlyContribution"] = format_currency(
                self.required_monthly_contribution
            )
            data["achievable"] = self.achievable
        return data


def calculate_savings_growth(form: SavingsGrowthForm) -> SavingsGrowthResult:
    """Grow a balance for ``form.years`` at the chosen compounding frequency.

    The monthly-equivalent contribution is spread evenly over the compounding
    periods of a year (``monthly * 12 / periods_per_year`` per period). When a
    target amount is given, the monthly deposit that reaches it is solved too.
    """
    periods_per_year = COMPOUNDING_PERIODS_PER_YEAR[form.compounding_frequency]
    rate = periodic_rate(form.annual_interest_rate, periods_per_year)
    monthly = monthly_equivalent(form.contribution_amount, form.contribution_frequency)
    contribution = monthly * 12 / periods_per_year
    n_steps = max(0, round(form.years * periods_per_year))

    run = project(
        form.initial_balance,
        rate,
        contribution,
        n_steps,
        periods_per_year,
        label=lambda step: step / periods_per_year,
    )

    target = form.target_amount if form.target_amount > 0 else None
    required_monthly = None
    achievable = None
    if target is not None:
        per_period = required_contribution(target, form.initial_balance, rate, n_steps)
        required_monthly = per_period * periods_per_year / 12
        achievable = run.final_balance >= target

    result = SavingsGrowthResult(
        initial_balance=form.initial_balance,
        periods_per_year=periods_per_year,
        periodic_contribution=contribution,
        final_balance=run.final_balance,
        total_contributed=run.total_contributed,
        interest_earned=run.interest_earned,
        growth_percentage=safe_ratio(
            run.final_balance - form.initial_balance, form.initial_balance
        ),
        target_amount=target,
        required_monthly_contribution=required_monthly,
        achievable=achievable,
        growth_chart=run.points,
    )
    logger.debug("savings growth: %d periods final=%.2f", n_steps, run.final_balance)
    return result

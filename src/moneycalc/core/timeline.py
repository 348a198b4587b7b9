"""Monthly timeline for savings projections and payoff dates."""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class Timeline:
    """Monthly time grid for a projection.

    Attributes:
        start_age: Age at step 0 (0 when the projection is not age based).
        n_steps: Total number of monthly steps.
    """

    start_age: float
    n_steps: int

    @classmethod
    def from_ages(cls, current_age: float, target_age: float) -> Timeline:
        """Create a Timeline spanning an age window; empty if the window is not positive."""
        n_steps = max(0, round((target_age - current_age) * 12))
        return cls(start_age=current_age, n_steps=n_steps)

    @classmethod
    def from_duration(cls, amount: float, unit: str = "months") -> Timeline:
        """Create a Timeline from a duration in ``months`` or ``years``.

        A partial month counts as a full step.
        """
        months = amount * 12 if unit == "years" else amount
        return cls(start_age=0.0, n_steps=max(0, math.ceil(months)))

    @property
    def years(self) -> float:
        return self.n_steps / 12

    def age_at(self, step: int) -> float:
        """Return the age (as a float) at a given step."""
        return self.start_age + step / 12.0


def add_months(start: date, months: int) -> date:
    """Calendar date ``months`` after ``start``.

    The day of month is clamped to the length of the target month, so
    January 31 plus one month is the last day of February.
    """
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)

"""Pydantic v2 input forms, one per calculator.

Numeric fields accept numbers or the raw strings typed into a form. A string
is read the way a browser's ``parseFloat`` reads it: the longest leading
decimal literal wins (``"12abc"`` is 12, ``"1,500"`` is 1) and anything
unparseable, empty or non-finite becomes 0. Numeric input never raises.
"""

from __future__ import annotations

import math
import re
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from moneycalc.core.frequency import CompoundingFrequency, ContributionFrequency, PayFrequency
from moneycalc.taxes.year_config import FilingStatus

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> float:
    """Lenient numeric parse; unparseable input is 0."""
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value).lstrip())
        if match is None:
            return 0.0
        number = float(match.group())
    return number if math.isfinite(number) else 0.0


def parse_year(value: Any) -> int:
    """Tax year field; unparseable input is 0, which falls back to the latest table."""
    return int(parse_number(value))


Number = Annotated[float, BeforeValidator(parse_number)]
Year = Annotated[int, BeforeValidator(parse_year)]


class _Form(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class PaycheckForm(_Form):
    """Paycheck / take-home pay inputs. Tax rates are percentages."""

    annual_salary: Number = 0.0
    pay_frequency: PayFrequency = "bi-weekly"
    filing_status: FilingStatus = "single"
    tax_year: Year = 2024
    state_tax_rate: Number = Field(default=0.0, description="State income tax rate in percent")
    city_tax_rate: Number = Field(default=0.0, description="City income tax rate in percent")
    is_self_employed: bool = False

    other_earned_income: Number = 0.0
    unearned_income: Number = 0.0
    children_under_17: Number = 0.0
    other_dependents: Number = 0.0

    # Pre-tax deductions
    retirement_401k: Number = 0.0
    health_insurance: Number = 0.0
    hsa_fsa: Number = 0.0
    other_pre_tax: Number = 0.0

    # Adjustments
    ira_contributions: Number = 0.0
    student_loan_interest: Number = 0.0
    other_adjustments: Number = 0.0

    # Itemized deductions
    mortgage_interest: Number = 0.0
    charitable_donations: Number = 0.0
    state_local_taxes: Number = 0.0
    property_taxes: Number = 0.0
    sales_taxes: Number = 0.0
    medical_expenses: Number = 0.0

    corrected_brackets: bool = Field(
        default=False,
        description="Use true progressive bracket math instead of the reference formula",
    )


class CarLoanForm(_Form):
    """Car purchase and loan inputs. Rates are percentages, terms are years."""

    car_price: Number = 0.0
    down_payment: Number = 0.0
    trade_in_value: Number = 0.0
    outstanding_loan_balance: Number = 0.0
    loan_term: Number = Field(default=0.0, description="Loan term in years")
    interest_rate: Number = Field(default=0.0, description="Nominal annual rate in percent")
    sales_tax_rate: Number = 0.0
    monthly_payment_budget: Number = 0.0

    dealer_rebates: Number = 0.0
    additional_fees: Number = 0.0
    desired_payoff_horizon: Number = Field(
        default=0.0, description="Alternate payoff horizon in years (0 = loan term)"
    )
    income_guideline_percentage: Number = Field(
        default=0.0, description="Share of monthly income for car payments (0 = 15%)"
    )
    monthly_income: Number = 0.0


class CreditCardForm(_Form):
    """Credit card payoff inputs."""

    balance: Number = 0.0
    annual_interest_rate: Number = Field(default=0.0, description="APR in percent")
    payment_approach: Literal["monthly-payment", "payoff-timeline"] = "monthly-payment"
    monthly_payment: Number = 0.0
    payoff_months: Number = Field(default=0.0, description="Target payoff timeline")
    payoff_timeline_unit: Literal["months", "years"] = "months"


class SaveMillionForm(_Form):
    """Savings goal over an age window."""

    savings_goal: Number = 1_000_000.0
    current_age: Number = 0.0
    target_age: Number = 0.0
    current_savings: Number = 0.0
    contribution_amount: Number = 0.0
    contribution_frequency: ContributionFrequency = "monthly"
    annual_interest_rate: Number = 0.0


class SaveForGoalForm(_Form):
    """Savings goal with an optional target timeline."""

    goal_amount: Number = 0.0
    current_savings: Number = 0.0
    other_income: Number = Field(default=0.0, description="Other funds available today")
    contribution_amount: Number = 0.0
    contribution_frequency: ContributionFrequency = "monthly"
    annual_interest_rate: Number = 0.0
    target_timeline: Number = Field(default=0.0, description="0 = solve for the timeline")
    timeline_unit: Literal["months", "years"] = "months"


class SavingsGrowthForm(_Form):
    """Compound growth over a fixed number of years."""

    initial_balance: Number = 0.0
    annual_interest_rate: Number = 0.0
    contribution_amount: Number = 0.0
    contribution_frequency: ContributionFrequency = "yearly"
    years: Number = 0.0
    compounding_frequency: CompoundingFrequency = "monthly"
    target_amount: Number = Field(default=0.0, description="Optional goal (0 = none)")

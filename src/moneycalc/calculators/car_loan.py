"""Car loan engine: amortized payment, affordability and cost rollups."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from moneycalc.config.schema import CarLoanForm
from moneycalc.core.amortization import amortized_payment, principal_for_payment
from moneycalc.core.frequency import periodic_rate
from moneycalc.io.formatting import format_currency, format_percent, safe_ratio

logger = logging.getLogger(__name__)

DEFAULT_INCOME_GUIDELINE_PCT = 15.0
RECOMMENDED_BUDGET_SHARE = 0.8


@dataclass(frozen=True)
class CostShare:
    """Share of total cost (percent) by component; ``None`` if total cost is 0."""

    loan: float | None
    down_payment: float | None
    other_costs: float | None


@dataclass(frozen=True)
class CarLoanResult:
    """Car loan figures. Ratios are percentages and ``None`` when undefined."""

    car_price: float
    sales_tax: float
    loan_amount: float
    down_payment_amount: float
    trade_in_net_value: float
    total_cost: float
    monthly_payment: float
    monthly_payment_for_desired_horizon: float
    total_payment: float
    total_interest: float
    is_affordable: bool
    max_affordable_loan_amount: float
    max_affordable_car_price: float
    budget_utilization: float | None
    recommended_budget: float
    income_guideline_status: str
    income_utilization: float | None
    cost_breakdown: CostShare

    @property
    def affordability_check(self) -> str:
        return "Affordable" if self.is_affordable else "Over Budget"

    def formatted(self) -> dict[str, Any]:
        return {
            "carPrice": format_currency(self.car_price),
            "salesTax": format_currency(self.sales_tax),
            "monthlyPayment": format_currency(self.monthly_payment),
            "monthlyPaymentForDesiredHorizon": format_currency(
                self.monthly_payment_for_desired_horizon
            ),
            "totalPayment": format_currency(self.total_payment),
            "totalInterest": format_currency(self.total_interest),
            "loanAmount": format_currency(self.loan_amount),
            "downPaymentAmount": format_currency(self.down_payment_amount),
            "tradeInNetValue": format_currency(self.trade_in_net_value),
            "totalCost": format_currency(self.total_cost),
            "affordabilityCheck": self.affordability_check,
            "maxAffordableCarPrice": format_currency(self.max_affordable_car_price),
            "maxAffordableLoanAmount": format_currency(self.max_affordable_loan_amount),
            "budgetUtilization": format_percent(self.budget_utilization),
            "recommendedBudget": format_currency(self.recommended_budget),
            "incomeGuidelineCheck": self.income_guideline_status,
            "incomeUtilization": format_percent(self.income_utilization),
            "costBreakdown": {
                "loan": format_percent(self.cost_breakdown.loan),
                "downPayment": format_percent(self.cost_breakdown.down_payment),
                "otherCosts": format_percent(self.cost_breakdown.other_costs),
            },
        }


def calculate_car_loan(form: CarLoanForm) -> CarLoanResult:
    """Compute the payment, cost and affordability of a car loan.

    Negative loan amounts (down payment above price) and negative sales tax
    (trade-in above price) are passed through unclamped.

    Args:
        form: Car loan inputs.

    Returns:
        CarLoanResult.
    """
    trade_in_net = form.trade_in_value - form.outstanding_loan_balance
    effective_down = form.down_payment + trade_in_net
    loan_amount = form.car_price - effective_down

    sales_tax = (form.car_price - form.trade_in_value) * (form.sales_tax_rate / 100)
    total_cost = form.car_price + sales_tax + form.additional_fees - form.dealer_rebates

    rate = periodic_rate(form.interest_rate, 12)
    n_payments = form.loan_term * 12
    monthly_payment = amortized_payment(loan_amount, rate, n_payments)

    horizon_years = form.desired_payoff_horizon or form.loan_term
    horizon_payment = amortized_payment(loan_amount, rate, horizon_years * 12)

    total_payment = monthly_payment * n_payments
    total_interest = total_payment - loan_amount

    budget = form.monthly_payment_budget
    max_loan = principal_for_payment(budget, rate, n_payments)

    guideline_pct = form.income_guideline_percentage or DEFAULT_INCOME_GUIDELINE_PCT
    if form.monthly_income > 0:
        guideline_limit = form.monthly_income * guideline_pct / 100
        guideline_status = (
            "Within Guideline" if monthly_payment <= guideline_limit else "Exceeds Guideline"
        )
        income_utilization = safe_ratio(monthly_payment, form.monthly_income)
    else:
        guideline_status = "Not Provided"
        income_utilization = None

    other_costs = total_cost - loan_amount - effective_down
    result = CarLoanResult(
        car_price=form.car_price,
        sales_tax=sales_tax,
        loan_amount=loan_amount,
        down_payment_amount=effective_down,
        trade_in_net_value=trade_in_net,
        total_cost=total_cost,
        monthly_payment=monthly_payment,
        monthly_payment_for_desired_horizon=horizon_payment,
        total_payment=total_payment,
        total_interest=total_interest,
        is_affordable=monthly_payment <= budget,
        max_affordable_loan_amount=max_loan,
        max_affordable_car_price=max_loan + effective_down,
        budget_utilization=safe_ratio(monthly_payment, budget),
        recommended_budget=budget * RECOMMENDED_BUDGET_SHARE,
        income_guideline_status=guideline_status,
        income_utilization=income_utilization,
        cost_breakdown=CostShare(
            loan=safe_ratio(loan_amount, total_cost),
            down_payment=safe_ratio(effective_down, total_cost),
            other_costs=safe_ratio(other_costs, total_cost),
        ),
    )
    logger.debug(
        "car loan: amount=%.2f payment=%.2f over %s payments",
        loan_amount,
        monthly_payment,
        n_payments,
    )
    return result

"""Example calculator inputs, used by the CLI when no input file is given."""

from __future__ import annotations

from moneycalc.config.schema import (
    CarLoanForm,
    CreditCardForm,
    PaycheckForm,
    SaveForGoalForm,
    SaveMillionForm,
    SavingsGrowthForm,
)


def default_paycheck() -> PaycheckForm:
    """Single filer, $75k salary, paid bi-weekly, 5% state tax."""
    return PaycheckForm(
        annual_salary=75_000,
        pay_frequency="bi-weekly",
        filing_status="single",
        tax_year=2024,
        state_tax_rate=5,
        retirement_401k=5_000,
        health_insurance=2_400,
    )


def default_car_loan() -> CarLoanForm:
    """$30k car, $5k down, 5 years at 6%."""
    return CarLoanForm(
        car_price=30_000,
        down_payment=5_000,
        loan_term=5,
        interest_rate=6,
        sales_tax_rate=7,
        monthly_payment_budget=500,
        monthly_income=6_000,
    )


def default_credit_card() -> CreditCardForm:
    """$5k balance at 20% APR, paying $150 a month."""
    return CreditCardForm(
        balance=5_000,
        annual_interest_rate=20,
        payment_approach="monthly-payment",
        monthly_payment=150,
    )


def default_save_million() -> SaveMillionForm:
    """$1M by 65 from age 30 with $10k saved and $800 a month at 7%."""
    return SaveMillionForm(
        savings_goal=1_000_000,
        current_age=30,
        target_age=65,
        current_savings=10_000,
        contribution_amount=800,
        contribution_frequency="monthly",
        annual_interest_rate=7,
    )


def default_save_for_goal() -> SaveForGoalForm:
    """$20k goal in 3 years from $2k saved and $400 a month at 4%."""
    return SaveForGoalForm(
        goal_amount=20_000,
        current_savings=2_000,
        contribution_amount=400,
        contribution_frequency="monthly",
        annual_interest_rate=4,
        target_timeline=3,
        timeline_unit="years",
    )


def default_savings_growth() -> SavingsGrowthForm:
    """$10k growing 20 years at 6% with $6k a year, compounded monthly."""
    return SavingsGrowthForm(
        initial_balance=10_000,
        annual_interest_rate=6,
        contribution_amount=6_000,
        contribution_frequency="yearly",
        years=20,
        compounding_frequency="monthly",
    )

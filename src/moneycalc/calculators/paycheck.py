"""Paycheck engine: gross-to-net pay with federal, state, city and FICA taxes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from moneycalc.config.schema import PaycheckForm
from moneycalc.core.frequency import PAY_PERIODS_PER_YEAR
from moneycalc.io.formatting import format_currency, format_percent, safe_ratio
from moneycalc.taxes.us_federal import USFederalTaxModel

logger = logging.getLogger(__name__)

CHILD_TAX_CREDIT = 2000.0
OTHER_DEPENDENT_CREDIT = 500.0


@dataclass(frozen=True)
class PaycheckResult:
    """Annual figures plus the pay-period count used to split them.

    Percentages are ``None`` when gross income is zero.
    """

    pay_periods: int
    tax_year: int
    gross_annual: float
    pre_tax_deductions: float
    post_tax_adjustments: float
    standard_deduction: float
    itemized_deductions: float
    deductions_used: float
    deduction_type: str
    adjusted_gross_income: float
    taxable_income: float
    tax_credits: float
    federal_tax: float
    state_tax: float
    city_tax: float
    social_security_tax: float
    medicare_tax: float
    net_annual: float
    take_home_percentage: float | None
    effective_tax_rate: float | None

    @property
    def total_taxes(self) -> float:
        return (
            self.federal_tax
            + self.state_tax
            + self.city_tax
            + self.social_security_tax
            + self.medicare_tax
        )

    def per_period(self, amount: float) -> float:
        return amount / self.pay_periods

    def formatted(self) -> dict[str, Any]:
        """Per-period and annual figures as display strings."""
        period = self.per_period
        return {
            "grossPay": format_currency(period(self.gross_annual)),
            "federalTax": format_currency(period(self.federal_tax)),
            "stateTax": format_currency(period(self.state_tax)),
            "cityTax": format_currency(period(self.city_tax)),
            "socialSecurityTax": format_currency(period(self.social_security_tax)),
            "medicareTax": format_currency(period(self.medicare_tax)),
            "preTaxDeductions": format_currency(period(self.pre_tax_deductions)),
            "postTaxAdjustments": format_currency(period(self.post_tax_adjustments)),
            "itemizedDeductions": format_currency(period(self.deductions_used)),
            "netPay": format_currency(period(self.net_annual)),
            "takeHomePercentage": format_percent(self.take_home_percentage),
            "effectiveTaxRate": format_percent(self.effective_tax_rate),
            "grossAnnual": format_currency(self.gross_annual),
            "totalDeductions": format_currency(self.pre_tax_deductions),
            "netAnnual": format_currency(self.net_annual),
            "taxCredits": format_currency(self.tax_credits),
            "deductionType": self.deduction_type,
            "breakdown": {
                "grossAnnual": format_currency(self.gross_annual),
                "totalDeductions": format_currency(self.pre_tax_deductions),
                "totalTaxes": format_currency(self.total_taxes),
                "netAnnual": format_currency(self.net_annual),
            },
        }


def calculate_paycheck(form: PaycheckForm) -> PaycheckResult:
    """Compute take-home pay for one filer.

    The engine always takes the larger of the standard and itemized
    deductions. State and city taxes apply to AGI less pre-tax deductions.
    FICA is doubled for the self-employed (employer and employee share); the
    additional Medicare surtax is not modeled.

    Args:
        form: Paycheck inputs.

    Returns:
        PaycheckResult with annual amounts; use ``per_period`` or
        ``formatted`` for per-paycheck figures.
    """
    tax_model = USFederalTaxModel(form.tax_year, corrected=form.corrected_brackets)
    fica = tax_model.fica

    gross = form.annual_salary + form.other_earned_income + form.unearned_income
    total_pre_tax = (
        form.retirement_401k + form.health_insurance + form.hsa_fsa + form.other_pre_tax
    )
    agi = gross - total_pre_tax

    standard = tax_model.standard_deduction(form.filing_status)
    itemized = (
        form.mortgage_interest
        + form.charitable_donations
        + form.state_local_taxes
        + form.property_taxes
        + form.sales_taxes
        + form.medical_expenses
    )
    deductions_used = max(standard, itemized)
    adjustments = form.ira_contributions + form.student_loan_interest + form.other_adjustments
    taxable = agi - deductions_used - adjustments

    credits = (
        form.children_under_17 * CHILD_TAX_CREDIT + form.other_dependents * OTHER_DEPENDENT_CREDIT
    )
    federal = max(0.0, tax_model.tax(taxable, form.filing_status) - credits)

    local_base = agi - total_pre_tax
    state = local_base * (form.state_tax_rate / 100)
    city = local_base * (form.city_tax_rate / 100)

    social_security = min(agi, fica.social_security_limit) * fica.social_security_rate
    medicare = agi * fica.medicare_rate
    if form.is_self_employed:
        social_security *= 2
        medicare *= 2

    total_taxes = federal + state + city + social_security + medicare
    net = agi - total_taxes

    result = PaycheckResult(
        pay_periods=PAY_PERIODS_PER_YEAR[form.pay_frequency],
        tax_year=tax_model.tax_year,
        gross_annual=gross,
        pre_tax_deductions=total_pre_tax,
        post_tax_adjustments=adjustments,
        standard_deduction=standard,
        itemized_deductions=itemized,
        deductions_used=deductions_used,
        deduction_type="itemized" if itemized > standard else "standard",
        adjusted_gross_income=agi,
        taxable_income=taxable,
        tax_credits=credits,
        federal_tax=federal,
        state_tax=state,
        city_tax=city,
        social_security_tax=social_security,
        medicare_tax=medicare,
        net_annual=net,
        take_home_percentage=safe_ratio(net, gross),
        effective_tax_rate=safe_ratio(total_taxes, gross),
    )
    logger.debug(
        "paycheck: gross=%.2f taxable=%.2f federal=%.2f net=%.2f",
        gross,
        taxable,
        federal,
        net,
    )
    return result

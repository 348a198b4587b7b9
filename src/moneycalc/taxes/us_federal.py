"""US Federal bracket-based income tax calculator."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from moneycalc.taxes.year_config import FICARates, TaxBracket, get_tax_config


class USFederalTaxModel:
    """US Federal income tax on taxable income for one tax year.

    Two bracket formulas are available and never mixed:

    * reference (default): the first bracket whose upper bound covers the
      income gives ``base + (income - upper_bound) * rate``; the unbounded top
      bracket gives ``base + income * rate``. This reproduces the published
      calculator outputs, including its top-bracket behaviour.
    * corrected: true progressive tax, each slice of income between bracket
      bounds taxed at that bracket's rate. The ``base`` column is ignored.
    """

    def __init__(self, tax_year: int = 2024, corrected: bool = False) -> None:
        self._config = get_tax_config(tax_year)
        self.corrected = corrected

    @property
    def tax_year(self) -> int:
        """Year of the table actually in use (after any fallback)."""
        return self._config.year

    @property
    def fica(self) -> FICARates:
        return self._config.fica

    def standard_deduction(self, filing_status: str) -> float:
        """Return standard deduction for filing status."""
        return self._config.standard_deduction(filing_status)

    def tax(self, taxable_income: float, filing_status: str) -> float:
        """Federal income tax owed on ``taxable_income``."""
        brackets = self._config.brackets(filing_status)
        if self.corrected:
            return _apply_brackets(taxable_income, brackets)
        return _reference_tax(taxable_income, brackets)

    def tax_vectorized(
        self,
        taxable_income: ArrayLike,
        filing_status: str,
    ) -> NDArray[np.floating[Any]]:
        """Vectorized :meth:`tax` over an array of incomes.

        Args:
            taxable_income: Incomes of any shape.
            filing_status: Filing status key.

        Returns:
            Tax owed, same shape as ``taxable_income``.
        """
        income = np.asarray(taxable_income, dtype=float)
        brackets = self._config.brackets(filing_status)
        if self.corrected:
            return _apply_brackets_vectorized(income, brackets)
        return _reference_tax_vectorized(income, brackets)

    def marginal_rate(self, taxable_income: float, filing_status: str) -> float:
        """Return the marginal rate of the bracket covering ``taxable_income``."""
        brackets = self._config.brackets(filing_status)
        for bracket in brackets:
            if taxable_income <= bracket.max:
                return bracket.rate
        # Should not reach here; return top rate
        return brackets[-1].rate


def _reference_tax(taxable_income: float, brackets: tuple[TaxBracket, ...]) -> float:
    if taxable_income <= 0:
        return 0.0
    for bracket in brackets:
        if taxable_income <= bracket.max:
            offset = 0.0 if bracket.unbounded else bracket.max
            return bracket.base + (taxable_income - offset) * bracket.rate
    return 0.0


def _reference_tax_vectorized(
    taxable_income: NDArray[np.floating[Any]],
    brackets: tuple[TaxBracket, ...],
) -> NDArray[np.floating[Any]]:
    tax: NDArray[np.floating[Any]] = np.zeros_like(taxable_income)
    assigned = taxable_income <= 0
    for bracket in brackets:
        in_bracket = ~assigned & (taxable_income <= bracket.max)
        offset = 0.0 if bracket.unbounded else bracket.max
        tax[in_bracket] = bracket.base + (taxable_income[in_bracket] - offset) * bracket.rate
        assigned |= in_bracket
    return tax


def _apply_brackets(taxable_income: float, brackets: tuple[TaxBracket, ...]) -> float:
    """Compute tax using progressive brackets."""
    if taxable_income <= 0:
        return 0.0
    tax = 0.0
    prev_bound = 0.0
    for bracket in brackets:
        taxable_in_bracket = min(taxable_income, bracket.max) - prev_bound
        if taxable_in_bracket <= 0:
            break
        tax += taxable_in_bracket * bracket.rate
        prev_bound = bracket.max
    return tax


def _apply_brackets_vectorized(
    taxable_income: NDArray[np.floating[Any]],
    brackets: tuple[TaxBracket, ...],
) -> NDArray[np.floating[Any]]:
    """Vectorized progressive bracket computation."""
    tax: NDArray[np.floating[Any]] = np.zeros_like(taxable_income)
    prev_bound = 0.0
    for bracket in brackets:
        taxable_in_bracket = np.minimum(taxable_income, bracket.max) - prev_bound
        tax += np.maximum(taxable_in_bracket, 0.0) * bracket.rate
        prev_bound = bracket.max
    return tax


def calculate_federal_tax(
    taxable_income: float,
    filing_status: str,
    year: int,
    *,
    corrected: bool = False,
) -> float:
    """Federal income tax for one filer.

    Args:
        taxable_income: Income after deductions and adjustments.
        filing_status: One of ``single``, ``married-jointly``,
            ``married-separately`` or ``head-of-household``.
        year: Tax year; unknown years use the most recent table.
        corrected: Use true progressive math instead of the reference formula.

    Returns:
        Tax owed; 0 for non-positive taxable income.
    """
    return USFederalTaxModel(year, corrected=corrected).tax(taxable_income, filing_status)


def calculate_federal_tax_vectorized(
    taxable_income: ArrayLike,
    filing_status: str,
    year: int,
    *,
    corrected: bool = False,
) -> NDArray[np.floating[Any]]:
    """Array version of :func:`calculate_federal_tax`, e.g. for tax curves."""
    model = USFederalTaxModel(year, corrected=corrected)
    return model.tax_vectorized(taxable_income, filing_status)


def marginal_rate(taxable_income: float, filing_status: str, year: int) -> float:
    """Marginal rate at ``taxable_income`` for a filing status and year."""
    return USFederalTaxModel(year).marginal_rate(taxable_income, filing_status)

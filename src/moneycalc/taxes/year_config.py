"""Year-indexed US federal tax tables.

Tables live in ``taxes/tables/us_federal_<year>.yaml`` and are loaded once per
process. Each table carries the standard deductions, FICA parameters and the
ordinary income brackets for every filing status.

Example:
    >>> from moneycalc.taxes.year_config import get_tax_config
    >>> config = get_tax_config(2024)
    >>> config.standard_deduction("single")
    14600.0
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Literal, get_args

from moneycalc.io.yaml_loader import load_package_yaml, package_root
from moneycalc.utils.exceptions import ConfigError, TaxTableError

logger = logging.getLogger(__name__)

FilingStatus = Literal["single", "married-jointly", "married-separately", "head-of-household"]
FILING_STATUSES: tuple[str, ...] = get_args(FilingStatus)

_TABLE_DIR = "taxes/tables"
_TABLE_PATTERN = re.compile(r"^us_federal_(\d{4})\.yaml$")


@dataclass(frozen=True, slots=True)
class TaxBracket:
    """One row of a progressive bracket table.

    Attributes:
        max: Upper income bound of the bracket (``math.inf`` for the top bracket).
        rate: Marginal rate as a fraction (0.22 for 22%).
        base: Cumulative tax owed from the lower brackets.
    """

    max: float
    rate: float
    base: float

    @property
    def unbounded(self) -> bool:
        return math.isinf(self.max)


@dataclass(frozen=True, slots=True)
class FICARates:
    """Payroll tax parameters for one year."""

    social_security_limit: float
    social_security_rate: float
    medicare_rate: float


@dataclass(frozen=True)
class TaxYearConfig:
    """All federal tax parameters for one tax year.

    Instances are shared through the table cache, so the per-status mappings
    are read-only views.
    """

    year: int
    standard_deductions: Mapping[str, float]
    social_security_limit: float
    social_security_rate: float
    medicare_rate: float
    tax_brackets: Mapping[str, tuple[TaxBracket, ...]]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaxYearConfig:
        """Build a config from a parsed YAML table.

        Raises:
            TaxTableError: If a required key is missing or a bracket list is
                not ascending with a single unbounded final row.
        """
        try:
            year = int(data["year"])
            deductions = {
                status: float(data["standard_deduction"][status]) for status in FILING_STATUSES
            }
            fica = data["fica"]
            brackets = {
                status: _parse_brackets(data["ordinary_brackets"][status], year, status)
                for status in FILING_STATUSES
            }
            return cls(
                year=year,
                standard_deductions=MappingProxyType(deductions),
                social_security_limit=float(fica["social_security_limit"]),
                social_security_rate=float(fica["social_security_rate"]),
                medicare_rate=float(fica["medicare_rate"]),
                tax_brackets=MappingProxyType(brackets),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TaxTableError(f"Malformed tax table: {exc!r}") from exc

    def brackets(self, filing_status: str) -> tuple[TaxBracket, ...]:
        """Return the ordered bracket list for a filing status."""
        _check_status(filing_status)
        return self.tax_brackets[filing_status]

    def standard_deduction(self, filing_status: str) -> float:
        """Return the standard deduction for a filing status."""
        _check_status(filing_status)
        return self.standard_deductions[filing_status]

    @property
    def fica(self) -> FICARates:
        return FICARates(
            social_security_limit=self.social_security_limit,
            social_security_rate=self.social_security_rate,
            medicare_rate=self.medicare_rate,
        )


def _check_status(filing_status: str) -> None:
    if filing_status not in FILING_STATUSES:
        raise ConfigError(
            f"Unknown filing status {filing_status!r}; expected one of {', '.join(FILING_STATUSES)}"
        )


def _parse_brackets(rows: list[list[Any]], year: int, status: str) -> tuple[TaxBracket, ...]:
    brackets = tuple(
        TaxBracket(
            max=math.inf if upper is None else float(upper),
            rate=float(rate),
            base=float(base),
        )
        for upper, rate, base in rows
    )
    if not brackets:
        raise TaxTableError(f"{year} {status}: no brackets")
    if not brackets[-1].unbounded:
        raise TaxTableError(f"{year} {status}: last bracket must be unbounded")
    for lower, upper in zip(brackets, brackets[1:]):
        if lower.unbounded or upper.max <= lower.max:
            raise TaxTableError(f"{year} {status}: brackets must ascend by upper bound")
    return brackets


@lru_cache(maxsize=1)
def available_years() -> tuple[int, ...]:
    """Tax years with a shipped table, most recent first.

    The first entry is the fallback table for unrecognized years.
    """
    years = []
    for path in (package_root() / _TABLE_DIR).iterdir():
        match = _TABLE_PATTERN.match(path.name)
        if match:
            years.append(int(match.group(1)))
    return tuple(sorted(years, reverse=True))


@lru_cache(maxsize=None)
def _load_year(year: int) -> TaxYearConfig:
    data = load_package_yaml(f"{_TABLE_DIR}/us_federal_{year}.yaml")
    config = TaxYearConfig.from_dict(data)
    if config.year != year:
        raise TaxTableError(f"us_federal_{year}.yaml declares year {config.year}")
    return config


def get_tax_config(year: int) -> TaxYearConfig:
    """Return the tax table for ``year``.

    An unrecognized year falls back to the first configured (most recent)
    table. The fallback is logged as a warning rather than raised.
    """
    years = available_years()
    if year not in years:
        logger.warning("No tax table for %s, falling back to %s", year, years[0])
        year = years[0]
    return _load_year(year)


def get_standard_deduction(filing_status: str, year: int) -> float:
    """Standard deduction for a filing status in a given year."""
    return get_tax_config(year).standard_deduction(filing_status)


def get_fica_rates(year: int) -> FICARates:
    """Social Security limit and rate plus Medicare rate for a given year."""
    return get_tax_config(year).fica

"""Custom exceptions for moneycalc."""

from __future__ import annotations


class MoneycalcError(Exception):
    """Base exception for moneycalc."""


class ConfigError(MoneycalcError):
    """Invalid calculator input or lookup key."""


class TaxTableError(MoneycalcError):
    """Malformed tax table data file."""

"""Loader for the YAML data files shipped inside the package."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from moneycalc.utils.exceptions import TaxTableError


def load_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML data file whose top level is a mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        TaxTableError: If the file is not valid YAML or not a mapping.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise TaxTableError(f"{path.name}: invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise TaxTableError(f"{path.name}: expected a mapping, got {type(data).__name__}")
    return data


def package_root() -> Path:
    """Directory of the installed ``moneycalc`` package."""
    return Path(__file__).resolve().parent.parent


def load_package_yaml(relative_path: str) -> dict[str, Any]:
    """Load a data file by its path under ``src/moneycalc/``.

    Args:
        relative_path: e.g. ``"taxes/tables/us_federal_2024.yaml"``.
    """
    return load_yaml(package_root() / relative_path)

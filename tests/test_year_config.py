"""Tests for the year-indexed tax tables."""

from __future__ import annotations

import copy
import math
from pathlib import Path
from typing import Any

import pytest

from moneycalc.io.yaml_loader import load_package_yaml, load_yaml
from moneycalc.taxes.year_config import (
    FILING_STATUSES,
    TaxYearConfig,
    available_years,
    get_fica_rates,
    get_standard_deduction,
    get_tax_config,
)
from moneycalc.utils.exceptions import ConfigError, TaxTableError


@pytest.fixture
def raw_2024() -> dict[str, Any]:
    return copy.deepcopy(load_package_yaml("taxes/tables/us_federal_2024.yaml"))


class TestTaxTables:
    def test_available_years(self) -> None:
        assert available_years() == (2024, 2023)

    @pytest.mark.parametrize("year", [2023, 2024])
    def test_every_status_has_unbounded_top(self, year: int) -> None:
        config = get_tax_config(year)
        for status in FILING_STATUSES:
            brackets = config.brackets(status)
            assert brackets[-1].unbounded
            assert math.isinf(brackets[-1].max)
            assert all(a.max < b.max for a, b in zip(brackets, brackets[1:]))

    def test_standard_deductions(self) -> None:
        assert get_standard_deduction("single", 2024) == 14600
        assert get_standard_deduction("married-jointly", 2024) == 29200
        assert get_standard_deduction("head-of-household", 2024) == 21900
        assert get_standard_deduction("head-of-household", 2023) == 20800

    def test_fica_rates(self) -> None:
        fica = get_fica_rates(2024)
        assert fica.social_security_limit == 168600
        assert fica.social_security_rate == pytest.approx(0.062)
        assert fica.medicare_rate == pytest.approx(0.0145)
        assert get_fica_rates(2023).social_security_limit == 160200

    def test_tables_are_cached(self) -> None:
        assert get_tax_config(2024) is get_tax_config(2024)

    def test_unknown_status(self) -> None:
        with pytest.raises(ConfigError):
            get_standard_deduction("joint", 2024)


class TestMalformedTables:
    def test_valid_table_parses(self, raw_2024: dict[str, Any]) -> None:
        config = TaxYearConfig.from_dict(raw_2024)
        assert config.year == 2024
        assert config.brackets("single")[0].rate == pytest.approx(0.10)

    def test_missing_key(self, raw_2024: dict[str, Any]) -> None:
        del raw_2024["fica"]
        with pytest.raises(TaxTableError):
            TaxYearConfig.from_dict(raw_2024)

    def test_missing_status(self, raw_2024: dict[str, Any]) -> None:
        del raw_2024["ordinary_brackets"]["head-of-household"]
        with pytest.raises(TaxTableError):
            TaxYearConfig.from_dict(raw_2024)

    def test_bounded_top_bracket(self, raw_2024: dict[str, Any]) -> None:
        raw_2024["ordinary_brackets"]["single"][-1][0] = 1_000_000
        with pytest.raises(TaxTableError, match="unbounded"):
            TaxYearConfig.from_dict(raw_2024)

    def test_unsorted_brackets(self, raw_2024: dict[str, Any]) -> None:
        rows = raw_2024["ordinary_brackets"]["single"]
        rows[0], rows[1] = rows[1], rows[0]
        with pytest.raises(TaxTableError, match="ascend"):
            TaxYearConfig.from_dict(raw_2024)

    def test_empty_brackets(self, raw_2024: dict[str, Any]) -> None:
        raw_2024["ordinary_brackets"]["single"] = []
        with pytest.raises(TaxTableError):
            TaxYearConfig.from_dict(raw_2024)


class TestYamlLoader:
    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("year: [2024\n")
        with pytest.raises(TaxTableError, match="invalid YAML"):
            load_yaml(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(TaxTableError, match="mapping"):
            load_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "absent.yaml")


class TestImmutability:
    def test_shared_tables_are_read_only(self) -> None:
        config = get_tax_config(2024)
        with pytest.raises(TypeError):
            config.standard_deductions["single"] = 0  # type: ignore[index]
        with pytest.raises(TypeError):
            config.tax_brackets["single"] = ()  # type: ignore[index]
        assert get_standard_deduction("single", 2024) == 14600

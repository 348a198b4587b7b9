"""CLI entry point for moneycalc."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import Any

import click
from pydantic import BaseModel

from moneycalc.calculators.car_loan import calculate_car_loan
from moneycalc.calculators.credit_card import calculate_credit_card_payoff
from moneycalc.calculators.goals import (
    calculate_save_for_goal,
    calculate_save_million,
    calculate_savings_growth,
)
from moneycalc.calculators.paycheck import calculate_paycheck
from moneycalc.config.defaults import (
    default_car_loan,
    default_credit_card,
    default_paycheck,
    default_save_for_goal,
    default_save_million,
    default_savings_growth,
)
from moneycalc.config.schema import (
    CarLoanForm,
    CreditCardForm,
    PaycheckForm,
    SaveForGoalForm,
    SaveMillionForm,
    SavingsGrowthForm,
)
from moneycalc.io.formatting import format_currency, format_percent
from moneycalc.io.serialize import (
    FormT,
    apply_overrides,
    dump_result,
    dump_series_csv,
    load_form,
)
from moneycalc.taxes.us_federal import USFederalTaxModel
from moneycalc.taxes.year_config import FILING_STATUSES
from moneycalc.utils.exceptions import ConfigError


def _parse_overrides(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for item in values:
        field, sep, value = item.partition("=")
        if not sep or not field:
            raise click.BadParameter(f"expected FIELD=VALUE, got {item!r}")
        overrides[field.strip()] = value.strip()
    return overrides


def calculator_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every calculator command."""
    func = click.option(
        "--csv",
        "csv_path",
        type=click.Path(path_type=Path),
        default=None,
        help="Path to write the projection series as CSV.",
    )(func)
    func = click.option(
        "--output",
        "output_path",
        type=click.Path(path_type=Path),
        default=None,
        help="Path to write results JSON.",
    )(func)
    func = click.option(
        "--set",
        "overrides",
        multiple=True,
        callback=_parse_overrides,
        metavar="FIELD=VALUE",
        help="Override one input field; repeatable.",
    )(func)
    func = click.option(
        "--input",
        "input_path",
        type=click.Path(exists=True, path_type=Path),
        default=None,
        help="Path to JSON input form. Uses example inputs if not provided.",
    )(func)
    return func


def _resolve_form(
    form_cls: type[FormT],
    default: Callable[[], FormT],
    input_path: Path | None,
    overrides: dict[str, str],
) -> FormT:
    try:
        form = load_form(input_path.read_text(), form_cls) if input_path else default()
        if overrides:
            form = apply_overrides(form, overrides)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
    return form


def _report(
    name: str,
    form: BaseModel,
    formatted: dict[str, Any],
    output_path: Path | None,
    csv_path: Path | None,
    series_key: str | None = None,
) -> None:
    for key, value in formatted.items():
        if isinstance(value, list):
            click.echo(f"{key}: {len(value)} rows")
        elif isinstance(value, dict):
            click.echo(f"{key}:")
            for sub_key, sub_value in value.items():
                click.echo(f"  {sub_key}: {sub_value}")
        else:
            click.echo(f"{key}: {value}")

    if output_path is not None:
        output_path.write_text(dump_result(name, form, formatted))
        click.echo(f"\nResults written to {output_path}")
    if csv_path is not None:
        if series_key is None:
            raise click.UsageError(f"{name} has no projection series to export")
        csv_path.write_text(dump_series_csv(formatted[series_key]))
        click.echo(f"Series written to {csv_path}")


@click.group()
@click.version_option(package_name="moneycalc")
@click.option("-v", "--verbose", is_flag=True, help="Log calculation details.")
def cli(verbose: bool) -> None:
    """moneycalc — personal finance calculators."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@calculator_options
def paycheck(
    input_path: Path | None,
    overrides: dict[str, str],
    output_path: Path | None,
    csv_path: Path | None,
) -> None:
    """Take-home pay per paycheck."""
    form = _resolve_form(PaycheckForm, default_paycheck, input_path, overrides)
    result = calculate_paycheck(form)
    _report("paycheck", form, result.formatted(), output_path, csv_path)


@cli.command("car-loan")
@calculator_options
def car_loan(
    input_path: Path | None,
    overrides: dict[str, str],
    output_path: Path | None,
    csv_path: Path | None,
) -> None:
    """Car loan payment and affordability."""
    form = _resolve_form(CarLoanForm, default_car_loan, input_path, overrides)
    result = calculate_car_loan(form)
    _report("car-loan", form, result.formatted(), output_path, csv_path)


@cli.command("credit-card")
@calculator_options
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date the payoff is counted from (default: today).",
)
def credit_card(
    input_path: Path | None,
    overrides: dict[str, str],
    output_path: Path | None,
    csv_path: Path | None,
    start_date: datetime | None,
) -> None:
    """Credit card payoff timeline."""
    form = _resolve_form(CreditCardForm, default_credit_card, input_path, overrides)
    reference = start_date.date() if start_date is not None else date.today()
    result = calculate_credit_card_payoff(form, reference)
    _report(
        "credit-card", form, result.formatted(), output_path, csv_path, "projectedPayoff"
    )


@cli.command("save-million")
@calculator_options
def save_million(
    input_path: Path | None,
    overrides: dict[str, str],
    output_path: Path | None,
    csv_path: Path | None,
) -> None:
    """Savings goal over an age window."""
    form = _resolve_form(SaveMillionForm, default_save_million, input_path, overrides)
    result = calculate_save_million(form)
    _report(
        "save-million", form, result.formatted(), output_path, csv_path, "projectedGrowth"
    )


@cli.command("save-for-goal")
@calculator_options
def save_for_goal(
    input_path: Path | None,
    overrides: dict[str, str],
    output_path: Path | None,
    csv_path: Path | None,
) -> None:
    """Savings goal with an optional timeline."""
    form = _resolve_form(SaveForGoalForm, default_save_for_goal, input_path, overrides)
    result = calculate_save_for_goal(form)
    _report(
        "save-for-goal", form, result.formatted(), output_path, csv_path, "projectedGrowth"
    )


@cli.command("savings-growth")
@calculator_options
def savings_growth(
    input_path: Path | None,
    overrides: dict[str, str],
    output_path: Path | None,
    csv_path: Path | None,
) -> None:
    """Compound growth over a fixed number of years."""
    form = _resolve_form(SavingsGrowthForm, default_savings_growth, input_path, overrides)
    result = calculate_savings_growth(form)
    _report(
        "savings-growth", form, result.formatted(), output_path, csv_path, "growthChart"
    )


@cli.command()
@click.argument("taxable_income", type=float)
@click.option(
    "--status",
    type=click.Choice(FILING_STATUSES),
    default="single",
    show_default=True,
    help="Filing status.",
)
@click.option("--year", type=int, default=2024, show_default=True, help="Tax year.")
@click.option(
    "--corrected",
    is_flag=True,
    help="Use true progressive bracket math instead of the reference formula.",
)
def tax(taxable_income: float, status: str, year: int, corrected: bool) -> None:
    """Federal income tax on TAXABLE_INCOME."""
    model = USFederalTaxModel(year, corrected=corrected)
    click.echo(f"Tax year: {model.tax_year}")
    click.echo(f"Federal tax: ${format_currency(model.tax(taxable_income, status))}")
    click.echo(
        f"Marginal rate: {format_percent(model.marginal_rate(taxable_income, status) * 100)}%"
    )


if __name__ == "__main__":
    cli()

"""Serialization for input forms, results, and time series export."""

from __future__ import annotations

import csv
import hashlib
import io
import json
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from moneycalc.utils.exceptions import ConfigError

FormT = TypeVar("FormT", bound=BaseModel)


def compute_form_hash(form: BaseModel) -> str:
    """Compute a deterministic SHA-256 hash of an input form.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical input always produces the same hash.
    """
    canonical = json.dumps(form.model_dump(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def dump_form(form: BaseModel) -> str:
    """Serialize a form to a JSON string."""
    return json.dumps(form.model_dump(), indent=2)


def load_form(json_str: str, form_cls: type[FormT]) -> FormT:
    """Deserialize a form from a JSON string.

    Raises:
        ConfigError: If the JSON is invalid or does not describe ``form_cls``.
    """
    try:
        data: dict[str, Any] = json.loads(json_str)
        return form_cls.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid {form_cls.__name__}: {exc}") from exc


def apply_overrides(form: FormT, overrides: Mapping[str, Any]) -> FormT:
    """Return a copy of ``form`` with fields replaced, re-validating the result.

    Raises:
        ConfigError: If an override names an unknown field or an invalid value.
    """
    data = {**form.model_dump(), **overrides}
    try:
        return type(form).model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid override: {exc}") from exc


def dump_result(calculator: str, form: BaseModel, formatted: Mapping[str, Any]) -> str:
    """Serialize a formatted result with the input it was computed from."""
    data = {
        "calculator": calculator,
        "input_hash": compute_form_hash(form),
        "input": form.model_dump(),
        "result": formatted,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def dump_series_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Export a formatted projection series as CSV.

    Args:
        rows: Series rows as produced by a result's ``formatted()``; the keys
            of the first row become the header.

    Returns:
        CSV string, empty if there are no rows.
    """
    if not rows:
        return ""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=list(rows[0]))
    writer.writeheader()
    writer.writerows(rows)
    return output.getvalue()

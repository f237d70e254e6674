"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec executors can stay
concise and produce consistent validation errors.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Mapping

from core.clock import normalize_timestamp
from core.errors import RegistryRunSpecError


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field, preserving it byte for byte."""
    value = optional_string(args, field_name)
    if value is None:
        raise RegistryRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a run-spec step.

    Names and prefixes are matched exactly, so values are not stripped.
    """
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    raise RegistryRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def optional_int(args: Mapping[str, object], field_name: str) -> int | None:
    """Read an optional integer field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, bool):
        raise RegistryRunSpecError(f"Run-spec field '{field_name}' must be an integer.")
    if isinstance(value, int):
        return value
    raise RegistryRunSpecError(f"Run-spec field '{field_name}' must be an integer.")


def required_int(args: Mapping[str, object], field_name: str) -> int:
    """Read a required integer field from a run-spec step."""
    value = optional_int(args, field_name)
    if value is None:
        raise RegistryRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    return value


def required_timestamp(args: Mapping[str, object], field_name: str) -> datetime:
    """Read a required instant, accepting YAML timestamps or ISO-8601 strings.

    Naive values are interpreted as UTC.
    """
    value = args.get(field_name)
    if value is None:
        raise RegistryRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    if isinstance(value, datetime):
        return normalize_timestamp(value)
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as error:
            raise RegistryRunSpecError(
                f"Run-spec field '{field_name}' must be an ISO-8601 timestamp, got '{value}'."
            ) from error
        return normalize_timestamp(parsed)
    raise RegistryRunSpecError(f"Run-spec field '{field_name}' must be a timestamp.")

"""Run-spec execution engine.

This module maps validated run-spec steps onto registry operations and
renders query results as printable output lines.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from core.constants import EMPTY_VALUE_MARKER
from core.errors import RegistryRunSpecError
from core.run_spec import RunSpec, RunSpecStep
from core.run_spec_fields import (
    optional_int,
    optional_string,
    required_int,
    required_string,
    required_timestamp,
)
from core.types import Entry


class RunSpecRegistry(Protocol):
    """Registry API contract required by run-spec execution."""

    def upload(self, name: str, size: int) -> None: ...

    def get(self, name: str) -> int | None: ...

    def copy(self, source: str, destination: str) -> None: ...

    def search(self, prefix: str | None) -> Sequence[Entry]: ...

    def upload_at(
        self, name: str, size: int, timestamp: datetime, ttl: int | None = None
    ) -> None: ...

    def get_at(self, name: str, timestamp: datetime) -> int | None: ...

    def copy_at(self, source: str, destination: str, timestamp: datetime) -> None: ...

    def search_at(self, prefix: str | None, timestamp: datetime) -> Sequence[Entry]: ...

    def rollback(self, cutoff: datetime) -> None: ...


def execute_run_spec(registry: RunSpecRegistry, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec and return output lines for query steps."""
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(registry, step))
    return tuple(output_lines)


def render_entries(entries: Sequence[Entry]) -> str:
    """Render search results as one comma-joined line."""
    if not entries:
        return EMPTY_VALUE_MARKER
    return ", ".join(str(entry) for entry in entries)


def _execute_step(registry: RunSpecRegistry, step: RunSpecStep) -> tuple[str, ...]:
    args = step.args
    if step.command == "upload":
        registry.upload(required_string(args, "name"), required_int(args, "size"))
        return ()
    if step.command == "get":
        name = required_string(args, "name")
        return (_render_size(name, registry.get(name)),)
    if step.command == "copy":
        registry.copy(required_string(args, "source"), required_string(args, "destination"))
        return ()
    if step.command == "search":
        return (render_entries(registry.search(optional_string(args, "prefix"))),)
    if step.command == "upload-at":
        registry.upload_at(
            required_string(args, "name"),
            required_int(args, "size"),
            required_timestamp(args, "timestamp"),
            ttl=optional_int(args, "ttl"),
        )
        return ()
    if step.command == "get-at":
        name = required_string(args, "name")
        size = registry.get_at(name, required_timestamp(args, "timestamp"))
        return (_render_size(name, size),)
    if step.command == "copy-at":
        registry.copy_at(
            required_string(args, "source"),
            required_string(args, "destination"),
            required_timestamp(args, "timestamp"),
        )
        return ()
    if step.command == "search-at":
        entries = registry.search_at(
            optional_string(args, "prefix"),
            required_timestamp(args, "timestamp"),
        )
        return (render_entries(entries),)
    if step.command == "rollback":
        registry.rollback(required_timestamp(args, "timestamp"))
        return ()
    raise RegistryRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _render_size(name: str, size: int | None) -> str:
    return f"{name}={EMPTY_VALUE_MARKER if size is None else size}"

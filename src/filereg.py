"""Public SDK surface for the file metadata registry.

This module provides a stable import path for library users.
It re-exports the stores, record types, config, and error types.
"""

from __future__ import annotations

from core.clock import Clock, FixedClock, utc_now
from core.config import RegistryConfig
from core.errors import (
    EntryAlreadyExistsError,
    EntryNotFoundError,
    InvalidPrefixError,
    RegistryConfigError,
    RegistryError,
    RegistryRunSpecError,
)
from core.logging_config import configure_logging
from core.types import Entry, TemporalEntry
from store.snapshot_store import FileRegistry
from store.temporal_store import TemporalFileRegistry

__all__ = [
    "Clock",
    "Entry",
    "EntryAlreadyExistsError",
    "EntryNotFoundError",
    "FileRegistry",
    "FixedClock",
    "InvalidPrefixError",
    "RegistryConfig",
    "RegistryConfigError",
    "RegistryError",
    "RegistryRunSpecError",
    "TemporalEntry",
    "TemporalFileRegistry",
    "configure_logging",
    "utc_now",
]

"""Registry exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure kind raises a specific error type so callers can react to it.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base exception for all registry failures."""


class RegistryConfigError(RegistryError):
    """Raised for invalid runtime configuration."""


class EntryAlreadyExistsError(RegistryError):
    """Raised when uploading a name that is already live."""


class EntryNotFoundError(RegistryError):
    """Raised when a copy source does not match any live entry."""


class InvalidPrefixError(RegistryError):
    """Raised when a search prefix is empty or missing."""


class RegistryRunSpecError(RegistryError):
    """Raised for invalid or unsupported run-spec configuration."""

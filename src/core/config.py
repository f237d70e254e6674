"""Runtime configuration model for the registry.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_SEARCH_LIMIT,
    LOG_LEVEL_ENV_VAR,
    SEARCH_LIMIT_ENV_VAR,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import RegistryConfigError


@dataclass(frozen=True)
class RegistryConfig:
    """Validated runtime configuration.

    Attributes:
        search_limit: Maximum number of entries returned by a search.
        log_level: Minimum level emitted by registry loggers.
    """

    search_limit: int = DEFAULT_SEARCH_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            RegistryConfigError: If environment values are invalid.
        """
        search_limit_value = os.getenv(SEARCH_LIMIT_ENV_VAR, str(DEFAULT_SEARCH_LIMIT))
        log_level_value = os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
        return cls(
            search_limit=parse_search_limit(search_limit_value),
            log_level=_parse_log_level(log_level_value),
        )


def parse_search_limit(raw_value: str) -> int:
    """Parse the search limit environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer limit.

    Raises:
        RegistryConfigError: If value is not a positive integer.
    """
    try:
        limit = int(raw_value)
    except ValueError as error:
        raise RegistryConfigError(
            f"Invalid {SEARCH_LIMIT_ENV_VAR} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {SEARCH_LIMIT_ENV_VAR} to a numeric value."
        ) from error
    if limit < 1:
        raise RegistryConfigError(
            f"Invalid {SEARCH_LIMIT_ENV_VAR} value: expected at least 1, got {limit}."
        )
    return limit


def _parse_log_level(raw_value: str) -> str:
    normalized = raw_value.strip().lower()
    if normalized not in SUPPORTED_LOG_LEVELS:
        supported = ", ".join(SUPPORTED_LOG_LEVELS)
        raise RegistryConfigError(
            f"Invalid {LOG_LEVEL_ENV_VAR} value '{raw_value}'. Use one of: {supported}."
        )
    return normalized

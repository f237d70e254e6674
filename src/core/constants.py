"""Core constants used across registry modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
SEARCH_LIMIT_ENV_VAR = "FILEREG_SEARCH_LIMIT"
LOG_LEVEL_ENV_VAR = "FILEREG_LOG_LEVEL"
RUN_SPEC_VERSION = 1
EMPTY_VALUE_MARKER = "-"

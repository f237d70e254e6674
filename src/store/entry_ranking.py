"""Prefix search ranking helpers.

This module applies the prefix filter and top-K ordering shared by
the snapshot and temporal stores.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from core.errors import InvalidPrefixError
from core.types import Entry

_EntryT = TypeVar("_EntryT", bound=Entry)


def validate_prefix(prefix: str | None) -> str:
    """Reject empty or missing search prefixes.

    Args:
        prefix: Caller-supplied prefix.

    Returns:
        The prefix unchanged.

    Raises:
        InvalidPrefixError: If prefix is None or empty.
    """
    if not prefix:
        raise InvalidPrefixError(
            "Search prefix cannot be null or empty. Provide at least one character."
        )
    return prefix


def rank_entries(
    entries: Iterable[_EntryT],
    prefix: str,
    limit: int,
    predicate: Callable[[_EntryT], bool] | None = None,
) -> list[_EntryT]:
    """Filter entries by name prefix and return the top ranked ones.

    Matching is a case-sensitive codepoint prefix comparison. Results are
    ordered by size descending, then name descending.

    Args:
        entries: Candidate entries.
        prefix: Required name prefix.
        limit: Maximum number of results.
        predicate: Optional extra filter applied after the prefix match.

    Returns:
        At most ``limit`` ranked entries.
    """
    matched = [
        entry
        for entry in entries
        if entry.name.startswith(prefix) and (predicate is None or predicate(entry))
    ]
    matched.sort(key=lambda entry: (entry.size, entry.name), reverse=True)
    return matched[:limit]

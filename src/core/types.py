"""Shared typed models.

This module defines the immutable entry records held by the snapshot
and temporal stores. Rename produces a new record instead of mutating
one, so a record stored in history never changes after it is appended.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TypeVar

_EntryT = TypeVar("_EntryT", bound="Entry")


@dataclass(frozen=True, eq=False)
class Entry:
    """Named, sized file-metadata record.

    Attributes:
        name: Unique key of the entry within a live set.
        size: Size in bytes, fixed at upload.
    """

    name: str
    size: int

    def renamed(self: _EntryT, name: str) -> _EntryT:
        """Return a copy of this entry under a new name.

        Args:
            name: Destination name.

        Returns:
            Entry of the same type with every other field preserved.
        """
        return replace(self, name=name)

    def __str__(self) -> str:
        return f"{self.name} ({self.size})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return (self.name, self.size) == (other.name, other.size)

    def __hash__(self) -> int:
        return hash((self.name, self.size))


@dataclass(frozen=True, eq=False)
class TemporalEntry(Entry):
    """Entry stamped with an upload instant and optional time-to-live.

    Equality and hashing are inherited from ``Entry`` and only consider
    ``name`` and ``size``, also against plain entries. Rollback relies
    on this to detect records already restored into the live set.

    Attributes:
        timestamp: Caller-supplied upload instant.
        ttl: Lifetime in seconds from ``timestamp``; ``None`` never expires.
    """

    timestamp: datetime = field(kw_only=True)
    ttl: int | None = field(default=None, kw_only=True)

    def is_alive(self, now: datetime) -> bool:
        """Return whether the entry is still alive at ``now``.

        Args:
            now: Evaluation instant.

        Returns:
            True when ttl is unset or less than ttl seconds have elapsed.
        """
        if self.ttl is None:
            return True
        return (now - self.timestamp).total_seconds() < self.ttl

    def describe(self, now: datetime) -> str:
        """Render a one-line summary including liveness at ``now``."""
        ttl_label = "-" if self.ttl is None else str(self.ttl)
        return (
            f"{self.name} | size={self.size} | timestamp={self.timestamp.isoformat()} "
            f"| ttl={ttl_label} | alive={self.is_alive(now)}"
        )

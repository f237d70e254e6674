"""Snapshot store for untimed file metadata.

This module keeps the current set of live entries keyed by unique name.
It provides upload, get, copy, and ranked prefix search operations.
"""

from __future__ import annotations

import threading

from core.config import RegistryConfig
from core.errors import EntryAlreadyExistsError, EntryNotFoundError
from core.logging_config import get_logger
from core.types import Entry
from store.entry_ranking import rank_entries, validate_prefix

_LOGGER = get_logger(__name__)


class FileRegistry:
    """In-memory registry of named, sized entries.

    Every public operation holds the instance lock for its full duration.
    Validation always happens before mutation, so a failed call leaves
    the registry unchanged.
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        """Initialize an empty registry.

        Args:
            config: Runtime configuration; defaults apply when omitted.
        """
        self._config = config or RegistryConfig()
        self._lock = threading.RLock()
        self._entries: dict[str, Entry] = {}

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def upload(self, name: str, size: int) -> None:
        """Register a new entry.

        Args:
            name: Unique entry name.
            size: Entry size.

        Raises:
            EntryAlreadyExistsError: If ``name`` is already live.
        """
        with self._lock:
            if name in self._entries:
                _LOGGER.warning("entry_upload_rejected", name=name, reason="already_exists")
                raise EntryAlreadyExistsError(
                    f"File '{name}' already exists. Choose another name or copy over it."
                )
            self._entries[name] = Entry(name=name, size=size)
        _LOGGER.info("entry_uploaded", name=name, size=size)

    def get(self, name: str) -> int | None:
        """Return the size of ``name`` or None when it is absent."""
        with self._lock:
            entry = self._entries.get(name)
        return None if entry is None else entry.size

    def copy(self, source: str, destination: str) -> None:
        """Move the ``source`` entry to ``destination``.

        Any entry already stored under ``destination`` is superseded.

        Args:
            source: Existing entry name.
            destination: Target entry name.

        Raises:
            EntryNotFoundError: If ``source`` is absent.
        """
        with self._lock:
            entry = self._entries.get(source)
            if entry is None:
                _LOGGER.warning("entry_copy_rejected", source=source, reason="not_found")
                raise EntryNotFoundError(f"File '{source}' not found. Upload it before copying.")
            superseded = destination in self._entries and destination != source
            del self._entries[source]
            self._entries[destination] = entry.renamed(destination)
        _LOGGER.info(
            "entry_copied",
            source=source,
            destination=destination,
            superseded=superseded,
        )

    def search(self, prefix: str | None) -> list[Entry]:
        """Return the top entries whose names start with ``prefix``.

        Args:
            prefix: Non-empty name prefix.

        Returns:
            Entries ordered by size then name, both descending.

        Raises:
            InvalidPrefixError: If ``prefix`` is empty or None.
        """
        checked_prefix = validate_prefix(prefix)
        with self._lock:
            candidates = list(self._entries.values())
        return rank_entries(candidates, checked_prefix, self._config.search_limit)

    def entries(self) -> tuple[Entry, ...]:
        """Return a snapshot of the untimed live entries."""
        with self._lock:
            return tuple(self._entries.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

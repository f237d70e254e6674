"""Time-versioned store with TTL expiry and history rollback.

This module extends the snapshot store with timestamp-scoped operations.
Every successful timed upload is appended to an append-only history log,
and rollback rebuilds the live set by replaying that log up to a cutoff.
"""

from __future__ import annotations

from datetime import datetime

from core.clock import Clock, normalize_timestamp, utc_now
from core.config import RegistryConfig
from core.errors import EntryAlreadyExistsError, EntryNotFoundError
from core.logging_config import get_logger
from core.types import TemporalEntry
from store.entry_ranking import rank_entries, validate_prefix
from store.snapshot_store import FileRegistry

_LOGGER = get_logger(__name__)


class TemporalFileRegistry(FileRegistry):
    """Registry whose entries carry an upload timestamp and optional TTL.

    Timed operations work on their own live set, separate from the untimed
    entries inherited from ``FileRegistry``. Names are unique within the
    timed live set regardless of the timestamp they were uploaded at.
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize an empty temporal registry.

        Args:
            config: Runtime configuration; defaults apply when omitted.
            clock: Source of "now" for TTL liveness checks.
        """
        super().__init__(config)
        self._clock = clock
        self._live: dict[str, TemporalEntry] = {}
        self._history: list[TemporalEntry] = []

    def upload_at(
        self,
        name: str,
        size: int,
        timestamp: datetime,
        ttl: int | None = None,
    ) -> None:
        """Register a timed entry and append it to history.

        Args:
            name: Unique entry name.
            size: Entry size.
            timestamp: Upload instant.
            ttl: Optional lifetime in seconds; None never expires.

        Raises:
            EntryAlreadyExistsError: If ``name`` is already live.
        """
        stamped_at = normalize_timestamp(timestamp)
        with self._lock:
            if name in self._live:
                _LOGGER.warning(
                    "entry_upload_rejected",
                    name=name,
                    timestamp=stamped_at.isoformat(),
                    reason="already_exists",
                )
                raise EntryAlreadyExistsError(
                    f"File '{name}' already exists. Choose another name or copy over it."
                )
            entry = TemporalEntry(name=name, size=size, timestamp=stamped_at, ttl=ttl)
            self._live[name] = entry
            self._history.append(entry)
        _LOGGER.info(
            "entry_uploaded",
            name=name,
            size=size,
            timestamp=stamped_at.isoformat(),
            ttl=ttl,
        )

    def get_at(self, name: str, timestamp: datetime) -> int | None:
        """Return the size of ``name`` only if it was uploaded at ``timestamp``."""
        entry = self._find_exact(name, normalize_timestamp(timestamp))
        return None if entry is None else entry.size

    def copy_at(self, source: str, destination: str, timestamp: datetime) -> None:
        """Move the timed ``source`` entry to ``destination``.

        The entry keeps its original timestamp and ttl. Any entry already
        stored under ``destination`` is superseded.

        Args:
            source: Existing entry name.
            destination: Target entry name.
            timestamp: Exact upload instant of ``source``.

        Raises:
            EntryNotFoundError: If no live entry matches name and timestamp.
        """
        stamped_at = normalize_timestamp(timestamp)
        with self._lock:
            entry = self._find_exact(source, stamped_at)
            if entry is None:
                _LOGGER.warning(
                    "entry_copy_rejected",
                    source=source,
                    timestamp=stamped_at.isoformat(),
                    reason="not_found",
                )
                raise EntryNotFoundError(
                    f"File '{source}' not found at {stamped_at.isoformat()}. "
                    "Pass the timestamp the file was uploaded at."
                )
            superseded = destination in self._live and destination != source
            del self._live[source]
            self._live[destination] = entry.renamed(destination)
        _LOGGER.info(
            "entry_copied",
            source=source,
            destination=destination,
            timestamp=stamped_at.isoformat(),
            superseded=superseded,
        )

    def search_at(self, prefix: str | None, timestamp: datetime) -> list[TemporalEntry]:
        """Return alive entries uploaded at ``timestamp`` matching ``prefix``.

        Liveness is evaluated against the injected clock, not ``timestamp``.

        Args:
            prefix: Non-empty name prefix.
            timestamp: Exact upload instant to match.

        Returns:
            Entries ordered by size then name, both descending.

        Raises:
            InvalidPrefixError: If ``prefix`` is empty or None.
        """
        checked_prefix = validate_prefix(prefix)
        stamped_at = normalize_timestamp(timestamp)
        with self._lock:
            candidates = list(self._live.values())
        now = normalize_timestamp(self._clock())
        return rank_entries(
            candidates,
            checked_prefix,
            self._config.search_limit,
            predicate=lambda entry: entry.timestamp == stamped_at and entry.is_alive(now),
        )

    def rollback(self, cutoff: datetime) -> None:
        """Rebuild the live set from history records stamped at or before ``cutoff``.

        Each restored record goes through ``upload_at`` and is therefore
        appended to history again. A record whose name is already taken by an
        earlier restored record of a different size is skipped.

        Args:
            cutoff: Latest upload instant to restore.
        """
        stamped_cutoff = normalize_timestamp(cutoff)
        with self._lock:
            self._live.clear()
            replay = [record for record in self._history if record.timestamp <= stamped_cutoff]
            restored = 0
            for record in replay:
                if self._live.get(record.name) == record:
                    continue
                if record.name in self._live:
                    _LOGGER.warning(
                        "rollback_record_shadowed",
                        name=record.name,
                        size=record.size,
                        timestamp=record.timestamp.isoformat(),
                    )
                    continue
                self.upload_at(record.name, record.size, record.timestamp, record.ttl)
                restored += 1
            history_length = len(self._history)
        _LOGGER.info(
            "registry_rolled_back",
            cutoff=stamped_cutoff.isoformat(),
            restored=restored,
            history_length=history_length,
        )

    def live_entries(self) -> tuple[TemporalEntry, ...]:
        """Return a snapshot of the timed live set."""
        with self._lock:
            return tuple(self._live.values())

    def history(self) -> tuple[TemporalEntry, ...]:
        """Return a snapshot of the append-only history log."""
        with self._lock:
            return tuple(self._history)

    def __len__(self) -> int:
        with self._lock:
            return len(self._live)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._live

    def _find_exact(self, name: str, timestamp: datetime) -> TemporalEntry | None:
        with self._lock:
            entry = self._live.get(name)
        if entry is None or entry.timestamp != timestamp:
            return None
        return entry

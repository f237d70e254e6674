"""Unit tests for the time-versioned store with TTL and rollback."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from structlog.testing import capture_logs

from core.errors import EntryAlreadyExistsError, EntryNotFoundError, InvalidPrefixError
from store.temporal_store import TemporalFileRegistry


@pytest.fixture
def registry(clock) -> TemporalFileRegistry:
    return TemporalFileRegistry(clock=clock)


def _seed_three(registry: TemporalFileRegistry, epoch: datetime) -> tuple[datetime, ...]:
    stamps = tuple(epoch + timedelta(hours=offset) for offset in (1, 2, 3))
    registry.upload_at("a.txt", 100, stamps[0])
    registry.upload_at("b.txt", 200, stamps[1])
    registry.upload_at("c.txt", 300, stamps[2])
    return stamps


def test_upload_at_then_get_at_returns_size(registry, epoch) -> None:
    """Timed entry should be retrievable at its upload timestamp."""
    registry.upload_at("f", 100, epoch)

    assert registry.get_at("f", epoch) == 100


def test_get_at_requires_exact_timestamp(registry, epoch) -> None:
    """Lookup at any other instant should return None."""
    registry.upload_at("f", 100, epoch)

    assert registry.get_at("f", epoch + timedelta(seconds=1)) is None


def test_naive_timestamps_are_treated_as_utc(registry, epoch) -> None:
    """Naive and UTC-aware instants should address the same entry."""
    registry.upload_at("f", 100, epoch.replace(tzinfo=None))

    assert registry.get_at("f", epoch) == 100


def test_upload_at_rejects_live_name_at_any_timestamp(registry, epoch) -> None:
    """Name uniqueness should ignore the upload timestamp."""
    registry.upload_at("f", 100, epoch)

    with pytest.raises(EntryAlreadyExistsError):
        registry.upload_at("f", 5, epoch + timedelta(days=1))

    assert len(registry.history()) == 1 and registry.get_at("f", epoch) == 100


def test_copy_at_requires_matching_timestamp(registry, epoch) -> None:
    """Copy should fail when the source timestamp does not match."""
    registry.upload_at("f", 100, epoch)

    with pytest.raises(EntryNotFoundError):
        registry.copy_at("f", "g", epoch + timedelta(seconds=1))

    assert "f" in registry and "g" not in registry


def test_copy_at_renames_and_keeps_timestamp(registry, epoch) -> None:
    """Copied entry should be visible under the destination only."""
    registry.upload_at("f", 100, epoch, ttl=60)
    registry.upload_at("g", 5, epoch)

    registry.copy_at("f", "g", epoch)

    assert registry.get_at("g", epoch) == 100
    assert registry.get_at("f", epoch) is None
    assert [entry.ttl for entry in registry.live_entries()] == [60]


def test_copy_at_does_not_rewrite_history(registry, epoch) -> None:
    """Renames in the live set should leave history untouched."""
    registry.upload_at("f", 100, epoch)

    registry.copy_at("f", "g", epoch)

    assert [entry.name for entry in registry.history()] == ["f"]


def test_search_at_filters_by_prefix_timestamp_and_ranks(registry, epoch) -> None:
    """Search should match the exact timestamp and rank results."""
    registry.upload_at("alpha1", 500, epoch)
    registry.upload_at("alpha2", 1500, epoch)
    registry.upload_at("alpha3", 1500, epoch)
    registry.upload_at("alpha4", 9000, epoch + timedelta(minutes=1))

    names = [entry.name for entry in registry.search_at("alpha", epoch)]

    assert names == ["alpha3", "alpha2", "alpha1"]


@pytest.mark.parametrize("prefix", ["", None])
def test_search_at_rejects_empty_prefix(registry, epoch, prefix) -> None:
    """Timed search should fail for empty prefixes."""
    with pytest.raises(InvalidPrefixError):
        registry.search_at(prefix, epoch)


def test_search_at_excludes_expired_entries(registry, clock, epoch) -> None:
    """Entries past their ttl should drop out of search results."""
    registry.upload_at("log.short", 10, epoch, ttl=2000)
    registry.upload_at("log.forever", 5, epoch)

    clock.advance(1999)
    alive_before = [entry.name for entry in registry.search_at("log", epoch)]
    clock.advance(1)
    alive_after = [entry.name for entry in registry.search_at("log", epoch)]

    assert alive_before == ["log.short", "log.forever"]
    assert alive_after == ["log.forever"]


def test_expired_entries_remain_retrievable_by_get_at(registry, clock, epoch) -> None:
    """Expiry only affects search, not exact lookups."""
    registry.upload_at("f", 100, epoch, ttl=1)
    clock.advance(10)

    assert registry.get_at("f", epoch) == 100


def test_rollback_keeps_entries_up_to_cutoff(registry, epoch) -> None:
    """Entries stamped after the cutoff should become unretrievable."""
    stamps = _seed_three(registry, epoch)

    registry.rollback(stamps[1])

    assert registry.get_at("a.txt", stamps[0]) == 100
    assert registry.get_at("b.txt", stamps[1]) == 200
    assert registry.get_at("c.txt", stamps[2]) is None
    assert len(registry) == 2


def test_rollback_before_any_upload_clears_live_set(registry, epoch) -> None:
    """Rolling back before the first upload should empty the live set."""
    _seed_three(registry, epoch)

    registry.rollback(epoch)

    assert registry.live_entries() == ()
    assert len(registry.history()) == 3


def test_rollback_is_idempotent_on_live_set(registry, epoch) -> None:
    """Repeated rollback should keep live contents while history grows."""
    stamps = _seed_three(registry, epoch)

    registry.rollback(stamps[1])
    first_live = registry.live_entries()
    first_history = len(registry.history())
    registry.rollback(stamps[1])

    assert registry.live_entries() == first_live
    assert (first_history, len(registry.history())) == (5, 7)


def test_rollback_restores_original_name_after_copy(registry, epoch) -> None:
    """Replay should restore the uploaded name, not the renamed one."""
    registry.upload_at("f", 100, epoch)
    registry.copy_at("f", "g", epoch)

    registry.rollback(epoch)

    assert registry.get_at("f", epoch) == 100
    assert registry.get_at("g", epoch) is None


def test_rollback_skips_records_shadowed_by_earlier_name(registry, epoch) -> None:
    """A later record reusing a restored name should not be replayed."""
    later = epoch + timedelta(hours=1)
    registry.upload_at("f", 100, epoch)
    registry.copy_at("f", "g", epoch)
    registry.upload_at("f", 200, later)

    registry.rollback(later)

    assert registry.get_at("f", epoch) == 100
    assert registry.get_at("f", later) is None
    assert len(registry.history()) == 3


def test_rollback_preserves_ttl(registry, clock, epoch) -> None:
    """Restored entries should keep their ttl and expire as before."""
    registry.upload_at("f", 100, epoch, ttl=30)
    registry.rollback(epoch)
    clock.advance(31)

    assert registry.search_at("f", epoch) == []


def test_untimed_operations_use_separate_entries(registry, epoch) -> None:
    """Inherited untimed operations should not touch the timed live set."""
    registry.upload("f", 1)
    registry.upload_at("f", 100, epoch)

    assert registry.get("f") == 1
    assert registry.get_at("f", epoch) == 100
    assert len(registry.entries()) == 1 and len(registry.live_entries()) == 1


def test_rollback_emits_summary_event(registry, epoch) -> None:
    """Rollback should log how many records were restored."""
    _seed_three(registry, epoch)

    with capture_logs() as logs:
        registry.rollback(epoch + timedelta(hours=1))

    summary = [entry for entry in logs if entry["event"] == "registry_rolled_back"]
    assert summary[0]["restored"] == 1 and summary[0]["history_length"] == 4


def test_search_at_accepts_naive_clock(epoch) -> None:
    """A clock returning naive datetimes should be read as UTC."""
    registry = TemporalFileRegistry(clock=lambda: datetime(2024, 1, 1, 0, 10))
    registry.upload_at("fresh", 1, epoch, ttl=3600)
    registry.upload_at("stale", 2, epoch, ttl=60)

    assert registry.search_at("stale", epoch) == []
    assert [entry.name for entry in registry.search_at("fresh", epoch)] == ["fresh"]


def test_rollback_skips_repeated_record_for_same_name_and_size(registry, epoch) -> None:
    """Replay should restore one record when history repeats name and size."""
    later = epoch + timedelta(minutes=5)
    registry.upload_at("f", 100, epoch)
    registry.copy_at("f", "g", epoch)
    registry.upload_at("f", 100, later)

    registry.rollback(later)

    assert registry.get_at("f", epoch) == 100
    assert registry.get_at("f", later) is None
    assert len(registry.live_entries()) == 1 and len(registry.history()) == 3

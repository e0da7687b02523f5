"""Tests for the record retention window."""

from datetime import UTC, datetime

from pharmacy_consult.services.retention import RetentionService, retention_cutoff
from pharmacy_consult.services.state import RECORDS_KEY, LocalStateService
from tests.conftest import FIXED_NOW, InMemoryLocalStore, make_record


def test_cutoff_handles_leap_day() -> None:
    now = datetime(2028, 2, 29, tzinfo=UTC)

    assert retention_cutoff(now, 3) == datetime(2025, 2, 28, tzinfo=UTC)


def test_purge_drops_records_older_than_window() -> None:
    store = InMemoryLocalStore()
    state = LocalStateService(store)
    state.save_records(
        [
            make_record("fresh", "2025-06-01T00:00:00+00:00"),
            make_record("expired", "2023-10-01T00:00:00+00:00"),
        ]
    )
    service = RetentionService(state=state, clock=lambda: FIXED_NOW)

    removed = service.purge()

    assert removed == 1
    assert [record.id for record in state.load_records()] == ["fresh"]


def test_purge_without_expired_records_does_not_write() -> None:
    store = InMemoryLocalStore()
    state = LocalStateService(store)
    state.save_records([make_record("fresh", "2026-01-01T00:00:00+00:00")])
    store.writes.clear()

    removed = RetentionService(state=state, clock=lambda: FIXED_NOW).purge()

    assert removed == 0
    assert RECORDS_KEY not in store.writes

"""Tests for sync polling and write-through pushes."""

import asyncio
import logging

import pytest

from pharmacy_consult.adapters.connectivity import DeviceConnectivity
from pharmacy_consult.services.scheduler import SyncScheduler
from pharmacy_consult.services.state import SYNC_CODE_KEY, LocalStateService
from pharmacy_consult.services.sync import SyncReconciler
from tests.conftest import FakeSyncStoreClient, InMemoryLocalStore, make_record, record_blob


def _scheduler(
    client: FakeSyncStoreClient, store: InMemoryLocalStore, interval: float = 3600
) -> SyncScheduler:
    state = LocalStateService(store)
    reconciler = SyncReconciler(
        client=client, state=state, connectivity=DeviceConnectivity()
    )
    return SyncScheduler(
        reconciler=reconciler, state=state, poll_interval_seconds=interval
    )


def test_start_pulls_immediately_and_persists_code() -> None:
    client = FakeSyncStoreClient(
        blobs={"imom": record_blob(make_record("B", "2026-02-01T10:00:00.000Z"))}
    )
    store = InMemoryLocalStore()
    scheduler = _scheduler(client, store)

    async def scenario() -> None:
        scheduler.start(" imom ")
        await asyncio.sleep(0)
        await scheduler.drain()
        await scheduler.close()

    asyncio.run(scenario())

    assert client.fetches == ["imom"]
    assert store.documents[SYNC_CODE_KEY] == "imom"
    assert [record.id for record in scheduler.state.load_records()] == ["B"]


def test_polls_on_interval() -> None:
    client = FakeSyncStoreClient(blobs={"imom": record_blob()})
    scheduler = _scheduler(client, InMemoryLocalStore(), interval=0.01)

    async def scenario() -> None:
        scheduler.start("imom")
        await asyncio.sleep(0.1)
        await scheduler.close()

    asyncio.run(scenario())

    assert len(client.fetches) >= 3


def test_changing_code_cancels_previous_poll() -> None:
    client = FakeSyncStoreClient(blobs={"old": record_blob(), "new": record_blob()})
    scheduler = _scheduler(client, InMemoryLocalStore(), interval=0.01)

    async def scenario() -> int:
        scheduler.start("old")
        await asyncio.sleep(0.05)
        scheduler.start("new")
        await scheduler.drain()
        old_count = client.fetches.count("old")
        await asyncio.sleep(0.05)
        await scheduler.close()
        return old_count

    old_count = asyncio.run(scenario())

    assert client.fetches.count("old") == old_count
    assert client.fetches.count("new") >= 2
    assert scheduler.code is None


def test_start_rejects_short_code() -> None:
    scheduler = _scheduler(FakeSyncStoreClient(), InMemoryLocalStore())

    async def scenario() -> None:
        scheduler.start("a")

    with pytest.raises(ValueError):
        asyncio.run(scenario())


def test_notify_changed_pushes_full_state() -> None:
    client = FakeSyncStoreClient(blobs={"imom": record_blob()})
    store = InMemoryLocalStore()
    scheduler = _scheduler(client, store)
    scheduler.state.save_records([make_record("A", "2026-01-01T10:00:00.000Z")])

    async def scenario() -> None:
        scheduler.start("imom")
        scheduler.notify_changed()
        await scheduler.close()

    asyncio.run(scenario())

    code, payload = client.stored[-1]
    assert code == "imom"
    assert [row["id"] for row in payload["records"]] == ["A"]  # type: ignore[index]


def test_notify_changed_without_code_is_noop() -> None:
    client = FakeSyncStoreClient()
    scheduler = _scheduler(client, InMemoryLocalStore())

    scheduler.notify_changed()

    assert client.stored == []


def test_clear_forgets_code() -> None:
    store = InMemoryLocalStore()
    scheduler = _scheduler(FakeSyncStoreClient(blobs={"imom": record_blob()}), store)

    async def scenario() -> None:
        scheduler.start("imom")
        scheduler.clear()
        await scheduler.close()

    asyncio.run(scenario())

    assert SYNC_CODE_KEY not in store.documents
    assert scheduler.code is None


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_unexpected_task_failure_is_logged() -> None:
    client = FakeSyncStoreClient(fetch_error=RuntimeError("bug"))
    scheduler = _scheduler(client, InMemoryLocalStore())
    handler = _ListHandler()
    logger = logging.getLogger("pharmacy_consult.services.scheduler")
    logger.addHandler(handler)

    async def scenario() -> None:
        scheduler.start("imom")
        await asyncio.sleep(0)
        await scheduler.drain()
        await scheduler.close()

    try:
        asyncio.run(scenario())
    finally:
        logger.removeHandler(handler)

    failures = [record for record in handler.records if record.levelno == logging.ERROR]
    assert len(failures) == 1
    assert isinstance(failures[0].exc_info[1], RuntimeError)  # type: ignore[index]

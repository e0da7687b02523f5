"""Background polling and write-through pushes for a sync code."""

import asyncio
import logging
from dataclasses import dataclass, field

from pharmacy_consult.services.state import LocalStateService
from pharmacy_consult.services.sync import SyncReconciler, normalize_sync_code

_logger = logging.getLogger(__name__)


@dataclass
class SyncScheduler:
    """Owns the poll task for the current sync code and fires pushes on change.

    Each poll tick starts an independent pull, so slow pulls may overlap.
    Pushes run as fire-and-forget tasks and never block the caller.
    """

    reconciler: SyncReconciler
    state: LocalStateService
    poll_interval_seconds: float = 30.0
    _code: str | None = field(default=None, init=False)
    _poll_task: asyncio.Task[None] | None = field(default=None, init=False)
    _inflight: set[asyncio.Task[None]] = field(default_factory=set, init=False)

    @property
    def code(self) -> str | None:
        """Return the active sync code."""
        return self._code

    def start(self, code: str) -> str:
        """Persist a sync code and (re)start polling for it.

        Must be called from a running event loop.
        """
        resolved = normalize_sync_code(code)
        if resolved is None:
            raise ValueError("Sync code must be at least 2 characters")
        self.stop()
        self._code = resolved
        self.state.save_sync_code(resolved)
        self._poll_task = asyncio.get_running_loop().create_task(
            self._poll_loop(resolved)
        )
        _logger.info("Sync polling started: code=%s", resolved)
        return resolved

    def stop(self) -> None:
        """Cancel polling for the current code."""
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None
        self._code = None

    def clear(self) -> None:
        """Stop polling and forget the stored sync code."""
        self.stop()
        self.state.save_sync_code(None)

    def notify_changed(self) -> None:
        """Push the full local state after a local mutation."""
        code = self._code
        if code is None:
            return
        records = self.state.load_records()
        products = self.state.load_products()
        self._spawn(self.reconciler.push(code, records, products))

    async def pull_now(self) -> None:
        """Run a single pull for the active code."""
        await self.reconciler.pull(self._code)

    async def drain(self) -> None:
        """Wait for in-flight pulls and pushes to finish."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def close(self) -> None:
        """Cancel polling and wait for outstanding work."""
        task = self._poll_task
        self.stop()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        await self.drain()

    async def _poll_loop(self, code: str) -> None:
        while True:
            self._spawn(self.reconciler.pull(code))
            await asyncio.sleep(self.poll_interval_seconds)

    def _spawn(self, coro) -> None:  # type: ignore[no-untyped-def]
        task = asyncio.get_running_loop().create_task(coro)
        self._inflight.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Sync task failed", exc_info=exc)

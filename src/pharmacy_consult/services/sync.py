"""Pull/push reconciliation with the shared remote blob store.

Records merge additively (union by id, local copy wins); the catalog is
last-write-wins. Local writes are pushed immediately while remote writes are
only discovered by the next poll, so remote changes can be up to one poll
interval stale.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

import httpx
from pydantic import ValidationError

from pharmacy_consult.adapters.sync_store_client import SyncStoreClient
from pharmacy_consult.codec import (
    MalformedDocumentError,
    SyncBlobDocument,
    product_to_dict,
    record_to_dict,
)
from pharmacy_consult.domain.catalog import Product
from pharmacy_consult.domain.records import ConsultationRecord
from pharmacy_consult.domain.sync import SyncErrorKind, SyncState, SyncStatus
from pharmacy_consult.services.records import merge_records
from pharmacy_consult.services.state import LocalStateService

_logger = logging.getLogger(__name__)

MIN_SYNC_CODE_LENGTH = 2


class Connectivity(Protocol):
    """Reports whether the device currently has network access."""

    def is_online(self) -> bool:
        """Return True when network access is available."""


def normalize_sync_code(code: str | None) -> str | None:
    """Return the trimmed code, or None when it is too short to address a blob."""
    if code is None:
        return None
    trimmed = code.strip()
    if len(trimmed) < MIN_SYNC_CODE_LENGTH:
        return None
    return trimmed


@dataclass(frozen=True)
class InboundPayload:
    """Decoded remote blob."""

    records: list[ConsultationRecord]
    products: list[Product]


def parse_payload(raw: object) -> InboundPayload:
    """Decode a remote blob; raises ValidationError on any bad shape."""
    document = SyncBlobDocument.model_validate(raw)
    return InboundPayload(
        records=[item.to_domain() for item in document.records],
        products=[item.to_domain() for item in document.products],
    )


def build_payload(
    records: list[ConsultationRecord], products: list[Product], timestamp_ms: int
) -> dict[str, object]:
    """Build the full-state blob written on every push."""
    return {
        "records": [record_to_dict(item) for item in records],
        "products": [product_to_dict(item) for item in products],
        "timestamp": timestamp_ms,
    }


@dataclass
class SyncReconciler:
    """Runs individual pull and push attempts and tracks sync status."""

    client: SyncStoreClient
    state: LocalStateService
    connectivity: Connectivity
    pull_timeout_seconds: float = 5.0
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))
    _status: SyncState = field(default_factory=SyncState, init=False)

    @property
    def status(self) -> SyncState:
        """Return the latest sync status."""
        return self._status

    async def pull(self, code: str | None) -> None:
        """Fetch the remote blob and merge it into local state.

        Never raises for transport, payload or local document problems; the
        outcome is reported through ``status``. Local state is untouched
        unless the whole payload decodes. The fetch is cancelled once
        ``pull_timeout_seconds`` have elapsed in total.
        """
        resolved = normalize_sync_code(code)
        if resolved is None:
            return
        if not self.connectivity.is_online():
            self._set(SyncStatus.OFFLINE)
            return

        self._set(SyncStatus.SYNCING)
        try:
            async with asyncio.timeout(self.pull_timeout_seconds):
                raw = await self.client.fetch(
                    resolved, timeout=self.pull_timeout_seconds
                )
        except (TimeoutError, httpx.TimeoutException):
            self._fail(SyncErrorKind.TIMEOUT, "pull", resolved)
            return
        except httpx.HTTPStatusError as exc:
            self._fail(
                SyncErrorKind.REMOTE_REJECTED,
                "pull",
                resolved,
                exc.response.status_code,
            )
            return
        except httpx.HTTPError:
            self._fail(SyncErrorKind.NETWORK, "pull", resolved)
            return
        except ValueError:
            self._fail(SyncErrorKind.MALFORMED_RESPONSE, "pull", resolved)
            return

        try:
            inbound = parse_payload(raw)
        except ValidationError as exc:
            _logger.warning(
                "Sync pull payload rejected: errors=%s", exc.error_count()
            )
            self._fail(SyncErrorKind.MALFORMED_RESPONSE, "pull", resolved)
            return

        try:
            local_records = self.state.load_records()
            merged = merge_records(local_records, inbound.records)
            self.state.save_records(merged)
            if inbound.products:
                self.state.save_products(inbound.products)
        except MalformedDocumentError:
            _logger.exception("Local records unreadable during pull")
            self._fail(SyncErrorKind.LOCAL_STATE, "pull", resolved)
            return
        self._set(SyncStatus.CONNECTED, synced=True)
        _logger.info(
            "Sync pull ok: code=%s inbound=%s added=%s products_replaced=%s",
            resolved,
            len(inbound.records),
            len(merged) - len(local_records),
            bool(inbound.products),
        )

    async def push(
        self,
        code: str | None,
        records: list[ConsultationRecord],
        products: list[Product],
    ) -> None:
        """Overwrite the remote blob with the full local state.

        Best effort: skipped without a usable code or network, and failures
        only update ``status``.
        """
        resolved = normalize_sync_code(code)
        if resolved is None:
            return
        if not self.connectivity.is_online():
            self._set(SyncStatus.OFFLINE)
            return

        self._set(SyncStatus.SYNCING)
        payload = build_payload(records, products, int(time.time() * 1000))
        try:
            await self.client.store(resolved, payload)
        except httpx.TimeoutException:
            self._fail(SyncErrorKind.TIMEOUT, "push", resolved)
            return
        except httpx.HTTPStatusError as exc:
            self._fail(
                SyncErrorKind.REMOTE_REJECTED,
                "push",
                resolved,
                exc.response.status_code,
            )
            return
        except httpx.HTTPError:
            self._fail(SyncErrorKind.NETWORK, "push", resolved)
            return
        self._set(SyncStatus.CONNECTED, synced=True)
        _logger.info(
            "Sync push ok: code=%s records=%s products=%s",
            resolved,
            len(records),
            len(products),
        )

    def _set(self, status: SyncStatus, *, synced: bool = False) -> None:
        last_synced_at = self.clock() if synced else self._status.last_synced_at
        self._status = SyncState(status=status, last_synced_at=last_synced_at)

    def _fail(
        self,
        kind: SyncErrorKind,
        action: str,
        code: str,
        status_code: int | None = None,
    ) -> None:
        _logger.warning(
            "Sync %s failed: code=%s reason=%s status=%s",
            action,
            code,
            kind.value,
            status_code if status_code is not None else "n/a",
        )
        self._status = SyncState(
            status=SyncStatus.ERROR,
            last_synced_at=self._status.last_synced_at,
            last_error=kind,
        )

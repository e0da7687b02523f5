"""HTTP client for the shared remote blob store."""

import json
import time
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx


class SyncStoreClient(Protocol):
    """Interface for reading and overwriting the blob addressed by a sync code."""

    async def fetch(self, code: str, timeout: float) -> object | None:
        """Return the decoded JSON blob, or None when the body is empty."""

    async def store(self, code: str, payload: dict[str, object]) -> None:
        """Overwrite the blob with ``payload``."""


@dataclass
class HttpxSyncStoreClient(SyncStoreClient):
    """Remote blob store client using httpx."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxSyncStoreClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    def _url(self, code: str) -> str:
        return f"{self.base_url}/{quote(code, safe='')}"

    async def fetch(self, code: str, timeout: float) -> object | None:
        """GET the blob; the ``t`` query parameter defeats upstream caching."""
        response = await self.http_client.get(
            self._url(code),
            params={"t": int(time.time() * 1000)},
            timeout=timeout,
        )
        response.raise_for_status()
        if not response.content.strip():
            return None
        return response.json()

    async def store(self, code: str, payload: dict[str, object]) -> None:
        """POST the full payload as text/plain to avoid a CORS preflight."""
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        response = await self.http_client.post(
            self._url(code),
            content=body,
            headers={"Content-Type": "text/plain;charset=UTF-8"},
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

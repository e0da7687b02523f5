"""Domain models for remote sync status."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SyncStatus(Enum):
    """Sync status state machine."""

    IDLE = "idle"
    SYNCING = "syncing"
    CONNECTED = "connected"
    ERROR = "error"
    OFFLINE = "offline"


class SyncErrorKind(Enum):
    """Reason a sync attempt ended in the error state."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    REMOTE_REJECTED = "remote_rejected"
    MALFORMED_RESPONSE = "malformed_response"
    LOCAL_STATE = "local_state"


@dataclass(frozen=True)
class SyncState:
    """Snapshot of the current sync status."""

    status: SyncStatus = SyncStatus.IDLE
    last_synced_at: datetime | None = None
    last_error: SyncErrorKind | None = None

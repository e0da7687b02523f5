"""Legal retention window for consultation records."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from pharmacy_consult.domain.records import ConsultationRecord
from pharmacy_consult.services.records import record_datetime
from pharmacy_consult.services.state import LocalStateService

_logger = logging.getLogger(__name__)


def retention_cutoff(now: datetime, years: int) -> datetime:
    """Return the instant ``years`` calendar years before ``now``."""
    try:
        return now.replace(year=now.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year.
        return now.replace(year=now.year - years, day=28)


def purge_expired(
    records: list[ConsultationRecord], now: datetime, years: int
) -> list[ConsultationRecord]:
    """Return records dated strictly after the retention cutoff."""
    cutoff = retention_cutoff(now, years)
    return [record for record in records if record_datetime(record) > cutoff]


@dataclass
class RetentionService:
    """Drops records older than the retention window from local state."""

    state: LocalStateService
    years: int = 3
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))

    def purge(self) -> int:
        """Remove expired records and return how many were dropped."""
        records = self.state.load_records()
        kept = purge_expired(records, self.clock(), self.years)
        removed = len(records) - len(kept)
        if removed:
            self.state.save_records(kept)
            _logger.info("Retention purge removed %s records", removed)
        return removed

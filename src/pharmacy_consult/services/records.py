"""Record set operations: ordering and additive merge."""

from collections.abc import Iterable
from datetime import UTC, datetime

from pharmacy_consult.domain.records import ConsultationRecord


def record_datetime(record: ConsultationRecord) -> datetime:
    """Parse a record date as an aware datetime; unparsable dates sort oldest."""
    try:
        parsed = datetime.fromisoformat(record.date)
    except ValueError:
        return datetime.min.replace(tzinfo=UTC)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def sort_records(records: Iterable[ConsultationRecord]) -> list[ConsultationRecord]:
    """Return records newest first."""
    return sorted(records, key=record_datetime, reverse=True)


def merge_records(
    local: Iterable[ConsultationRecord], inbound: Iterable[ConsultationRecord]
) -> list[ConsultationRecord]:
    """Union two record sets by id, keeping the local copy on conflicts.

    Records are only ever added: nothing local is overwritten or removed.
    Duplicate ids inside either input collapse to their first occurrence.
    """
    merged: dict[str, ConsultationRecord] = {}
    for record in local:
        merged.setdefault(record.id, record)
    for record in inbound:
        merged.setdefault(record.id, record)
    return sort_records(merged.values())

"""Saving consultation records."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

from pharmacy_consult.domain.records import (
    DEFAULT_COUNSELING_METHOD,
    DEFAULT_DISPENSING_DAYS,
    UNASSIGNED_PHARMACIST,
    ConsultationRecord,
    PurchaseStatus,
)
from pharmacy_consult.domain.survey import SurveyData
from pharmacy_consult.services.records import sort_records
from pharmacy_consult.services.selection import Selection, resolve, total_price
from pharmacy_consult.services.state import ChangeNotifier, LocalStateService

_logger = logging.getLogger(__name__)


class EmptySelectionError(ValueError):
    """Raised when saving a consultation with no products selected."""


@dataclass
class ConsultationService:
    """Builds, stores and publishes consultation records."""

    state: LocalStateService
    notifier: ChangeNotifier
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))

    def list_records(self) -> list[ConsultationRecord]:
        """Return records newest first."""
        return sort_records(self.state.load_records())

    def get_record(self, record_id: str) -> ConsultationRecord | None:
        """Return a record by id, if present."""
        for record in self.state.load_records():
            if record.id == record_id:
                return record
        return None

    def current_pharmacist_name(self) -> str:
        """Return the name of the pharmacist on duty."""
        config = self.state.load_config()
        for pharmacist in self.state.load_pharmacists():
            if pharmacist.id == config.current_pharmacist_id:
                return pharmacist.name
        return UNASSIGNED_PHARMACIST

    def save(  # noqa: PLR0913
        self,
        survey: SurveyData,
        selection: Selection,
        recommended_names: tuple[str, ...] = (),
        purchase_status: PurchaseStatus = PurchaseStatus.PURCHASED,
        counseling_method: str = DEFAULT_COUNSELING_METHOD,
        dispensing_days: int = DEFAULT_DISPENSING_DAYS,
    ) -> ConsultationRecord:
        """Snapshot the selected products into a new record and persist it."""
        selected = resolve(selection, self.state.load_products())
        if not selected:
            raise EmptySelectionError("No products selected")

        now = self.clock()
        pharmacist_name = self.current_pharmacist_name()
        record = ConsultationRecord(
            id=f"RE-{int(now.timestamp() * 1000)}-{uuid4().hex[:8]}",
            date=now.isoformat(),
            pharmacist_name=pharmacist_name,
            customer_name=survey.customer_name or "고객",
            survey=replace(survey, pharmacist_name=pharmacist_name),
            recommended_product_names=tuple(recommended_names),
            selected_products=tuple(replace(product) for product in selected),
            total_price=total_price(selected),
            purchase_status=purchase_status,
            counseling_method=counseling_method,
            dispensing_days=dispensing_days,
        )
        self.state.save_records([record, *self.state.load_records()])
        self.notifier.notify_changed()
        _logger.info(
            "Consultation saved: id=%s products=%s total=%s",
            record.id,
            len(selected),
            record.total_price,
        )
        return record

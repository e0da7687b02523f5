"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from pharmacy_consult.adapters.connectivity import DeviceConnectivity
from pharmacy_consult.adapters.sync_store_client import SyncStoreClient
from pharmacy_consult.codec import record_to_dict
from pharmacy_consult.config import Settings
from pharmacy_consult.containers import AppContainer
from pharmacy_consult.domain.catalog import IngredientInfo, Product
from pharmacy_consult.domain.records import ConsultationRecord
from pharmacy_consult.domain.survey import PregnancyStage, SurveyData
from pharmacy_consult.services.catalog import CatalogService
from pharmacy_consult.services.consultations import ConsultationService
from pharmacy_consult.services.retention import RetentionService
from pharmacy_consult.services.scheduler import SyncScheduler
from pharmacy_consult.services.state import ChangeNotifier, LocalStateService, LocalStore
from pharmacy_consult.services.sync import SyncReconciler

FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=UTC)


@dataclass
class InMemoryLocalStore(LocalStore):
    """In-memory key/value store for tests."""

    documents: dict[str, object] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, key: str) -> object | None:
        return copy.deepcopy(self.documents.get(key))

    def write(self, key: str, value: object) -> None:
        self.writes.append(key)
        self.documents[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self.documents.pop(key, None)


@dataclass
class RecordingNotifier(ChangeNotifier):
    """Counts change notifications."""

    calls: int = 0

    def notify_changed(self) -> None:
        self.calls += 1


@dataclass
class FakeSyncStoreClient(SyncStoreClient):
    """Remote blob store held in memory."""

    blobs: dict[str, object] = field(default_factory=dict)
    fetches: list[str] = field(default_factory=list)
    stored: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    fetch_error: Exception | None = None
    store_error: Exception | None = None

    async def fetch(self, code: str, timeout: float) -> object | None:
        self.fetches.append(code)
        if self.fetch_error is not None:
            raise self.fetch_error
        return copy.deepcopy(self.blobs.get(code))

    async def store(self, code: str, payload: dict[str, object]) -> None:
        if self.store_error is not None:
            raise self.store_error
        self.stored.append((code, payload))
        self.blobs[code] = copy.deepcopy(payload)


def make_survey(
    stage: PregnancyStage = PregnancyStage.MID, **overrides: object
) -> SurveyData:
    return SurveyData(customer_name="김하늘", stage=stage, **overrides)  # type: ignore[arg-type]


def make_product(product_id: str, price: int = 10000, **overrides: object) -> Product:
    fields: dict[str, object] = {
        "name": f"Product {product_id}",
        "ingredients": (IngredientInfo(name="비타민C", amount=100, unit="mg"),),
    }
    fields.update(overrides)
    return Product(id=product_id, price=price, **fields)  # type: ignore[arg-type]


def make_record(
    record_id: str, date: str, total_price: int = 10000
) -> ConsultationRecord:
    return ConsultationRecord(
        id=record_id,
        date=date,
        pharmacist_name="송은주 약사",
        customer_name="김하늘",
        survey=make_survey(),
        recommended_product_names=("철분 24mg",),
        selected_products=(make_product("6-1", price=total_price),),
        total_price=total_price,
    )


def record_blob(
    *records: ConsultationRecord, products: list[dict[str, object]] | None = None
) -> dict[str, object]:
    return {
        "records": [record_to_dict(record) for record in records],
        "products": products or [],
        "timestamp": 1760000000000,
    }


@pytest.fixture
def settings(tmp_path) -> Settings:  # type: ignore[no-untyped-def]
    return Settings(
        admin_token="admin-token",
        sync_base_url="https://sync.test/api",
        data_dir=str(tmp_path / "data"),
        sync_poll_interval_seconds=3600,
    )


@pytest.fixture
def local_store() -> InMemoryLocalStore:
    return InMemoryLocalStore()


@pytest.fixture
def state_service(local_store: InMemoryLocalStore) -> LocalStateService:
    return LocalStateService(local_store)


@pytest.fixture
def sync_client() -> FakeSyncStoreClient:
    return FakeSyncStoreClient()


@pytest.fixture
def connectivity() -> DeviceConnectivity:
    return DeviceConnectivity()


@pytest.fixture
def container(
    settings: Settings,
    state_service: LocalStateService,
    sync_client: FakeSyncStoreClient,
    connectivity: DeviceConnectivity,
) -> AppContainer:
    reconciler = SyncReconciler(
        client=sync_client,
        state=state_service,
        connectivity=connectivity,
        clock=lambda: FIXED_NOW,
    )
    scheduler = SyncScheduler(
        reconciler=reconciler,
        state=state_service,
        poll_interval_seconds=settings.sync_poll_interval_seconds,
    )

    async def close_resources() -> None:
        await scheduler.close()

    return AppContainer(
        settings=settings,
        state_service=state_service,
        connectivity=connectivity,
        sync_reconciler=reconciler,
        sync_scheduler=scheduler,
        catalog_service=CatalogService(state=state_service, notifier=scheduler),
        consultation_service=ConsultationService(
            state=state_service, notifier=scheduler, clock=lambda: FIXED_NOW
        ),
        retention_service=RetentionService(
            state=state_service, clock=lambda: FIXED_NOW
        ),
        close_resources=close_resources,
    )

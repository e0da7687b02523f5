"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pharmacy_consult.adapters.connectivity import DeviceConnectivity
from pharmacy_consult.adapters.json_file_store import JsonFileLocalStore
from pharmacy_consult.adapters.sync_store_client import HttpxSyncStoreClient
from pharmacy_consult.config import Settings
from pharmacy_consult.services.catalog import CatalogService
from pharmacy_consult.services.consultations import ConsultationService
from pharmacy_consult.services.retention import RetentionService
from pharmacy_consult.services.scheduler import SyncScheduler
from pharmacy_consult.services.state import LocalStateService
from pharmacy_consult.services.sync import SyncReconciler


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    state_service: LocalStateService
    connectivity: DeviceConnectivity
    sync_reconciler: SyncReconciler
    sync_scheduler: SyncScheduler
    catalog_service: CatalogService
    consultation_service: ConsultationService
    retention_service: RetentionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    state_service = LocalStateService(JsonFileLocalStore.create(resolved_settings.data_dir))
    connectivity = DeviceConnectivity()
    sync_client = HttpxSyncStoreClient.create(resolved_settings.sync_base_url)
    sync_reconciler = SyncReconciler(
        client=sync_client,
        state=state_service,
        connectivity=connectivity,
        pull_timeout_seconds=resolved_settings.sync_pull_timeout_seconds,
    )
    sync_scheduler = SyncScheduler(
        reconciler=sync_reconciler,
        state=state_service,
        poll_interval_seconds=resolved_settings.sync_poll_interval_seconds,
    )
    catalog_service = CatalogService(state=state_service, notifier=sync_scheduler)
    consultation_service = ConsultationService(
        state=state_service, notifier=sync_scheduler
    )
    retention_service = RetentionService(
        state=state_service, years=resolved_settings.record_retention_years
    )

    async def close_resources() -> None:
        await sync_scheduler.close()
        await sync_client.close()

    return AppContainer(
        settings=resolved_settings,
        state_service=state_service,
        connectivity=connectivity,
        sync_reconciler=sync_reconciler,
        sync_scheduler=sync_scheduler,
        catalog_service=catalog_service,
        consultation_service=consultation_service,
        retention_service=retention_service,
        close_resources=close_resources,
    )

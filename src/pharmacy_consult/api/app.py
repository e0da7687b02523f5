"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from pharmacy_consult.api.admin import router as admin_router
from pharmacy_consult.api.models import (
    ConnectivityPayload,
    ConsultationRequest,
    SyncCodePayload,
)
from pharmacy_consult.app_logging import configure_logging
from pharmacy_consult.codec import (
    MalformedDocumentError,
    SurveyDocument,
    product_to_dict,
    record_to_dict,
)
from pharmacy_consult.containers import AppContainer
from pharmacy_consult.domain.records import (
    DEFAULT_COUNSELING_METHOD,
    DEFAULT_DISPENSING_DAYS,
)
from pharmacy_consult.domain.sync import SyncState
from pharmacy_consult.services.consultations import EmptySelectionError
from pharmacy_consult.services.recommendation import recommend
from pharmacy_consult.services.selection import Selection, resolve


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            state_container.retention_service.purge()
        except MalformedDocumentError:
            logger.exception("Failed to apply record retention")
        stored_code = state_container.state_service.load_sync_code()
        if stored_code is not None:
            state_container.sync_scheduler.start(stored_code)
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/recommendations")
    async def create_recommendation(
        payload: SurveyDocument, request: Request
    ) -> dict[str, object]:
        """Run the rule engine and resolve its picks against the catalog."""
        state_container: AppContainer = request.app.state.container
        survey = payload.to_domain()
        result = recommend(survey)
        catalog = state_container.catalog_service.list_products()
        selected = resolve(Selection.from_result(result), catalog)
        return {
            **result.to_payload(),
            "selectedProducts": [product_to_dict(item) for item in selected],
        }

    @app.post("/consultations", status_code=status.HTTP_201_CREATED)
    async def save_consultation(
        payload: ConsultationRequest, request: Request
    ) -> dict[str, object]:
        """Save a consultation record and push it to the sync store."""
        state_container: AppContainer = request.app.state.container
        survey = payload.survey.to_domain()
        selection = Selection(
            product_ids=tuple(payload.selected_ids), omega_id=payload.omega_id
        )
        try:
            record = state_container.consultation_service.save(
                survey,
                selection,
                recommended_names=tuple(payload.recommended_names),
                purchase_status=payload.purchase_status,
                counseling_method=payload.counseling_method or DEFAULT_COUNSELING_METHOD,
                dispensing_days=payload.dispensing_days or DEFAULT_DISPENSING_DAYS,
            )
        except EmptySelectionError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Select at least one product",
            ) from exc
        return {"record": record_to_dict(record)}

    @app.get("/consultations")
    async def list_consultations(request: Request) -> dict[str, object]:
        """Return consultation records, newest first."""
        state_container: AppContainer = request.app.state.container
        records = state_container.consultation_service.list_records()
        return {"records": [record_to_dict(item) for item in records]}

    @app.get("/consultations/{record_id}")
    async def get_consultation(record_id: str, request: Request) -> dict[str, object]:
        """Return a single consultation record."""
        state_container: AppContainer = request.app.state.container
        record = state_container.consultation_service.get_record(record_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"record": record_to_dict(record)}

    @app.get("/products")
    async def list_products(
        request: Request, include_inactive: bool = False
    ) -> dict[str, object]:
        """Return catalog products shown on the selection screen."""
        state_container: AppContainer = request.app.state.container
        products = state_container.catalog_service.list_products(
            active_only=not include_inactive
        )
        return {"products": [product_to_dict(item) for item in products]}

    @app.put("/sync/code")
    async def set_sync_code(
        payload: SyncCodePayload, request: Request
    ) -> dict[str, object]:
        """Set the sync code; pulls now and then on every poll interval."""
        state_container: AppContainer = request.app.state.container
        try:
            code = state_container.sync_scheduler.start(payload.code)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return {"code": code}

    @app.delete("/sync/code")
    async def clear_sync_code(request: Request) -> dict[str, str]:
        """Stop syncing and forget the code."""
        state_container: AppContainer = request.app.state.container
        state_container.sync_scheduler.clear()
        return {"status": "ok"}

    @app.post("/sync/pull")
    async def pull_now(request: Request) -> dict[str, object]:
        """Pull immediately for the active code."""
        state_container: AppContainer = request.app.state.container
        await state_container.sync_scheduler.pull_now()
        return _status_payload(state_container.sync_reconciler.status)

    @app.get("/sync/status")
    async def sync_status(request: Request) -> dict[str, object]:
        """Return the current sync status."""
        state_container: AppContainer = request.app.state.container
        return {
            "code": state_container.sync_scheduler.code,
            **_status_payload(state_container.sync_reconciler.status),
        }

    @app.put("/sync/connectivity")
    async def set_connectivity(
        payload: ConnectivityPayload, request: Request
    ) -> dict[str, bool]:
        """Record the device's network state."""
        state_container: AppContainer = request.app.state.container
        state_container.connectivity.set_online(payload.online)
        return {"online": payload.online}

    return app


def _status_payload(state: SyncState) -> dict[str, object]:
    return {
        "status": state.status.value,
        "lastSyncedAt": state.last_synced_at.isoformat()
        if state.last_synced_at
        else None,
        "lastError": state.last_error.value if state.last_error else None,
    }

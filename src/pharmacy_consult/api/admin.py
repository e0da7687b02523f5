"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from pharmacy_consult.api.models import ActivePayload, PharmacistsPayload  # noqa: TC001
from pharmacy_consult.codec import (  # noqa: TC001
    ConfigDocument,
    ProductDocument,
    config_to_dict,
    pharmacist_to_dict,
    product_to_dict,
)
from pharmacy_consult.services.catalog import DuplicateProductError, ProductNotFoundError

if TYPE_CHECKING:
    from pharmacy_consult.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post(
    "/products",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(payload: ProductDocument, request: Request) -> dict[str, object]:
    """Add a product to the catalog."""
    container: AppContainer = request.app.state.container
    try:
        product = container.catalog_service.create_product(payload.to_domain())
    except DuplicateProductError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT) from exc
    return {"product": product_to_dict(product)}


@router.put("/products/{product_id}", dependencies=[Depends(require_admin)])
async def update_product(
    product_id: str, payload: ProductDocument, request: Request
) -> dict[str, object]:
    """Replace a catalog product."""
    container: AppContainer = request.app.state.container
    if payload.id != product_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Product id does not match path",
        )
    try:
        product = container.catalog_service.update_product(payload.to_domain())
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {"product": product_to_dict(product)}


@router.patch("/products/{product_id}/active", dependencies=[Depends(require_admin)])
async def set_product_active(
    product_id: str, payload: ActivePayload, request: Request
) -> dict[str, object]:
    """Show or hide a product on the selection screen."""
    container: AppContainer = request.app.state.container
    try:
        product = container.catalog_service.set_active(product_id, payload.is_active)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {"product": product_to_dict(product)}


@router.delete("/products/{product_id}", dependencies=[Depends(require_admin)])
async def delete_product(product_id: str, request: Request) -> dict[str, str]:
    """Remove a product from the catalog."""
    container: AppContainer = request.app.state.container
    try:
        container.catalog_service.delete_product(product_id)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {"status": "ok"}


@router.get("/config", dependencies=[Depends(require_admin)])
async def get_config(request: Request) -> dict[str, object]:
    """Return pharmacy settings and registered pharmacists."""
    container: AppContainer = request.app.state.container
    state = container.state_service
    return {
        "config": config_to_dict(state.load_config()),
        "pharmacists": [pharmacist_to_dict(item) for item in state.load_pharmacists()],
    }


@router.put("/config", dependencies=[Depends(require_admin)])
async def update_config(payload: ConfigDocument, request: Request) -> dict[str, object]:
    """Replace pharmacy settings."""
    container: AppContainer = request.app.state.container
    config = payload.to_domain()
    container.state_service.save_config(config)
    return {"config": config_to_dict(config)}


@router.put("/pharmacists", dependencies=[Depends(require_admin)])
async def update_pharmacists(
    payload: PharmacistsPayload, request: Request
) -> dict[str, object]:
    """Replace the registered pharmacists."""
    container: AppContainer = request.app.state.container
    ids = [item.id for item in payload.pharmacists]
    if len(set(ids)) != len(ids):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Pharmacist ids must be unique",
        )
    pharmacists = [item.to_domain() for item in payload.pharmacists]
    container.state_service.save_pharmacists(pharmacists)
    return {"pharmacists": [pharmacist_to_dict(item) for item in pharmacists]}


@router.post("/retention/purge", dependencies=[Depends(require_admin)])
async def purge_records(request: Request) -> dict[str, int]:
    """Drop records older than the retention window."""
    container: AppContainer = request.app.state.container
    return {"removed": container.retention_service.purge()}

"""Resolve engine output against the catalog and apply staff edits."""

from dataclasses import dataclass

from pharmacy_consult.domain.catalog import Product
from pharmacy_consult.domain.recommendation import RecommendationResult


@dataclass(frozen=True)
class Selection:
    """Staff-editable product selection; the omega-3 slot holds at most one id."""

    product_ids: tuple[str, ...] = ()
    omega_id: str = ""

    @classmethod
    def from_result(cls, result: RecommendationResult) -> "Selection":
        """Start from the engine's default picks."""
        return cls(product_ids=result.auto_ids, omega_id=result.auto_omega_id)

    def all_ids(self) -> tuple[str, ...]:
        """Return every selected id, omega-3 slot last."""
        if self.omega_id:
            return (*self.product_ids, self.omega_id)
        return self.product_ids


def toggle(selection: Selection, product: Product) -> Selection:
    """Toggle a product, keeping at most one omega-3 product selected."""
    if product.is_omega3:
        omega_id = "" if selection.omega_id == product.id else product.id
        return Selection(product_ids=selection.product_ids, omega_id=omega_id)
    if product.id in selection.product_ids:
        remaining = tuple(pid for pid in selection.product_ids if pid != product.id)
        return Selection(product_ids=remaining, omega_id=selection.omega_id)
    return Selection(
        product_ids=(*selection.product_ids, product.id),
        omega_id=selection.omega_id,
    )


def resolve(selection: Selection, catalog: list[Product]) -> list[Product]:
    """Return active catalog products for the selection, in catalog order.

    Ids missing from the catalog or pointing at inactive products are skipped.
    Omega-3 products are only taken from the omega-3 slot, so at most one is
    ever returned.
    """
    wanted = set(selection.product_ids)
    return [
        product
        for product in catalog
        if product.is_active
        and (
            product.id == selection.omega_id
            or (product.id in wanted and not product.is_omega3)
        )
    ]


def total_price(products: list[Product]) -> int:
    """Sum product prices."""
    return sum(product.price for product in products)

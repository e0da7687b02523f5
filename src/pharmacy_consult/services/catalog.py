"""Catalog administration."""

from dataclasses import dataclass, replace

from pharmacy_consult.domain.catalog import Product
from pharmacy_consult.services.state import ChangeNotifier, LocalStateService


class ProductNotFoundError(KeyError):
    """Raised when a product id is not in the catalog."""


class DuplicateProductError(ValueError):
    """Raised when creating a product whose id already exists."""


@dataclass
class CatalogService:
    """Edits the local catalog and publishes each change."""

    state: LocalStateService
    notifier: ChangeNotifier

    def list_products(self, active_only: bool = False) -> list[Product]:
        """Return catalog products, optionally only active ones."""
        products = self.state.load_products()
        if active_only:
            return [product for product in products if product.is_active]
        return products

    def get_product(self, product_id: str) -> Product:
        """Return a product by id."""
        for product in self.state.load_products():
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def create_product(self, product: Product) -> Product:
        """Append a new product."""
        products = self.state.load_products()
        if any(existing.id == product.id for existing in products):
            raise DuplicateProductError(product.id)
        self._commit([*products, product])
        return product

    def update_product(self, product: Product) -> Product:
        """Replace the product with the same id."""
        products = self.state.load_products()
        index = _index_of(products, product.id)
        products[index] = product
        self._commit(products)
        return product

    def set_active(self, product_id: str, is_active: bool) -> Product:
        """Show or hide a product on the selection screen."""
        products = self.state.load_products()
        index = _index_of(products, product_id)
        products[index] = replace(products[index], is_active=is_active)
        self._commit(products)
        return products[index]

    def delete_product(self, product_id: str) -> None:
        """Remove a product; past records keep their own snapshots."""
        products = self.state.load_products()
        index = _index_of(products, product_id)
        del products[index]
        self._commit(products)

    def _commit(self, products: list[Product]) -> None:
        self.state.save_products(products)
        self.notifier.notify_changed()


def _index_of(products: list[Product], product_id: str) -> int:
    for index, product in enumerate(products):
        if product.id == product_id:
            return index
    raise ProductNotFoundError(product_id)

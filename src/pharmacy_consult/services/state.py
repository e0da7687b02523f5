"""Typed access to the device-local key/value store."""

from dataclasses import dataclass
from typing import Protocol

from pharmacy_consult.catalog_seed import INITIAL_PRODUCTS
from pharmacy_consult.codec import (
    MalformedDocumentError,
    config_from_dict,
    config_to_dict,
    pharmacist_from_dict,
    pharmacist_to_dict,
    product_from_dict,
    product_to_dict,
    record_from_dict,
    record_to_dict,
)
from pharmacy_consult.domain.catalog import Product
from pharmacy_consult.domain.records import ConsultationRecord, Pharmacist, PharmacyConfig

PRODUCTS_KEY = "i-mom-products"
RECORDS_KEY = "i-mom-records"
SYNC_CODE_KEY = "i-mom-sync-code"
CONFIG_KEY = "i-mom-config"
PHARMACISTS_KEY = "i-mom-pharmacists"

DEFAULT_PHARMACISTS = (Pharmacist(id="1", name="송은주 약사"),)


class ChangeNotifier(Protocol):
    """Receives a signal after every local mutation to records or catalog."""

    def notify_changed(self) -> None:
        """Handle a local state change."""


class LocalStore(Protocol):
    """Opaque key/value store holding JSON-compatible documents."""

    def read(self, key: str) -> object | None:
        """Return the stored document for a key, if any."""

    def write(self, key: str, value: object) -> None:
        """Replace the stored document for a key."""

    def delete(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class LocalStateService:
    """Load and persist catalog, records, sync code and pharmacy settings."""

    store: LocalStore

    def load_products(self) -> list[Product]:
        """Return the catalog, seeding the default catalog on first run."""
        raw = self.store.read(PRODUCTS_KEY)
        if raw is None:
            products = list(INITIAL_PRODUCTS)
            self.save_products(products)
            return products
        return [product_from_dict(item) for item in _as_list(raw, PRODUCTS_KEY)]

    def save_products(self, products: list[Product]) -> None:
        """Persist the whole catalog."""
        self.store.write(PRODUCTS_KEY, [product_to_dict(item) for item in products])

    def load_records(self) -> list[ConsultationRecord]:
        """Return stored consultation records."""
        raw = self.store.read(RECORDS_KEY)
        if raw is None:
            return []
        return [record_from_dict(item) for item in _as_list(raw, RECORDS_KEY)]

    def save_records(self, records: list[ConsultationRecord]) -> None:
        """Persist the whole record set."""
        self.store.write(RECORDS_KEY, [record_to_dict(item) for item in records])

    def load_sync_code(self) -> str | None:
        """Return the stored sync code, if set."""
        raw = self.store.read(SYNC_CODE_KEY)
        if not isinstance(raw, str) or not raw.strip():
            return None
        return raw.strip()

    def save_sync_code(self, code: str | None) -> None:
        """Persist or clear the sync code."""
        if code is None:
            self.store.delete(SYNC_CODE_KEY)
            return
        self.store.write(SYNC_CODE_KEY, code)

    def load_config(self) -> PharmacyConfig:
        """Return pharmacy settings merged over defaults."""
        raw = self.store.read(CONFIG_KEY)
        if raw is None:
            return PharmacyConfig()
        return config_from_dict(raw)

    def save_config(self, config: PharmacyConfig) -> None:
        """Persist pharmacy settings."""
        self.store.write(CONFIG_KEY, config_to_dict(config))

    def load_pharmacists(self) -> list[Pharmacist]:
        """Return registered pharmacists."""
        raw = self.store.read(PHARMACISTS_KEY)
        if raw is None:
            return list(DEFAULT_PHARMACISTS)
        return [pharmacist_from_dict(item) for item in _as_list(raw, PHARMACISTS_KEY)]

    def save_pharmacists(self, pharmacists: list[Pharmacist]) -> None:
        """Persist registered pharmacists."""
        self.store.write(
            PHARMACISTS_KEY, [pharmacist_to_dict(item) for item in pharmacists]
        )


def _as_list(raw: object, key: str) -> list[object]:
    if not isinstance(raw, list):
        raise MalformedDocumentError(f"Stored {key} is not a list")
    return raw

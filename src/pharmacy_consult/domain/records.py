"""Domain models for consultation records and pharmacy settings."""

from dataclasses import dataclass
from enum import Enum

from pharmacy_consult.domain.catalog import Product
from pharmacy_consult.domain.survey import SurveyData

DEFAULT_COUNSELING_METHOD = "태블릿 기반 대면 상담"
DEFAULT_DISPENSING_DAYS = 30
UNASSIGNED_PHARMACIST = "약사 미지정"


class PurchaseStatus(Enum):
    """Outcome of a consultation."""

    PURCHASED = "구매 완료"
    CONSULT_ONLY = "상담만 진행"


@dataclass(frozen=True)
class ConsultationRecord:
    """Legally retained record of a single consultation."""

    id: str
    date: str
    pharmacist_name: str
    customer_name: str
    survey: SurveyData
    recommended_product_names: tuple[str, ...]
    selected_products: tuple[Product, ...]
    total_price: int
    purchase_status: PurchaseStatus = PurchaseStatus.PURCHASED
    counseling_method: str = DEFAULT_COUNSELING_METHOD
    dispensing_days: int = DEFAULT_DISPENSING_DAYS


@dataclass(frozen=True)
class Pharmacist:
    """Pharmacist who may run consultations."""

    id: str
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class PharmacyConfig:
    """Pharmacy-level settings shown on printed records."""

    pharmacy_name: str = "아이맘약국"
    current_pharmacist_id: str = "1"
    business_address: str = ""
    manager_name: str = ""

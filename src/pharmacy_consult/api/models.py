"""Pydantic request models for the consultation API."""

from pydantic import BaseModel, ConfigDict, Field

from pharmacy_consult.codec import PharmacistDocument, SurveyDocument
from pharmacy_consult.domain.records import PurchaseStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ConsultationRequest(_CamelModel):
    """Staff-confirmed consultation to save."""

    survey: SurveyDocument
    selected_ids: list[str] = Field(default_factory=list, alias="selectedIds")
    omega_id: str = Field(default="", alias="omegaId")
    recommended_names: list[str] = Field(default_factory=list, alias="recommendedNames")
    purchase_status: PurchaseStatus = Field(
        default=PurchaseStatus.PURCHASED, alias="purchaseStatus"
    )
    counseling_method: str | None = Field(default=None, alias="counselingMethod")
    dispensing_days: int | None = Field(default=None, alias="dispensingDays", ge=1)


class ActivePayload(_CamelModel):
    """Product visibility toggle."""

    is_active: bool = Field(alias="isActive")


class PharmacistsPayload(BaseModel):
    """Full list of registered pharmacists."""

    pharmacists: list[PharmacistDocument] = Field(min_length=1)


class SyncCodePayload(BaseModel):
    """Sync code to poll and push to."""

    code: str


class ConnectivityPayload(BaseModel):
    """Device network state."""

    online: bool

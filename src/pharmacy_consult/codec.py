"""Pydantic documents for the camelCase JSON stored locally and in the remote blob.

Records, products and settings use the field names the tablet app has always
written (``customerName``, ``selectedProducts``...). The same documents
validate API request bodies, local store reads and remote payloads.
"""

from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pharmacy_consult.domain.catalog import (
    IngredientInfo,
    PillType,
    Product,
    StorageRequirement,
)
from pharmacy_consult.domain.records import (
    DEFAULT_COUNSELING_METHOD,
    DEFAULT_DISPENSING_DAYS,
    ConsultationRecord,
    Pharmacist,
    PharmacyConfig,
    PurchaseStatus,
)
from pharmacy_consult.domain.survey import (
    AgeGroup,
    BloodTestResult,
    CurrentSupplements,
    HbLevel,
    PregnancyStage,
    Symptom,
    SurveyData,
)

_DEFAULT_CONFIG = PharmacyConfig()


class MalformedDocumentError(ValueError):
    """Raised when a stored document has an unexpected shape."""


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    def to_json_dict(self) -> dict[str, object]:
        """Dump with camelCase keys and enum values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class IngredientDocument(_Document):
    """Single ingredient line on a product label."""

    name: str
    amount: float = 0
    unit: str = ""


class ProductDocument(_Document):
    """Catalog product."""

    id: str
    name: str
    price: int = Field(default=0, ge=0)
    images: list[str] = Field(default_factory=list)
    storage: StorageRequirement = StorageRequirement.AMBIENT
    usage: str = ""
    ingredients: list[IngredientDocument] = Field(default_factory=list)
    is_active: bool = Field(default=True, alias="isActive")
    expiration_date: str = Field(default="", alias="expirationDate")
    pill_type: PillType | None = Field(default=None, alias="pillType")
    description_url: str | None = Field(default=None, alias="descriptionUrl")

    @field_validator("pill_type", "description_url", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        return value or None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductDocument":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            images=list(product.images),
            storage=product.storage,
            usage=product.usage,
            ingredients=[
                IngredientDocument(name=item.name, amount=item.amount, unit=item.unit)
                for item in product.ingredients
            ],
            is_active=product.is_active,
            expiration_date=product.expiration_date,
            pill_type=product.pill_type,
            description_url=product.description_url,
        )

    def to_domain(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            price=self.price,
            ingredients=tuple(
                IngredientInfo(name=item.name, amount=item.amount, unit=item.unit)
                for item in self.ingredients
            ),
            is_active=self.is_active,
            expiration_date=self.expiration_date,
            storage=self.storage,
            pill_type=self.pill_type,
            usage=self.usage,
            images=tuple(self.images),
            description_url=self.description_url,
        )


class CurrentSupplementsDocument(_Document):
    """Nutrient classes the customer already takes."""

    folic_acid: bool = Field(default=False, alias="folicAcid")
    vitamin_d: bool = Field(default=False, alias="vitaminD")
    iron: bool = False
    omega3: bool = False
    cal_mag: bool = Field(default=False, alias="calMag")
    probiotics: bool = False
    prescription_drug: str | None = Field(default=None, alias="prescriptionDrug")
    others: str | None = None
    detected_names: list[str] = Field(default_factory=list, alias="detectedNames")


class SurveyDocument(_Document):
    """Consultation survey; enum fields carry their display values."""

    customer_name: str = Field(default="", alias="customerName")
    phone: str = ""
    email: str = ""
    age_group: AgeGroup = Field(default=AgeGroup.THIRTIES, alias="ageGroup")
    is_over_35: bool = Field(default=False, alias="isOver35")
    address: str | None = None
    stage: PregnancyStage
    current_supplements: CurrentSupplementsDocument = Field(
        default_factory=CurrentSupplementsDocument, alias="currentSupplements"
    )
    vitamin_d_level: BloodTestResult = Field(
        default=BloodTestResult.UNKNOWN, alias="vitaminDLevel"
    )
    hb_level: HbLevel = Field(default=HbLevel.UNKNOWN, alias="hbLevel")
    symptoms: list[Symptom] = Field(default_factory=list)
    notes: str = ""
    pharmacist_name: str = Field(default="", alias="pharmacistName")

    @field_validator("current_supplements", mode="before")
    @classmethod
    def _missing_supplements(cls, value: object) -> object:
        return value or {}

    @classmethod
    def from_domain(cls, survey: SurveyData) -> "SurveyDocument":
        supplements = survey.current_supplements
        return cls(
            customer_name=survey.customer_name,
            phone=survey.phone,
            email=survey.email,
            age_group=survey.age_group,
            is_over_35=survey.is_over_35,
            address=survey.address,
            stage=survey.stage,
            current_supplements=CurrentSupplementsDocument(
                folic_acid=supplements.folic_acid,
                vitamin_d=supplements.vitamin_d,
                iron=supplements.iron,
                omega3=supplements.omega3,
                cal_mag=supplements.cal_mag,
                probiotics=supplements.probiotics,
                prescription_drug=supplements.prescription_drug,
                others=supplements.others,
                detected_names=list(supplements.detected_names),
            ),
            vitamin_d_level=survey.vitamin_d_level,
            hb_level=survey.hb_level,
            # Enum declaration order keeps the stored list stable.
            symptoms=[symptom for symptom in Symptom if symptom in survey.symptoms],
            notes=survey.notes,
            pharmacist_name=survey.pharmacist_name,
        )

    def to_domain(self) -> SurveyData:
        supplements = self.current_supplements
        return SurveyData(
            customer_name=self.customer_name,
            stage=self.stage,
            vitamin_d_level=self.vitamin_d_level,
            hb_level=self.hb_level,
            symptoms=frozenset(self.symptoms),
            is_over_35=self.is_over_35,
            current_supplements=CurrentSupplements(
                folic_acid=supplements.folic_acid,
                vitamin_d=supplements.vitamin_d,
                iron=supplements.iron,
                omega3=supplements.omega3,
                cal_mag=supplements.cal_mag,
                probiotics=supplements.probiotics,
                prescription_drug=supplements.prescription_drug or "",
                others=supplements.others or "",
                detected_names=tuple(supplements.detected_names),
            ),
            phone=self.phone,
            email=self.email,
            age_group=self.age_group,
            address=self.address or None,
            notes=self.notes,
            pharmacist_name=self.pharmacist_name,
        )


class RecordDocument(_Document):
    """Consultation record with its survey and product snapshots."""

    id: str
    date: str
    pharmacist_name: str = Field(default="", alias="pharmacistName")
    customer_name: str = Field(default="", alias="customerName")
    survey_data: SurveyDocument = Field(alias="surveyData")
    recommended_product_names: list[str] = Field(
        default_factory=list, alias="recommendedProductNames"
    )
    selected_products: list[ProductDocument] = Field(
        default_factory=list, alias="selectedProducts"
    )
    total_price: int = Field(default=0, alias="totalPrice")
    purchase_status: PurchaseStatus = Field(
        default=PurchaseStatus.PURCHASED, alias="purchaseStatus"
    )
    counseling_method: str = Field(
        default=DEFAULT_COUNSELING_METHOD, alias="counselingMethod"
    )
    dispensing_days: int = Field(default=DEFAULT_DISPENSING_DAYS, alias="dispensingDays")

    @classmethod
    def from_domain(cls, record: ConsultationRecord) -> "RecordDocument":
        return cls(
            id=record.id,
            date=record.date,
            pharmacist_name=record.pharmacist_name,
            customer_name=record.customer_name,
            survey_data=SurveyDocument.from_domain(record.survey),
            recommended_product_names=list(record.recommended_product_names),
            selected_products=[
                ProductDocument.from_domain(item) for item in record.selected_products
            ],
            total_price=record.total_price,
            purchase_status=record.purchase_status,
            counseling_method=record.counseling_method,
            dispensing_days=record.dispensing_days,
        )

    def to_domain(self) -> ConsultationRecord:
        return ConsultationRecord(
            id=self.id,
            date=self.date,
            pharmacist_name=self.pharmacist_name,
            customer_name=self.customer_name,
            survey=self.survey_data.to_domain(),
            recommended_product_names=tuple(self.recommended_product_names),
            selected_products=tuple(item.to_domain() for item in self.selected_products),
            total_price=self.total_price,
            purchase_status=self.purchase_status,
            counseling_method=self.counseling_method,
            dispensing_days=self.dispensing_days,
        )


class ConfigDocument(_Document):
    """Pharmacy settings; missing keys fall back to the defaults."""

    pharmacy_name: str = Field(default=_DEFAULT_CONFIG.pharmacy_name, alias="pharmacyName")
    current_pharmacist_id: str = Field(
        default=_DEFAULT_CONFIG.current_pharmacist_id, alias="currentPharmacistId"
    )
    business_address: str = Field(
        default=_DEFAULT_CONFIG.business_address, alias="businessAddress"
    )
    manager_name: str = Field(default=_DEFAULT_CONFIG.manager_name, alias="managerName")

    @classmethod
    def from_domain(cls, config: PharmacyConfig) -> "ConfigDocument":
        return cls(
            pharmacy_name=config.pharmacy_name,
            current_pharmacist_id=config.current_pharmacist_id,
            business_address=config.business_address,
            manager_name=config.manager_name,
        )

    def to_domain(self) -> PharmacyConfig:
        return PharmacyConfig(
            pharmacy_name=self.pharmacy_name,
            current_pharmacist_id=self.current_pharmacist_id,
            business_address=self.business_address,
            manager_name=self.manager_name,
        )


class PharmacistDocument(_Document):
    """Registered pharmacist."""

    id: str
    name: str
    is_active: bool = Field(default=True, alias="isActive")

    @classmethod
    def from_domain(cls, pharmacist: Pharmacist) -> "PharmacistDocument":
        return cls(id=pharmacist.id, name=pharmacist.name, is_active=pharmacist.is_active)

    def to_domain(self) -> Pharmacist:
        return Pharmacist(id=self.id, name=self.name, is_active=self.is_active)


class SyncBlobDocument(_Document):
    """Remote blob addressed by a sync code."""

    records: list[RecordDocument] = Field(default_factory=list)
    products: list[ProductDocument] = Field(default_factory=list)

    @field_validator("records", "products", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value


_DocumentT = TypeVar("_DocumentT", bound=_Document)


def _validate(model: type[_DocumentT], raw: object) -> _DocumentT:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise MalformedDocumentError(
            f"Invalid {model.__name__}: {exc.error_count()} error(s)"
        ) from exc


def product_to_dict(product: Product) -> dict[str, object]:
    """Serialize a product."""
    return ProductDocument.from_domain(product).to_json_dict()


def product_from_dict(raw: object) -> Product:
    """Parse a stored product document."""
    return _validate(ProductDocument, raw).to_domain()


def record_to_dict(record: ConsultationRecord) -> dict[str, object]:
    """Serialize a consultation record."""
    return RecordDocument.from_domain(record).to_json_dict()


def record_from_dict(raw: object) -> ConsultationRecord:
    """Parse a stored consultation record document."""
    return _validate(RecordDocument, raw).to_domain()


def config_to_dict(config: PharmacyConfig) -> dict[str, object]:
    """Serialize pharmacy settings."""
    return ConfigDocument.from_domain(config).to_json_dict()


def config_from_dict(raw: object) -> PharmacyConfig:
    """Parse stored pharmacy settings, filling missing keys from the defaults."""
    return _validate(ConfigDocument, raw).to_domain()


def pharmacist_to_dict(pharmacist: Pharmacist) -> dict[str, object]:
    """Serialize a pharmacist."""
    return PharmacistDocument.from_domain(pharmacist).to_json_dict()


def pharmacist_from_dict(raw: object) -> Pharmacist:
    """Parse a stored pharmacist document."""
    return _validate(PharmacistDocument, raw).to_domain()

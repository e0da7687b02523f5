"""Domain models for the product catalog."""

from dataclasses import dataclass, field
from enum import Enum


class StorageRequirement(Enum):
    """How a product must be stored."""

    AMBIENT = "상온"
    REFRIGERATED = "냉장"


class PillType(Enum):
    """Visual pill shape used on printed dispensing sheets."""

    ROUND_WHITE = "round-white"
    OVAL_YELLOW = "oval-yellow"
    CAPSULE_BROWN = "capsule-brown"
    SMALL_ROUND = "small-round"
    POWDER_PACK = "powder-pack"


OMEGA3_INGREDIENT = "오메가3"


@dataclass(frozen=True)
class IngredientInfo:
    """Single ingredient line on a product label."""

    name: str
    amount: float
    unit: str


@dataclass(frozen=True)
class Product:
    """Catalog product."""

    id: str
    name: str
    price: int
    ingredients: tuple[IngredientInfo, ...] = ()
    is_active: bool = True
    expiration_date: str = ""
    storage: StorageRequirement = StorageRequirement.AMBIENT
    pill_type: PillType | None = None
    usage: str = ""
    images: tuple[str, ...] = field(default_factory=tuple)
    description_url: str | None = None

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("Product price must be non-negative")

    @property
    def is_omega3(self) -> bool:
        """Return True when the product occupies the omega-3 slot."""
        return any(OMEGA3_INGREDIENT in item.name for item in self.ingredients)

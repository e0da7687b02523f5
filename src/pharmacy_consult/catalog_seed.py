"""Default catalog written on first run."""

from pharmacy_consult.domain.catalog import IngredientInfo, PillType, Product

_AFTER_MEAL = "1일 1회 1정 식사 직후"


def _image(seed: str) -> tuple[str, ...]:
    return (f"https://picsum.photos/seed/{seed}/300/300",)


INITIAL_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="1",
        name="아워팜 안심 활성형 엽산 800",
        price=35000,
        ingredients=(
            IngredientInfo(name="엽산", amount=800, unit="㎍"),
            IngredientInfo(name="비타민D", amount=1000, unit="IU"),
        ),
        expiration_date="2026-12-31",
        pill_type=PillType.ROUND_WHITE,
        usage=_AFTER_MEAL,
        images=_image("folic"),
    ),
    Product(
        id="2",
        name="활성형 엽산 620",
        price=30000,
        ingredients=(IngredientInfo(name="엽산", amount=620, unit="㎍"),),
        expiration_date="2026-06-30",
        pill_type=PillType.ROUND_WHITE,
        usage=_AFTER_MEAL,
        images=_image("folic2"),
    ),
    Product(
        id="3",
        name="식물성 rTG 오메가3 600",
        price=45000,
        ingredients=(IngredientInfo(name="오메가3", amount=600, unit="mg"),),
        expiration_date="2025-11-20",
        pill_type=PillType.OVAL_YELLOW,
        usage="1일 1회 1캡슐 식사 직후",
        images=_image("omega600"),
    ),
    Product(
        id="3-2",
        name="식물성 rTG 오메가3 900",
        price=55000,
        ingredients=(IngredientInfo(name="오메가3", amount=900, unit="mg"),),
        expiration_date="2026-01-15",
        pill_type=PillType.OVAL_YELLOW,
        usage="1일 1회 2캡슐 식사 직후",
        images=_image("omega900"),
    ),
    Product(
        id="4",
        name="일반 rTG 오메가3 1000",
        price=38000,
        ingredients=(IngredientInfo(name="오메가3", amount=1000, unit="mg"),),
        expiration_date="2025-10-30",
        pill_type=PillType.CAPSULE_BROWN,
        usage="1일 1회 1캡슐 식사 직후",
        images=_image("omega1000"),
    ),
    Product(
        id="5",
        name="비타민D3 2000IU",
        price=28000,
        ingredients=(IngredientInfo(name="비타민D", amount=2000, unit="IU"),),
        expiration_date="2026-12-01",
        pill_type=PillType.SMALL_ROUND,
        usage=_AFTER_MEAL,
        images=_image("vitd2000"),
    ),
    Product(
        id="5-1",
        name="비타민D 1000IU",
        price=18000,
        ingredients=(IngredientInfo(name="비타민D", amount=1000, unit="IU"),),
        expiration_date="2026-11-01",
        pill_type=PillType.SMALL_ROUND,
        usage=_AFTER_MEAL,
        images=_image("vitd1000"),
    ),
    Product(
        id="6-1",
        name="철분 24mg (Hemo)",
        price=35000,
        ingredients=(IngredientInfo(name="철분", amount=24, unit="mg"),),
        expiration_date="2026-09-15",
        pill_type=PillType.CAPSULE_BROWN,
        usage="1일 1회 1정 공복",
        images=_image("iron24"),
    ),
    Product(
        id="7",
        name="칼마디 복합제 (칼슘 300mg)",
        price=42000,
        ingredients=(
            IngredientInfo(name="칼슘", amount=300, unit="mg"),
            IngredientInfo(name="마그네슘", amount=150, unit="mg"),
            IngredientInfo(name="비타민D", amount=400, unit="IU"),
        ),
        expiration_date="2027-01-10",
        pill_type=PillType.ROUND_WHITE,
        usage="1일 1회 2정 저녁 식후",
        images=_image("calmady"),
    ),
    Product(
        id="8",
        name="코엔자임 Q10 100mg",
        price=40000,
        ingredients=(IngredientInfo(name="코큐텐", amount=100, unit="mg"),),
        expiration_date="2026-05-15",
        pill_type=PillType.CAPSULE_BROWN,
        usage="1일 1회 1캡슐 식후",
        images=_image("coq10"),
    ),
    Product(
        id="9",
        name="비타민C 1000mg",
        price=15000,
        ingredients=(IngredientInfo(name="비타민C", amount=1000, unit="mg"),),
        expiration_date="2026-08-20",
        pill_type=PillType.ROUND_WHITE,
        usage="1일 1회 1정 식후",
        images=_image("vitc"),
    ),
    Product(
        id="10",
        name="안심 차전자피 식이섬유",
        price=28000,
        ingredients=(IngredientInfo(name="차전자피", amount=5000, unit="mg"),),
        expiration_date="2026-05-20",
        pill_type=PillType.POWDER_PACK,
        usage="1일 1회 1포 물과 함께",
        images=_image("fiber"),
    ),
    Product(
        id="11",
        name="고순도 마그네슘 350mg",
        price=32000,
        ingredients=(IngredientInfo(name="마그네슘", amount=350, unit="mg"),),
        expiration_date="2026-11-10",
        pill_type=PillType.ROUND_WHITE,
        usage="1일 1회 1정 저녁 복용",
        images=_image("mag"),
    ),
)

"""Domain models for the customer intake survey."""

from dataclasses import dataclass, field
from enum import Enum


class PregnancyStage(Enum):
    """Phase of the pregnancy/lactation journey."""

    PREPARATION = "임신 준비기"
    EARLY = "임신 초기 (4주~15주)"
    MID = "임신 중기 (16주~27주)"
    LATE = "임신 후기 (28주~40주)"
    LACTATION = "출산 후 수유기"


class AgeGroup(Enum):
    """Customer age bracket."""

    TWENTIES = "20대"
    THIRTIES = "30대"
    FORTIES_PLUS = "40대 이상"


class BloodTestResult(Enum):
    """Vitamin D lab result."""

    DEFICIENT = "결핍"
    INSUFFICIENT = "부족"
    NORMAL = "정상"
    UNKNOWN = "모름"


class HbLevel(Enum):
    """Hemoglobin band in g/dL."""

    LEVEL_1 = "9 이하"
    LEVEL_2 = "10~11"
    LEVEL_3 = "12 이상(정상)"
    UNKNOWN = "모름"


class Symptom(Enum):
    """Reported symptom tags."""

    DIZZINESS = "어지러움"
    CRAMPS = "다리에 쥐가 남"
    CONSTIPATION = "변비"
    MORNING_SICKNESS = "입덧이 심해 위장장애가 걱정됨"
    TWINS = "쌍둥이(다태아)"
    BLEEDING = "출혈 있음"
    NONE = "해당 없음"


class NutrientClass(Enum):
    """Nutrient classes a customer may already be taking."""

    FOLIC_ACID = "folicAcid"
    VITAMIN_D = "vitaminD"
    IRON = "iron"
    OMEGA3 = "omega3"
    CAL_MAG = "calMag"
    PROBIOTICS = "probiotics"


_NAME_KEYWORDS: dict[NutrientClass, tuple[str, ...]] = {
    NutrientClass.FOLIC_ACID: ("엽산", "folic", "folate"),
    NutrientClass.VITAMIN_D: ("비타민d", "vitamin d", "vitamind"),
    NutrientClass.IRON: ("철분", "iron"),
    NutrientClass.OMEGA3: ("오메가3", "오메가 3", "omega"),
    NutrientClass.CAL_MAG: ("칼마디", "칼슘", "calcium"),
    NutrientClass.PROBIOTICS: ("유산균", "probiotic"),
}


@dataclass(frozen=True)
class CurrentSupplements:
    """What the customer already takes (a month's supply or more left)."""

    folic_acid: bool = False
    vitamin_d: bool = False
    iron: bool = False
    omega3: bool = False
    cal_mag: bool = False
    probiotics: bool = False
    prescription_drug: str = ""
    others: str = ""
    detected_names: tuple[str, ...] = ()

    def covers(self, nutrient: NutrientClass) -> bool:
        """Return True when the flag is set or a free-text name mentions it."""
        flags = {
            NutrientClass.FOLIC_ACID: self.folic_acid,
            NutrientClass.VITAMIN_D: self.vitamin_d,
            NutrientClass.IRON: self.iron,
            NutrientClass.OMEGA3: self.omega3,
            NutrientClass.CAL_MAG: self.cal_mag,
            NutrientClass.PROBIOTICS: self.probiotics,
        }
        if flags[nutrient]:
            return True
        names = [self.others, *self.detected_names]
        keywords = _NAME_KEYWORDS[nutrient]
        for name in names:
            lowered = name.lower()
            if any(keyword in lowered for keyword in keywords):
                return True
        return False


@dataclass(frozen=True)
class SurveyData:
    """Submitted consultation survey."""

    customer_name: str
    stage: PregnancyStage
    vitamin_d_level: BloodTestResult = BloodTestResult.UNKNOWN
    hb_level: HbLevel = HbLevel.UNKNOWN
    symptoms: frozenset[Symptom] = field(default_factory=frozenset)
    is_over_35: bool = False
    current_supplements: CurrentSupplements = field(default_factory=CurrentSupplements)
    phone: str = ""
    email: str = ""
    age_group: AgeGroup = AgeGroup.THIRTIES
    address: str | None = None
    notes: str = ""
    pharmacist_name: str = ""

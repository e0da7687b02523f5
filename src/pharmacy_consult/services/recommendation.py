"""Rule engine mapping a consultation survey to a default supplement bundle."""

from dataclasses import dataclass, field

from pharmacy_consult.domain.recommendation import (
    CAL_MAG_ID,
    COQ10_ID,
    FIBER_ID,
    FOLIC_620_ID,
    FOLIC_800_ID,
    IRON_ID,
    MAGNESIUM_ID,
    OMEGA3_1000_ID,
    OMEGA3_GENERAL_ID,
    PROBIOTICS_ID,
    VITAMIN_C_ID,
    VITAMIN_D_1000_ID,
    VITAMIN_D_2000_ID,
    RecommendationResult,
)
from pharmacy_consult.domain.survey import (
    BloodTestResult,
    HbLevel,
    NutrientClass,
    PregnancyStage,
    Symptom,
    SurveyData,
)

# Unknown Hb is grouped with the low bands: iron dosing is left to the pharmacist.
_ANEMIA_RISK_HB = frozenset({HbLevel.LEVEL_1, HbLevel.LEVEL_2, HbLevel.UNKNOWN})

INOSITOL_WARNING = (
    "만 35세 이상 임신 준비: 난소 기능 관리를 위한 이노시톨(미취급 품목) 복용을 "
    "함께 상담해 주세요."
)
ANEMIA_WARNING = (
    "빈혈 위험(다태아 또는 Hb 11 이하/미확인): 철분제는 자동 선택하지 않았습니다. "
    "용량은 약사가 직접 판단해 주세요."
)
BLEEDING_WARNING = (
    "출혈 증상이 있어 오메가3는 자동 선택하지 않았습니다. 복용 여부를 담당 의사와 "
    "확인해 주세요."
)


def target_vitamin_d(level: BloodTestResult) -> int:
    """Return the vitamin D dose in IU for a lab result.

    Anything other than a normal result, including an unknown one, gets the
    higher dose.
    """
    return 1000 if level is BloodTestResult.NORMAL else 2000


def _vitamin_d_product_id(dose: int) -> str:
    return VITAMIN_D_1000_ID if dose == 1000 else VITAMIN_D_2000_ID


@dataclass
class _Accumulator:
    survey: SurveyData
    items: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    auto_ids: list[str] = field(default_factory=list)
    auto_omega_id: str = ""

    def takes(self, nutrient: NutrientClass) -> bool:
        return self.survey.current_supplements.covers(nutrient)

    def select(self, *product_ids: str) -> None:
        for product_id in product_ids:
            if product_id not in self.auto_ids:
                self.auto_ids.append(product_id)

    def select_omega(self, product_id: str, description: str) -> None:
        if self.takes(NutrientClass.OMEGA3):
            return
        if Symptom.BLEEDING in self.survey.symptoms:
            if BLEEDING_WARNING not in self.warnings:
                self.warnings.append(BLEEDING_WARNING)
            return
        self.auto_omega_id = product_id
        self.items.append(description)

    def result(self) -> RecommendationResult:
        return RecommendationResult(
            items=tuple(self.items),
            warnings=tuple(self.warnings),
            auto_ids=tuple(self.auto_ids),
            auto_omega_id=self.auto_omega_id,
        )


def recommend(survey: SurveyData) -> RecommendationResult:
    """Compute recommended items, warnings and pre-selected product ids.

    Pure and deterministic. The returned ids are abstract catalog ids; a
    caller whose catalog lacks one simply ends up without that selection.
    """
    acc = _Accumulator(survey)
    dose = target_vitamin_d(survey.vitamin_d_level)

    if survey.stage is PregnancyStage.PREPARATION:
        _preparation_rules(acc, dose)
    elif survey.stage is PregnancyStage.EARLY:
        _early_rules(acc, dose)
    else:
        _later_rules(acc, dose)

    _probiotics_rule(acc)
    _symptom_rules(acc)
    return acc.result()


def _preparation_rules(acc: _Accumulator, dose: int) -> None:
    if not acc.takes(NutrientClass.FOLIC_ACID):
        acc.select(FOLIC_620_ID)
    acc.items.append("활성형 엽산 620mcg")

    _vitamin_d_rule(acc, dose)

    if acc.survey.is_over_35:
        acc.select(COQ10_ID, VITAMIN_C_ID)
        acc.items.append("코엔자임 Q10 100mg")
        acc.items.append("비타민C 1000mg")
        acc.select_omega(OMEGA3_1000_ID, "rTG 오메가3 1000mg")
        acc.warnings.append(INOSITOL_WARNING)
    else:
        acc.select_omega(OMEGA3_GENERAL_ID, "식물성 rTG 오메가3")


def _early_rules(acc: _Accumulator, dose: int) -> None:
    if not acc.takes(NutrientClass.FOLIC_ACID):
        acc.select(FOLIC_800_ID)
        # The 800mcg folic product already carries 1000IU of vitamin D.
        if dose == 2000 and not acc.takes(NutrientClass.VITAMIN_D):
            acc.select(VITAMIN_D_2000_ID)
    elif not acc.takes(NutrientClass.VITAMIN_D):
        acc.select(_vitamin_d_product_id(dose))
    acc.items.append("활성형 엽산 800mcg")
    acc.items.append(f"비타민D {dose}IU")

    acc.select_omega(OMEGA3_GENERAL_ID, "식물성 rTG 오메가3")


def _later_rules(acc: _Accumulator, dose: int) -> None:
    survey = acc.survey
    if Symptom.TWINS in survey.symptoms or survey.hb_level in _ANEMIA_RISK_HB:
        acc.warnings.append(ANEMIA_WARNING)
    elif not acc.takes(NutrientClass.IRON):
        acc.select(IRON_ID)
        acc.items.append("철분 24mg")

    _vitamin_d_rule(acc, dose)
    acc.select_omega(OMEGA3_GENERAL_ID, "식물성 rTG 오메가3")

    late_stages = (PregnancyStage.LATE, PregnancyStage.LACTATION)
    if survey.stage in late_stages and not acc.takes(NutrientClass.CAL_MAG):
        acc.select(CAL_MAG_ID)
        acc.items.append("칼슘·마그네슘·비타민D 복합제")


def _vitamin_d_rule(acc: _Accumulator, dose: int) -> None:
    if not acc.takes(NutrientClass.VITAMIN_D):
        acc.select(_vitamin_d_product_id(dose))
    acc.items.append(f"비타민D {dose}IU")


def _probiotics_rule(acc: _Accumulator) -> None:
    if Symptom.BLEEDING in acc.survey.symptoms or acc.takes(NutrientClass.PROBIOTICS):
        return
    acc.select(PROBIOTICS_ID)
    acc.items.append("임산부 유산균")


def _symptom_rules(acc: _Accumulator) -> None:
    symptoms = acc.survey.symptoms
    if Symptom.CONSTIPATION in symptoms:
        acc.select(FIBER_ID)
        acc.items.append("차전자피 식이섬유 (변비 개선)")
    if Symptom.CRAMPS in symptoms:
        acc.select(MAGNESIUM_ID)
        acc.items.append("마그네슘 350mg (다리 경련 완화)")

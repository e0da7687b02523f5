"""Recommendation output and the product ids the rule engine emits."""

from dataclasses import dataclass

FOLIC_620_ID = "2"
FOLIC_800_ID = "1"
OMEGA3_GENERAL_ID = "3"
OMEGA3_1000_ID = "4"
VITAMIN_D_2000_ID = "5"
VITAMIN_D_1000_ID = "5-1"
IRON_ID = "6-1"
CAL_MAG_ID = "7"
COQ10_ID = "8"
VITAMIN_C_ID = "9"
FIBER_ID = "10"
MAGNESIUM_ID = "11"
PROBIOTICS_ID = "12"

FOLIC_IDS = frozenset({FOLIC_620_ID, FOLIC_800_ID})


@dataclass(frozen=True)
class RecommendationResult:
    """Default selection and advice computed from a survey."""

    items: tuple[str, ...]
    warnings: tuple[str, ...]
    auto_ids: tuple[str, ...]
    auto_omega_id: str = ""

    def to_payload(self) -> dict[str, object]:
        """Return the caller-facing shape."""
        return {
            "items": list(self.items),
            "warnings": list(self.warnings),
            "autoIds": list(self.auto_ids),
            "autoOmegaId": self.auto_omega_id,
        }

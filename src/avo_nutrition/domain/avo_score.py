"""AvoScore domain models."""

import math
from dataclasses import dataclass
from typing import Literal

from avo_nutrition.domain.foods import NutrientVector

Grade = Literal["A", "B", "C", "D", "F"]


def _coerce(value: object) -> float:
    """Return a finite, non-negative float or 0."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


@dataclass(frozen=True)
class AvoScoreInput:
    """Absolute nutrient amounts for a consumed quantity.

    Values are coerced on construction, so every instance is fully defaulted:
    missing, non-numeric, non-finite or negative amounts become 0.
    """

    calories: float = 0.0
    carb_g: float = 0.0
    fiber_g: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0
    sat_fat_g: float = 0.0
    trans_fat_g: float = 0.0

    def __post_init__(self) -> None:
        for name in self.__dataclass_fields__:
            object.__setattr__(self, name, _coerce(getattr(self, name)))

    @classmethod
    def from_nutrients(cls, nutrients: NutrientVector) -> "AvoScoreInput":
        """Build scoring input from a nutrient vector."""
        return cls(
            calories=nutrients.calories_kcal,
            carb_g=nutrients.carbs_g,
            fiber_g=nutrients.fiber_g,
            protein_g=nutrients.protein_g,
            fat_g=nutrients.fat_g,
            sugar_g=nutrients.sugar_g,
            sodium_mg=nutrients.sodium_mg,
            sat_fat_g=nutrients.saturated_fat_g,
            trans_fat_g=nutrients.trans_fat_g,
        )


@dataclass(frozen=True)
class AvoScoreResult:
    """Score in [0, 100], letter grade and up to two reason tags."""

    score: float
    grade: Grade
    reasons: tuple[str, ...]

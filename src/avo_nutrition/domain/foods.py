"""Domain models for foods, servings and nutrient vectors."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientVector:
    """Nutrient amounts; calories are always present, the rest may be unknown."""

    calories_kcal: float
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    saturated_fat_g: float | None = None
    trans_fat_g: float | None = None
    sugar_g: float | None = None
    fiber_g: float | None = None
    sodium_mg: float | None = None


@dataclass(frozen=True)
class FoodRecord:
    """Food whose nutrients describe exactly serving_size x serving_unit."""

    serving_size: float
    serving_unit: str
    calories_kcal: float
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    saturated_fat_g: float | None = None
    trans_fat_g: float | None = None
    sugar_g: float | None = None
    fiber_g: float | None = None
    sodium_mg: float | None = None
    id: str | None = None
    name: str | None = None
    brand: str | None = None

    def nutrients(self) -> NutrientVector:
        """Return the nutrients of one canonical serving."""
        return NutrientVector(
            calories_kcal=self.calories_kcal,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            saturated_fat_g=self.saturated_fat_g,
            trans_fat_g=self.trans_fat_g,
            sugar_g=self.sugar_g,
            fiber_g=self.fiber_g,
            sodium_mg=self.sodium_mg,
        )


@dataclass(frozen=True)
class ServingDefinition:
    """User-facing serving with a normalized weight or volume."""

    weight_g: float | None = None
    volume_ml: float | None = None
    id: str = ""
    name: str = ""
    sort_order: int | None = None
    is_default: bool = False


@dataclass(frozen=True)
class RawServingSelection:
    """Direct unit entry such as 250 ml."""

    quantity: float
    unit: str


@dataclass(frozen=True)
class SavedServingSelection:
    """A multiple of a saved serving such as 2 x 1 cup."""

    quantity: float
    serving: ServingDefinition


ServingSelection = RawServingSelection | SavedServingSelection


@dataclass(frozen=True)
class RawServingOption:
    """Dropdown option for a plain unit."""

    unit: str
    label: str

    @property
    def id(self) -> str:
        return f"raw-{self.unit}"


@dataclass(frozen=True)
class SavedServingOption:
    """Dropdown option for a saved serving."""

    serving: ServingDefinition
    label: str

    @property
    def id(self) -> str:
        return self.serving.id


ServingOption = RawServingOption | SavedServingOption


@dataclass(frozen=True)
class DefaultServing:
    """Pre-selected serving for a food."""

    quantity: float
    unit: str
    serving: ServingDefinition | None = None

"""Serving resolution and nutrient scaling."""

import logging
import math
from dataclasses import dataclass, fields

from avo_nutrition.domain.avo_score import AvoScoreInput, AvoScoreResult
from avo_nutrition.domain.errors import (
    CrossCategoryConversionError,
    InvalidQuantityError,
    QuantityOutOfRangeError,
)
from avo_nutrition.domain.foods import (
    DefaultServing,
    FoodRecord,
    NutrientVector,
    RawServingOption,
    RawServingSelection,
    SavedServingOption,
    SavedServingSelection,
    ServingDefinition,
    ServingOption,
    ServingSelection,
)
from avo_nutrition.services.avo_score import compute_avo_score
from avo_nutrition.services.units import (
    allowed_units_for,
    convert_volume,
    convert_weight,
    format_unit_label,
    is_volume_unit,
    is_weight_unit,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntrySummary:
    """Nutrients for a selection together with their score."""

    base_units: float
    nutrients: NutrientVector
    avo_score: AvoScoreResult


@dataclass
class NutritionService:
    """Computes diary entries from foods and serving selections."""

    debug: bool = False

    def compute_entry(
        self, food: FoodRecord, selection: ServingSelection
    ) -> EntrySummary:
        """Resolve a selection, scale nutrients and score the result."""
        base_units = base_units_for_selection(food, selection)
        if base_units == 0:
            _logger.warning(
                "Serving without a defined size: food=%s serving=%s",
                food.id,
                _serving_id(selection),
            )
        nutrients = nutrients_for_quantity(food, base_units)
        score = compute_avo_score(AvoScoreInput.from_nutrients(nutrients))
        if self.debug:
            _logger.info(
                "Nutrition entry: food=%s base_units=%s calories=%s grade=%s",
                food.id,
                base_units,
                nutrients.calories_kcal,
                score.grade,
            )
        return EntrySummary(base_units=base_units, nutrients=nutrients, avo_score=score)

    def serving_options(
        self, food: FoodRecord, servings: list[ServingDefinition]
    ) -> tuple[list[ServingOption], DefaultServing]:
        """Return dropdown options and the pre-selected serving."""
        return build_serving_options(food, servings), default_serving(food, servings)


def convert_to_base_unit(quantity: float, from_unit: str, food: FoodRecord) -> float:
    """Convert a quantity into the food's canonical serving unit.

    Weight and volume never convert into each other here: that needs a saved
    serving that states both, since density differs for every food.
    """
    if quantity <= 0:
        raise InvalidQuantityError(f"quantity must be positive, got {quantity}")
    to_norm = food.serving_unit.lower()
    from_norm = from_unit.lower()
    if from_norm == to_norm:
        return quantity
    if is_weight_unit(from_norm) and is_weight_unit(to_norm):
        return convert_weight(quantity, from_norm, to_norm)
    if is_volume_unit(from_norm) and is_volume_unit(to_norm):
        return convert_volume(quantity, from_norm, to_norm)
    raise CrossCategoryConversionError(from_unit, food.serving_unit)


def amount_from_serving_definition(
    serving: ServingDefinition, food: FoodRecord
) -> float:
    """Return the serving's size in the food's base unit, or 0 if undefined."""
    if is_volume_unit(food.serving_unit):
        value = serving.volume_ml
    else:
        value = serving.weight_g
    return value if value is not None else 0.0


def per_base_unit_nutrients(food: FoodRecord) -> NutrientVector:
    """Nutrients contained in one base unit (1 g, 1 ml, 1 piece) of the food."""
    if food.serving_size <= 0:
        raise InvalidQuantityError(
            f"serving_size must be positive, got {food.serving_size}"
        )
    return _scale(food.nutrients(), 1 / food.serving_size)


def base_units_for_selection(food: FoodRecord, selection: ServingSelection) -> float:
    """How many base units of the food the selection represents."""
    if selection.quantity <= 0:
        raise InvalidQuantityError(
            f"quantity must be positive, got {selection.quantity}"
        )
    if isinstance(selection, SavedServingSelection):
        amount = selection.quantity * amount_from_serving_definition(
            selection.serving, food
        )
        if not math.isfinite(amount):
            raise QuantityOutOfRangeError(selection.quantity, selection.serving.name)
        return amount
    return convert_to_base_unit(selection.quantity, selection.unit, food)


def nutrients_for_quantity(food: FoodRecord, base_units: float) -> NutrientVector:
    """Scale the food's nutrients to a quantity already in base units."""
    return _scale(per_base_unit_nutrients(food), base_units)


def nutrients_for_selection(
    food: FoodRecord, selection: ServingSelection
) -> NutrientVector:
    """Absolute nutrients for a user's serving selection."""
    per_unit = per_base_unit_nutrients(food)
    base_units = base_units_for_selection(food, selection)
    return _scale(per_unit, base_units)


def build_serving_options(
    food: FoodRecord, servings: list[ServingDefinition]
) -> list[ServingOption]:
    """Saved servings first, then the raw units allowed for the food."""
    saved: list[ServingOption] = [
        SavedServingOption(serving=serving, label=serving.name) for serving in servings
    ]
    raw: list[ServingOption] = [
        RawServingOption(unit=unit, label=format_unit_label(unit))
        for unit in allowed_units_for(food.serving_unit)
    ]
    return saved + raw


def default_serving(
    food: FoodRecord, servings: list[ServingDefinition]
) -> DefaultServing:
    """Pick the default serving, falling back to the food's canonical amount."""
    defaults = [serving for serving in servings if serving.is_default]
    if defaults:
        chosen = min(
            defaults,
            key=lambda serving: (serving.sort_order or 0, serving.id),
        )
        return DefaultServing(quantity=1.0, unit=chosen.name, serving=chosen)
    return DefaultServing(quantity=food.serving_size, unit=food.serving_unit)


def selection_from_option(option: ServingOption, quantity: float) -> ServingSelection:
    """Turn a dropdown option and an entered quantity into a selection."""
    if isinstance(option, SavedServingOption):
        return SavedServingSelection(quantity=quantity, serving=option.serving)
    return RawServingSelection(quantity=quantity, unit=option.unit)


def format_serving(serving: DefaultServing) -> str:
    """Label like "1 slice" or "100 g"."""
    if serving.quantity == 1 and serving.serving is not None:
        return serving.serving.name
    return f"{serving.quantity:g} {serving.unit}"


def _scale(nutrients: NutrientVector, factor: float) -> NutrientVector:
    values: dict[str, float | None] = {}
    for item in fields(NutrientVector):
        value = getattr(nutrients, item.name)
        values[item.name] = value * factor if value is not None else None
    return NutrientVector(**values)


def _serving_id(selection: ServingSelection) -> str | None:
    if isinstance(selection, SavedServingSelection):
        return selection.serving.id
    return None

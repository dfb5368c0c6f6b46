"""Tests for serving resolution and nutrient scaling."""

import logging

import pytest

from avo_nutrition.domain.errors import (
    CrossCategoryConversionError,
    InvalidQuantityError,
    QuantityOutOfRangeError,
)
from avo_nutrition.domain.foods import (
    FoodRecord,
    RawServingOption,
    RawServingSelection,
    SavedServingOption,
    SavedServingSelection,
    ServingDefinition,
)
from avo_nutrition.services.nutrition import (
    NutritionService,
    amount_from_serving_definition,
    build_serving_options,
    convert_to_base_unit,
    default_serving,
    format_serving,
    nutrients_for_quantity,
    nutrients_for_selection,
    per_base_unit_nutrients,
    selection_from_option,
)


def test_convert_to_base_unit_within_category(chicken_breast, skim_milk) -> None:
    assert convert_to_base_unit(1, "kg", chicken_breast) == 1000
    assert convert_to_base_unit(1, "cup", skim_milk) == 240
    assert convert_to_base_unit(5, "G", chicken_breast) == 5


def test_convert_to_base_unit_rejects_cross_category(chicken_breast) -> None:
    with pytest.raises(CrossCategoryConversionError) as exc_info:
        convert_to_base_unit(250, "ml", chicken_breast)
    assert exc_info.value.error_key == "units.cross_category_conversion"


def test_convert_to_base_unit_opaque_units(bagel) -> None:
    assert convert_to_base_unit(2, "Piece", bagel) == 2
    with pytest.raises(CrossCategoryConversionError):
        convert_to_base_unit(100, "g", bagel)


def test_convert_to_base_unit_rejects_non_positive_quantity(chicken_breast) -> None:
    with pytest.raises(InvalidQuantityError):
        convert_to_base_unit(0, "g", chicken_breast)
    with pytest.raises(InvalidQuantityError):
        convert_to_base_unit(-1, "oz", chicken_breast)


def test_amount_from_serving_definition_picks_category_field(
    chicken_breast, skim_milk
) -> None:
    serving = ServingDefinition(weight_g=30, volume_ml=50)
    assert amount_from_serving_definition(serving, chicken_breast) == 30
    assert amount_from_serving_definition(serving, skim_milk) == 50
    assert amount_from_serving_definition(ServingDefinition(), skim_milk) == 0


def test_per_base_unit_nutrients_propagates_nulls(skim_milk) -> None:
    per_ml = per_base_unit_nutrients(skim_milk)
    assert per_ml.calories_kcal == pytest.approx(0.34)
    assert per_ml.protein_g == pytest.approx(0.034)
    assert per_ml.trans_fat_g is None
    assert per_ml.fiber_g == 0


def test_per_base_unit_nutrients_rejects_zero_serving_size() -> None:
    food = FoodRecord(serving_size=0, serving_unit="g", calories_kcal=10)
    with pytest.raises(InvalidQuantityError):
        per_base_unit_nutrients(food)


def test_nutrients_for_raw_selection(skim_milk) -> None:
    nutrients = nutrients_for_selection(
        skim_milk, RawServingSelection(quantity=250, unit="ml")
    )
    assert nutrients.calories_kcal == pytest.approx(85)
    assert nutrients.trans_fat_g is None


def test_nutrients_for_saved_selection(skim_milk, cup_serving) -> None:
    nutrients = nutrients_for_selection(
        skim_milk, SavedServingSelection(quantity=2, serving=cup_serving)
    )
    assert nutrients.calories_kcal == pytest.approx(0.34 * 480)
    assert nutrients.sodium_mg == pytest.approx(105 / 250 * 480)


def test_nutrients_scale_linearly(chicken_breast) -> None:
    single = nutrients_for_selection(
        chicken_breast, RawServingSelection(quantity=3, unit="oz")
    )
    double = nutrients_for_selection(
        chicken_breast, RawServingSelection(quantity=6, unit="oz")
    )
    assert double.calories_kcal == single.calories_kcal * 2


def test_nutrients_for_selection_never_converts_across_categories(
    chicken_breast,
) -> None:
    with pytest.raises(CrossCategoryConversionError):
        nutrients_for_selection(
            chicken_breast, RawServingSelection(quantity=100, unit="ml")
        )


def test_nutrients_for_selection_rejects_non_positive_quantity(
    chicken_breast,
) -> None:
    with pytest.raises(InvalidQuantityError):
        nutrients_for_selection(chicken_breast, RawServingSelection(quantity=0, unit="g"))


def test_saved_selection_overflow_raises(chicken_breast) -> None:
    serving = ServingDefinition(id="crate", name="1 crate", weight_g=1e10)
    with pytest.raises(QuantityOutOfRangeError):
        nutrients_for_selection(
            chicken_breast, SavedServingSelection(quantity=1e308, serving=serving)
        )


def test_nutrients_for_quantity(chicken_breast) -> None:
    nutrients = nutrients_for_quantity(chicken_breast, 200)
    assert nutrients.calories_kcal == pytest.approx(330)
    assert nutrients.protein_g == pytest.approx(62)


def test_build_serving_options_lists_saved_first(skim_milk, cup_serving) -> None:
    options = build_serving_options(skim_milk, [cup_serving])
    assert isinstance(options[0], SavedServingOption)
    assert options[0].id == "cup"
    assert [option.id for option in options[1:]] == [
        "raw-ml",
        "raw-l",
        "raw-floz",
        "raw-cup",
        "raw-tbsp",
        "raw-tsp",
    ]
    assert options[4].label == "cup (240 ml)"


def test_default_serving_prefers_lowest_sort_order(skim_milk) -> None:
    servings = [
        ServingDefinition(id="b", name="1 glass", volume_ml=200, is_default=True, sort_order=2),
        ServingDefinition(id="c", name="1 cup", volume_ml=240, is_default=True, sort_order=1),
        ServingDefinition(id="a", name="1 shot", volume_ml=30, is_default=False, sort_order=0),
    ]
    chosen = default_serving(skim_milk, servings)
    assert chosen.serving is not None
    assert chosen.serving.id == "c"
    assert chosen.quantity == 1
    assert format_serving(chosen) == "1 cup"


def test_default_serving_breaks_ties_by_id(skim_milk) -> None:
    servings = [
        ServingDefinition(id="z", name="Z", volume_ml=1, is_default=True),
        ServingDefinition(id="m", name="M", volume_ml=1, is_default=True, sort_order=0),
    ]
    assert default_serving(skim_milk, servings).unit == "M"


def test_default_serving_falls_back_to_food(chicken_breast) -> None:
    chosen = default_serving(chicken_breast, [])
    assert chosen.serving is None
    assert format_serving(chosen) == "100 g"


def test_selection_from_option(cup_serving) -> None:
    saved = selection_from_option(SavedServingOption(cup_serving, "1 cup"), 2)
    assert saved == SavedServingSelection(quantity=2, serving=cup_serving)
    raw = selection_from_option(RawServingOption("oz", "oz"), 4)
    assert raw == RawServingSelection(quantity=4, unit="oz")


def test_compute_entry_scores_nutrients(chicken_breast) -> None:
    service = NutritionService()
    summary = service.compute_entry(
        chicken_breast, RawServingSelection(quantity=100, unit="g")
    )
    assert summary.base_units == 100
    assert summary.nutrients.calories_kcal == pytest.approx(165)
    assert summary.avo_score.grade in {"A", "B"}
    assert "avo_score.reasons.high_protein" in summary.avo_score.reasons


def test_compute_entry_logs_zero_size_serving(
    chicken_breast, caplog, monkeypatch
) -> None:
    monkeypatch.setattr(logging.getLogger("avo_nutrition"), "propagate", True)
    service = NutritionService()
    serving = ServingDefinition(id="mystery", name="1 scoop", volume_ml=30)
    with caplog.at_level(logging.WARNING, logger="avo_nutrition"):
        summary = service.compute_entry(
            chicken_breast, SavedServingSelection(quantity=1, serving=serving)
        )
    assert summary.nutrients.calories_kcal == 0
    assert summary.avo_score.reasons == ("avo_score.reasons.no_macro_data",)
    assert "mystery" in caplog.text

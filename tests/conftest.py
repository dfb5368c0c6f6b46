"""Shared test fixtures."""

import pytest

from avo_nutrition.config import Settings
from avo_nutrition.containers import AppContainer, build_container
from avo_nutrition.domain.foods import FoodRecord, ServingDefinition


@pytest.fixture
def settings() -> Settings:
    return Settings(
        announcement_max_links=10,
        announcement_preview_length=120,
        announcement_allow_http=False,
        environment="test",
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def skim_milk() -> FoodRecord:
    return FoodRecord(
        id="skim-milk",
        name="Skim milk",
        serving_size=250,
        serving_unit="ml",
        calories_kcal=85,
        protein_g=8.5,
        carbs_g=12.5,
        fat_g=0.2,
        saturated_fat_g=0.1,
        trans_fat_g=None,
        sugar_g=12.5,
        fiber_g=0,
        sodium_mg=105,
    )


@pytest.fixture
def chicken_breast() -> FoodRecord:
    return FoodRecord(
        id="chicken-breast",
        name="Chicken breast",
        serving_size=100,
        serving_unit="g",
        calories_kcal=165,
        protein_g=31,
        carbs_g=0,
        fat_g=3.6,
        saturated_fat_g=1.0,
        trans_fat_g=0,
        sugar_g=0,
        fiber_g=0,
        sodium_mg=74,
    )


@pytest.fixture
def bagel() -> FoodRecord:
    return FoodRecord(
        id="bagel",
        name="Bagel",
        serving_size=1,
        serving_unit="piece",
        calories_kcal=270,
        protein_g=10,
        carbs_g=53,
        fat_g=1.5,
        sodium_mg=430,
    )


@pytest.fixture
def cup_serving() -> ServingDefinition:
    return ServingDefinition(id="cup", name="1 cup", volume_ml=240, is_default=True)

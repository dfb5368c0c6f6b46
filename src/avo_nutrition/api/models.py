"""Pydantic request models for the HTTP API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from avo_nutrition.domain.avo_score import AvoScoreInput
from avo_nutrition.domain.foods import (
    FoodRecord,
    RawServingSelection,
    SavedServingSelection,
    ServingDefinition,
    ServingSelection,
)


class FoodPayload(BaseModel):
    """Food with nutrients for serving_size x serving_unit."""

    model_config = ConfigDict(allow_inf_nan=False)

    serving_size: float = Field(gt=0)
    serving_unit: str = Field(min_length=1)
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

    def to_domain(self) -> FoodRecord:
        return FoodRecord(**self.model_dump())


class ServingPayload(BaseModel):
    """Saved serving definition."""

    model_config = ConfigDict(allow_inf_nan=False)

    weight_g: float | None = Field(default=None, gt=0)
    volume_ml: float | None = Field(default=None, gt=0)
    id: str = ""
    name: str = ""
    sort_order: int | None = None
    is_default: bool = False

    def to_domain(self) -> ServingDefinition:
        return ServingDefinition(**self.model_dump())


class SelectionPayload(BaseModel):
    """Either a raw unit or a saved serving, with a quantity."""

    model_config = ConfigDict(allow_inf_nan=False)

    quantity: float = Field(gt=0)
    unit: str | None = None
    serving: ServingPayload | None = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "SelectionPayload":
        if (self.unit is None) == (self.serving is None):
            raise ValueError("Provide exactly one of unit or serving")
        return self

    def to_domain(self) -> ServingSelection:
        if self.serving is not None:
            return SavedServingSelection(
                quantity=self.quantity, serving=self.serving.to_domain()
            )
        return RawServingSelection(quantity=self.quantity, unit=str(self.unit))


class EntryRequest(BaseModel):
    """Nutrients for one food and serving selection."""

    food: FoodPayload
    selection: SelectionPayload


class OptionsRequest(BaseModel):
    """Serving options for a food."""

    food: FoodPayload
    servings: list[ServingPayload] = Field(default_factory=list)


class ConvertRequest(BaseModel):
    """Unit conversion within one category."""

    model_config = ConfigDict(allow_inf_nan=False)

    quantity: float = Field(gt=0)
    from_unit: str
    to_unit: str
    category: Literal["weight", "volume"]


class AvoScoreRequest(BaseModel):
    """Absolute nutrient amounts to score; missing values count as 0."""

    calories: float | None = None
    carb_g: float | None = None
    fiber_g: float | None = None
    protein_g: float | None = None
    fat_g: float | None = None
    sugar_g: float | None = None
    sodium_mg: float | None = None
    sat_fat_g: float | None = None
    trans_fat_g: float | None = None

    def to_domain(self) -> AvoScoreInput:
        return AvoScoreInput(**self.model_dump())


class AnnouncementBody(BaseModel):
    """Announcement body text."""

    body: str = ""

"""Nutrition and scoring endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request

from avo_nutrition.api.models import (
    AvoScoreRequest,
    ConvertRequest,
    EntryRequest,
    OptionsRequest,
)
from avo_nutrition.domain.errors import UnitConversionError
from avo_nutrition.domain.foods import SavedServingOption, ServingOption
from avo_nutrition.services.avo_score import compute_avo_score
from avo_nutrition.services.nutrition import format_serving
from avo_nutrition.services.units import (
    convert_volume,
    convert_weight,
    unit_display_name,
)

if TYPE_CHECKING:
    from avo_nutrition.containers import AppContainer

router = APIRouter(tags=["nutrition"])

_logger = logging.getLogger(__name__)


def _conversion_error(exc: UnitConversionError) -> HTTPException:
    _logger.warning("Rejected unit conversion: %s", exc)
    return HTTPException(
        status_code=422,
        detail={"error_key": exc.error_key, "message": str(exc)},
    )


@router.post("/nutrition/convert")
async def convert(payload: ConvertRequest) -> dict[str, float]:
    """Convert a quantity between two units of the same category."""
    converter = convert_weight if payload.category == "weight" else convert_volume
    try:
        quantity = converter(payload.quantity, payload.from_unit, payload.to_unit)
    except UnitConversionError as exc:
        raise _conversion_error(exc) from exc
    return {"quantity": quantity}


@router.post("/nutrition/entry")
async def entry(payload: EntryRequest, request: Request) -> dict[str, object]:
    """Return nutrients and AvoScore for a serving selection."""
    container: AppContainer = request.app.state.container
    try:
        summary = container.nutrition_service.compute_entry(
            payload.food.to_domain(), payload.selection.to_domain()
        )
    except UnitConversionError as exc:
        raise _conversion_error(exc) from exc
    return {
        "base_units": summary.base_units,
        "nutrients": asdict(summary.nutrients),
        "avo_score": asdict(summary.avo_score),
    }


@router.post("/nutrition/options")
async def options(payload: OptionsRequest, request: Request) -> dict[str, object]:
    """Return serving dropdown options and the default selection."""
    container: AppContainer = request.app.state.container
    serving_options, default = container.nutrition_service.serving_options(
        payload.food.to_domain(), [serving.to_domain() for serving in payload.servings]
    )
    return {
        "options": [_serialize_option(option) for option in serving_options],
        "default": {
            "quantity": default.quantity,
            "unit": default.unit,
            "serving_id": default.serving.id if default.serving else None,
            "label": format_serving(default),
        },
    }


@router.post("/avo-score")
async def avo_score(payload: AvoScoreRequest) -> dict[str, object]:
    """Score absolute nutrient amounts."""
    return asdict(compute_avo_score(payload.to_domain()))


def _serialize_option(option: ServingOption) -> dict[str, object]:
    if isinstance(option, SavedServingOption):
        return {"kind": "saved", "id": option.id, "label": option.label}
    return {
        "kind": "raw",
        "id": option.id,
        "label": option.label,
        "unit": option.unit,
        "display_name": unit_display_name(option.unit),
    }

"""Weight and volume unit conversion."""

import math
from typing import Literal

from avo_nutrition.domain.errors import (
    InvalidQuantityError,
    QuantityOutOfRangeError,
    UnknownUnitError,
)

UnitCategory = Literal["weight", "volume"]

GRAMS_PER_UNIT: dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
}

MILLILITRES_PER_UNIT: dict[str, float] = {
    "ml": 1.0,
    "l": 1000.0,
    "floz": 29.5735,
    "cup": 240.0,
    "tbsp": 15.0,
    "tsp": 5.0,
}

WEIGHT_UNITS = tuple(GRAMS_PER_UNIT)
VOLUME_UNITS = tuple(MILLILITRES_PER_UNIT)

_DISPLAY_NAMES = {"l": "L", "floz": "fl oz"}
_LABELS = {"l": "L", "floz": "fl oz", "cup": "cup (240 ml)"}


def is_weight_unit(unit: str) -> bool:
    """Return True for g, kg, oz and lb (any case)."""
    return unit.lower() in GRAMS_PER_UNIT


def is_volume_unit(unit: str) -> bool:
    """Return True for ml, l, floz, cup, tbsp and tsp (any case)."""
    return unit.lower() in MILLILITRES_PER_UNIT


def unit_category(unit: str) -> UnitCategory | None:
    """Return the unit's category, or None for opaque units like "piece"."""
    if is_weight_unit(unit):
        return "weight"
    if is_volume_unit(unit):
        return "volume"
    return None


def convert_weight(quantity: float, from_unit: str, to_unit: str) -> float:
    """Convert a weight between units through grams."""
    return _convert(quantity, from_unit, to_unit, GRAMS_PER_UNIT, "weight")


def convert_volume(quantity: float, from_unit: str, to_unit: str) -> float:
    """Convert a volume between units through millilitres."""
    return _convert(quantity, from_unit, to_unit, MILLILITRES_PER_UNIT, "volume")


def allowed_units_for(serving_unit: str) -> list[str]:
    """Units a user may enter for a food with the given canonical unit.

    Weight foods accept every weight unit and volume foods every volume unit.
    Opaque units only accept themselves.
    """
    category = unit_category(serving_unit)
    if category == "weight":
        return list(WEIGHT_UNITS)
    if category == "volume":
        return list(VOLUME_UNITS)
    return [serving_unit]


def unit_display_name(unit: str) -> str:
    """Short display name for a unit."""
    normalized = unit.lower()
    if normalized in GRAMS_PER_UNIT or normalized in MILLILITRES_PER_UNIT:
        return _DISPLAY_NAMES.get(normalized, normalized)
    return unit


def format_unit_label(unit: str) -> str:
    """Dropdown label for a raw unit, with the cup size spelled out."""
    normalized = unit.lower()
    if normalized in GRAMS_PER_UNIT or normalized in MILLILITRES_PER_UNIT:
        return _LABELS.get(normalized, normalized)
    return unit


def _convert(
    quantity: float,
    from_unit: str,
    to_unit: str,
    table: dict[str, float],
    category: str,
) -> float:
    if quantity <= 0:
        raise InvalidQuantityError(f"quantity must be positive, got {quantity}")
    from_norm = from_unit.lower()
    to_norm = to_unit.lower()
    if from_norm not in table:
        raise UnknownUnitError(from_unit, category)
    if to_norm not in table:
        raise UnknownUnitError(to_unit, category)
    if from_norm == to_norm:
        return quantity
    converted = quantity * table[from_norm] / table[to_norm]
    if not math.isfinite(converted):
        raise QuantityOutOfRangeError(quantity, from_unit)
    return converted

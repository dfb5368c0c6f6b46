"""Domain errors for unit conversion."""


class UnitConversionError(ValueError):
    """Base error for rejected unit conversions."""

    error_key = "units.conversion_failed"


class UnknownUnitError(UnitConversionError):
    """Raised when a unit is not part of the expected unit table."""

    error_key = "units.unknown_unit"

    def __init__(self, unit: str, category: str) -> None:
        super().__init__(f"Unknown {category} unit: {unit}")
        self.unit = unit
        self.category = category


class CrossCategoryConversionError(UnitConversionError):
    """Raised when converting between weight and volume without a serving."""

    error_key = "units.cross_category_conversion"

    def __init__(self, from_unit: str, to_unit: str) -> None:
        super().__init__(f"No direct unit conversion allowed: {from_unit} -> {to_unit}")
        self.from_unit = from_unit
        self.to_unit = to_unit


class InvalidQuantityError(ValueError):
    """Raised when a serving size or quantity is not positive."""


class QuantityOutOfRangeError(UnitConversionError):
    """Raised when a converted quantity is too large to represent."""

    error_key = "units.quantity_out_of_range"

    def __init__(self, quantity: float, unit: str) -> None:
        super().__init__(f"Quantity out of range: {quantity} {unit}")
        self.quantity = quantity
        self.unit = unit

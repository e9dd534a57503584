"""
Unit reference data for measurements.

Holds the conversion table between units and the mapping from the many ways
people write a unit ("grams", "Kilo", "litres") to its canonical code.
"""
from decimal import Decimal

from measurements.models import Unit


# Format: (from_code, to_code, multiplier)
# Formula: qty_in_to = qty_in_from * multiplier
# The inverse direction is derived by the conversion service (1 / multiplier).
DEFAULT_CONVERSIONS = [
    # Mass conversions
    (Unit.KILOGRAM, Unit.GRAM, Decimal("1000")),

    # Volume conversions
    (Unit.LITRE, Unit.MILLILITRE, Decimal("1000")),
]


# Mapping of common unit string variations to canonical codes
UNIT_STRING_MAPPINGS = {
    # Mass - grams
    "g": Unit.GRAM,
    "gram": Unit.GRAM,
    "grams": Unit.GRAM,
    "gr": Unit.GRAM,
    "gramme": Unit.GRAM,
    "grammes": Unit.GRAM,
    # Mass - kilograms
    "kg": Unit.KILOGRAM,
    "kilogram": Unit.KILOGRAM,
    "kilograms": Unit.KILOGRAM,
    "kilo": Unit.KILOGRAM,
    "kilos": Unit.KILOGRAM,
    # Volume - millilitres
    "ml": Unit.MILLILITRE,
    "milliliter": Unit.MILLILITRE,
    "milliliters": Unit.MILLILITRE,
    "millilitre": Unit.MILLILITRE,
    "millilitres": Unit.MILLILITRE,
    # Volume - litres
    "l": Unit.LITRE,
    "lt": Unit.LITRE,
    "liter": Unit.LITRE,
    "liters": Unit.LITRE,
    "litre": Unit.LITRE,
    "litres": Unit.LITRE,
    # Count
    "unit": Unit.UNIT,
    "units": Unit.UNIT,
    "u": Unit.UNIT,
    "each": Unit.UNIT,
    "ea": Unit.UNIT,
    "piece": Unit.UNIT,
    "pieces": Unit.UNIT,
    "pc": Unit.UNIT,
    "pcs": Unit.UNIT,
}


def map_unit_string_to_code(unit_string: str) -> str | None:
    """
    Map a unit string to its canonical code.

    Args:
        unit_string: The unit string to map (e.g., "grams", "L", "pcs")

    Returns:
        Canonical unit code if found, None otherwise.
    """
    if not unit_string:
        return None

    normalized = unit_string.strip().lower()
    code = UNIT_STRING_MAPPINGS.get(normalized)
    return code.value if code else None


def get_unit_by_string(unit_string: str) -> Unit | None:
    """
    Get a Unit by its string representation.

    Falls back to matching the unit's label (e.g. "kilogram") when the string
    is not in the mapping table.
    """
    code = map_unit_string_to_code(unit_string)
    if code:
        return Unit(code)

    if not unit_string:
        return None

    normalized = unit_string.strip().lower()
    for unit in Unit:
        if str(unit.label).lower() == normalized:
            return unit
    return None

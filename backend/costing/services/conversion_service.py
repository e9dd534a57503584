"""
Unit conversion service for recipe costing.

Handles converting quantities between units of the same dimension.
"""
from decimal import Decimal
from typing import Optional

from measurements.models import Unit
from measurements.services import DEFAULT_CONVERSIONS, map_unit_string_to_code
from costing.exceptions import IncompatibleUnitsError, UnitMappingError


class ConversionService:
    """
    Service for converting quantities between units.

    Supports:
    - Direct conversions from the conversion table (kg -> g, l -> ml)
    - Bi-directional conversion (will invert multiplier if needed)
    - String-to-Unit mapping for free-text unit fields

    No rounding is applied; callers round when presenting totals.
    """

    def __init__(self, conversions=None):
        self._conversions = {}
        for from_code, to_code, multiplier in conversions or DEFAULT_CONVERSIONS:
            self._conversions[(Unit(from_code), Unit(to_code))] = Decimal(multiplier)

    def map_string_to_unit(self, unit_string: str) -> Optional[Unit]:
        """
        Map a unit string (e.g., "grams", "Kilo", "pcs") to a Unit.

        Returns:
            Unit if found, None otherwise.
        """
        code = map_unit_string_to_code(unit_string)
        return Unit(code) if code else None

    def convert(self, quantity: Decimal, from_unit, to_unit) -> Decimal:
        """
        Convert a quantity from one unit to another.

        Args:
            quantity: The quantity to convert.
            from_unit: The source unit (Unit or unit code).
            to_unit: The target unit (Unit or unit code).

        Returns:
            The converted quantity.

        Raises:
            IncompatibleUnitsError: If the units belong to different dimensions.
        """
        multiplier = self.multiplier(from_unit, to_unit)
        return Decimal(quantity) * multiplier

    def multiplier(self, from_unit, to_unit) -> Decimal:
        """
        Find the factor that turns a quantity in from_unit into to_unit.

        Raises:
            IncompatibleUnitsError: If no conversion path exists.
        """
        from_unit = Unit(from_unit)
        to_unit = Unit(to_unit)

        # Same unit, no conversion needed
        if from_unit == to_unit:
            return Decimal("1")

        multiplier = self._find_conversion_multiplier(from_unit, to_unit)
        if multiplier is None:
            raise IncompatibleUnitsError(from_unit=from_unit.value, to_unit=to_unit.value)
        return multiplier

    def _find_conversion_multiplier(self, from_unit: Unit, to_unit: Unit) -> Optional[Decimal]:
        """
        Find the conversion multiplier between two units.

        Checks:
        1. Direct conversion
        2. Inverse of a direct conversion (reciprocal multiplier)

        Units from different categories never convert, even if a table
        entry says otherwise.
        """
        if from_unit.category != to_unit.category:
            return None

        multiplier = self._conversions.get((from_unit, to_unit))
        if multiplier is not None:
            return multiplier

        inverse = self._conversions.get((to_unit, from_unit))
        if inverse:
            return Decimal("1") / inverse

        return None

    def can_convert(self, from_unit, to_unit) -> bool:
        """
        Check if conversion between two units is possible.
        """
        from_unit = Unit(from_unit)
        to_unit = Unit(to_unit)
        if from_unit == to_unit:
            return True

        return self._find_conversion_multiplier(from_unit, to_unit) is not None

    def convert_from_string(self, quantity: Decimal, from_unit_string: str, to_unit) -> Decimal:
        """
        Convert a quantity using a unit string for the source.

        Raises:
            UnitMappingError: If the unit string cannot be mapped.
            IncompatibleUnitsError: If no conversion path is found.
        """
        from_unit = self.map_string_to_unit(from_unit_string)

        if not from_unit:
            raise UnitMappingError(from_unit_string)

        return self.convert(quantity, from_unit, to_unit)


_default_service = ConversionService()


def convert(quantity: Decimal, from_unit, to_unit) -> Decimal:
    """Convert ``quantity`` between units using the default conversion table."""
    return _default_service.convert(quantity, from_unit, to_unit)

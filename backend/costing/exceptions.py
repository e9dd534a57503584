"""
Custom exceptions for the costing system.
"""


class CostingError(Exception):
    """Base exception for costing-related errors."""
    pass


class IncompatibleUnitsError(CostingError):
    """Raised when two units do not belong to the same dimension."""

    def __init__(self, from_unit, to_unit, message=None):
        self.from_unit = from_unit
        self.to_unit = to_unit
        if message is None:
            message = f"Cannot convert from '{from_unit}' to '{to_unit}'"
        super().__init__(message)


class UnitMappingError(CostingError):
    """Raised when a unit string cannot be mapped to a known unit."""

    def __init__(self, unit_string, message=None):
        self.unit_string = unit_string
        if message is None:
            message = f"Cannot map unit string '{unit_string}' to a known unit"
        super().__init__(message)


class UnresolvedMaterialReferenceError(CostingError):
    """Raised when an ingredient points to a raw material that no longer exists."""

    def __init__(self, raw_material_id, message=None):
        self.raw_material_id = raw_material_id
        if message is None:
            message = f"No raw material found with id '{raw_material_id}'"
        super().__init__(message)


class IncompleteCostError(CostingError):
    """Raised when a recipe cost is required but some ingredients could not be costed."""

    def __init__(self, recipe_name, unavailable_count, message=None):
        self.recipe_name = recipe_name
        self.unavailable_count = unavailable_count
        if message is None:
            message = (
                f"Cost for '{recipe_name}' is incomplete: "
                f"{unavailable_count} ingredient(s) could not be costed"
            )
        super().__init__(message)

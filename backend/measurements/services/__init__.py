"""
Measurements services.
"""
from measurements.services.mapping import (
    DEFAULT_CONVERSIONS,
    UNIT_STRING_MAPPINGS,
    get_unit_by_string,
    map_unit_string_to_code,
)

__all__ = [
    'DEFAULT_CONVERSIONS',
    'UNIT_STRING_MAPPINGS',
    'get_unit_by_string',
    'map_unit_string_to_code',
]

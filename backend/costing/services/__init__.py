"""
Costing services.

- ConversionService: Unit conversion handling
- CostingService: Ingredient and recipe costing
"""
from costing.services.conversion_service import ConversionService, convert
from costing.services.costing_service import (
    CostingService,
    IngredientCostResult,
    RecipeCostBreakdown,
    UnavailableReason,
    quantize_money,
)

__all__ = [
    'ConversionService',
    'convert',
    'CostingService',
    'IngredientCostResult',
    'RecipeCostBreakdown',
    'UnavailableReason',
    'quantize_money',
]

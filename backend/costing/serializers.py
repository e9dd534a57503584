"""
Recipe cost serializers - for cost breakdown and summary responses.
"""
from decimal import ROUND_HALF_UP

from rest_framework import serializers


def _money_field(**kwargs):
    """Cost rounded to cents, half up, the same as ``quantize_money``."""
    return serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP, **kwargs)


class IngredientCostSerializer(serializers.Serializer):
    """Serializer for a single ingredient's cost breakdown."""
    position = serializers.IntegerField()
    raw_material_id = serializers.CharField()
    raw_material_name = serializers.CharField(allow_null=True)
    quantity = serializers.DecimalField(max_digits=None, decimal_places=None)
    unit = serializers.CharField()
    converted_quantity = serializers.DecimalField(max_digits=None, decimal_places=None, allow_null=True)
    material_unit = serializers.CharField(allow_null=True)
    unit_price = serializers.DecimalField(max_digits=None, decimal_places=None, allow_null=True)
    cost = serializers.DecimalField(max_digits=None, decimal_places=None, allow_null=True)
    has_cost = serializers.BooleanField()
    reason = serializers.CharField(allow_null=True, required=False)
    error = serializers.CharField(allow_null=True, required=False)


class MissingMaterialSerializer(serializers.Serializer):
    """Serializer for ingredients that could not be costed."""
    position = serializers.IntegerField()
    raw_material_id = serializers.CharField()
    raw_material_name = serializers.CharField(allow_null=True)
    reason = serializers.CharField()


class RecipeCostBreakdownSerializer(serializers.Serializer):
    """
    Complete cost breakdown for a single recipe.

    Used in GET /api/recipes/:id/cost/
    Totals are rounded to cents here; the breakdown itself stays exact.
    """
    recipe_id = serializers.CharField()
    recipe_name = serializers.CharField()
    yield_amount = serializers.DecimalField(max_digits=None, decimal_places=None)
    yield_unit = serializers.CharField()
    available_total = _money_field()
    total_cost = _money_field(allow_null=True)
    cost_per_yield_unit = _money_field(allow_null=True)
    ingredients = IngredientCostSerializer(many=True)
    missing_materials = MissingMaterialSerializer(many=True)
    is_complete = serializers.BooleanField()
    unavailable_count = serializers.IntegerField()


class RecipeCostSummarySerializer(serializers.Serializer):
    """
    Cost summary for a recipe in list views.

    Used in GET /api/recipes/costs/
    """
    recipe_id = serializers.CharField()
    name = serializers.CharField()
    yield_amount = serializers.DecimalField(max_digits=None, decimal_places=None)
    yield_unit = serializers.CharField()
    total_cost = _money_field(allow_null=True)
    cost_per_yield_unit = _money_field(allow_null=True)
    available_total = _money_field()
    is_cost_complete = serializers.BooleanField()
    has_missing_costs = serializers.BooleanField()
    missing_count = serializers.IntegerField()
    ingredient_count = serializers.IntegerField()

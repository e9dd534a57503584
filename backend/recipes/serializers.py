"""
Recipe book serializers.

Used both at the API boundary and to encode/decode the collections held in
the key-value store. ``save()`` returns domain entities, not model rows.
"""
from dataclasses import replace
from decimal import Decimal

from rest_framework import serializers

from measurements.models import Unit, UnitCategory
from measurements.services import get_unit_by_string
from recipes.entities import Ingredient, RawMaterial, Recipe, RecipeFamily, new_id


def _amount_field(**kwargs):
    return serializers.DecimalField(max_digits=None, decimal_places=None, **kwargs)


class UnitField(serializers.ChoiceField):
    """Choice of the five units; also accepts spellings like 'grams' or 'Litre'."""

    def __init__(self, **kwargs):
        super().__init__(choices=Unit.choices, **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            unit = get_unit_by_string(data)
            if unit is not None:
                return unit.value
        return super().to_internal_value(data)


class UnitSerializer(serializers.Serializer):
    """Read-only description of a unit."""
    code = serializers.CharField(source='value')
    name = serializers.CharField(source='label')
    category = serializers.ChoiceField(choices=UnitCategory.choices)


class RawMaterialSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False)
    name = serializers.CharField(max_length=200)
    price = _amount_field(min_value=Decimal("0"))
    package_size = _amount_field()
    unit = UnitField()

    def validate_package_size(self, value):
        if value <= 0:
            raise serializers.ValidationError("Package size must be greater than zero.")
        return value

    def create(self, validated_data):
        validated_data.setdefault('id', new_id())
        return RawMaterial(**validated_data)

    def update(self, instance, validated_data):
        validated_data.pop('id', None)
        return replace(instance, **validated_data)


class RecipeFamilySerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False)
    name = serializers.CharField(max_length=200)

    def create(self, validated_data):
        validated_data.setdefault('id', new_id())
        return RecipeFamily(**validated_data)

    def update(self, instance, validated_data):
        validated_data.pop('id', None)
        return replace(instance, **validated_data)


class RecipeFamilyWithCountSerializer(RecipeFamilySerializer):
    """Family listing with the number of recipes assigned to it."""
    recipe_count = serializers.SerializerMethodField()

    def get_recipe_count(self, obj):
        return self.context.get('recipe_counts', {}).get(obj.id, 0)


class IngredientSerializer(serializers.Serializer):
    raw_material_id = serializers.CharField(max_length=64)
    quantity = _amount_field()
    unit = UnitField()

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than zero.")
        return value


class RecipeSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False)
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(allow_blank=True, required=False, default="")
    family_id = serializers.CharField(max_length=64, allow_null=True, allow_blank=True, required=False, default=None)
    yield_amount = _amount_field()
    yield_unit = serializers.CharField(max_length=50, allow_blank=True)
    ingredients = IngredientSerializer(many=True, required=False, default=list)
    instructions = serializers.ListField(
        child=serializers.CharField(allow_blank=True),
        required=False,
        default=list,
    )

    def validate_yield_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Yield amount must be greater than zero.")
        return value

    def validate_family_id(self, value):
        # Empty string from a form select means "no family".
        return value or None

    def _build(self, validated_data):
        data = dict(validated_data)
        data['ingredients'] = [Ingredient(**item) for item in data.get('ingredients', [])]
        data['instructions'] = list(data.get('instructions', []))
        return data

    def create(self, validated_data):
        data = self._build(validated_data)
        data.setdefault('id', new_id())
        return Recipe(**data)

    def update(self, instance, validated_data):
        data = self._build(validated_data)
        data.pop('id', None)
        return replace(instance, **data)

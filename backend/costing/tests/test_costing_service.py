"""
Tests for CostingService.
"""
import pytest
from decimal import Decimal

from costing.exceptions import (
    IncompatibleUnitsError,
    IncompleteCostError,
    UnresolvedMaterialReferenceError,
)
from costing.services import CostingService, UnavailableReason, quantize_money
from recipes.entities import Ingredient, RawMaterial, Recipe


def _materials(*materials):
    return {m.id: m for m in materials}


class TestIngredientCost:
    """Tests for costing single ingredients."""

    def test_same_unit(self, eggs):
        service = CostingService(_materials(eggs))

        cost = service.ingredient_cost(Ingredient("rm-eggs", Decimal("6"), "unit"))

        assert cost == Decimal("1.5")

    def test_converted_unit(self, flour):
        """500 g of a material priced 10 per 1 kg costs 5."""
        service = CostingService(_materials(flour))

        cost = service.ingredient_cost(Ingredient("rm-flour", Decimal("500"), "g"))

        assert cost == Decimal("5")

    def test_package_size_divides_price(self):
        """Butter at 2.80 per 250 g: 100 g costs 1.12."""
        butter = RawMaterial("rm-butter", "Butter", Decimal("2.80"), Decimal("250"), "g")
        service = CostingService(_materials(butter))

        assert service.ingredient_cost(Ingredient("rm-butter", Decimal("100"), "g")) == Decimal("1.12")

    def test_missing_material_raises(self):
        service = CostingService({})

        with pytest.raises(UnresolvedMaterialReferenceError) as exc_info:
            service.ingredient_cost(Ingredient("rm-gone", Decimal("1"), "g"))

        assert exc_info.value.raw_material_id == "rm-gone"

    def test_incompatible_units_raises(self, flour):
        service = CostingService(_materials(flour))

        with pytest.raises(IncompatibleUnitsError):
            service.ingredient_cost(Ingredient("rm-flour", Decimal("1"), "ml"))

    def test_callable_lookup(self, flour):
        """The service also accepts a lookup function instead of a mapping."""
        service = CostingService(_materials(flour).get)

        assert service.ingredient_cost(Ingredient("rm-flour", Decimal("1"), "kg")) == Decimal("10")


class TestRecipeCost:
    """Tests for computing recipe cost breakdowns."""

    def test_complete_recipe(self, flour, milk, eggs, pancakes):
        """Test computing a recipe with all ingredients costed."""
        service = CostingService(_materials(flour, milk, eggs))

        breakdown = service.compute_recipe_cost(pancakes)

        assert breakdown.is_complete is True
        assert breakdown.unavailable_count == 0
        assert len(breakdown.ingredients) == 3
        # Flour 5.00 + milk 0.50 + eggs 0.50
        assert breakdown.total_cost == Decimal("6")
        assert breakdown.available_total == Decimal("6")
        assert breakdown.cost_per_yield_unit == Decimal("1.5")
        assert breakdown.require_complete() is breakdown

    def test_ingredient_lines_keep_recipe_order(self, flour, milk, eggs, pancakes):
        service = CostingService(_materials(flour, milk, eggs))

        breakdown = service.compute_recipe_cost(pancakes)

        assert [i.position for i in breakdown.ingredients] == [0, 1, 2]
        assert [i.raw_material_name for i in breakdown.ingredients] == ["Flour", "Milk", "Eggs"]
        assert breakdown.ingredients[0].converted_quantity == Decimal("0.5")
        assert breakdown.ingredients[0].unit_price == Decimal("10")

    def test_per_yield_unit(self):
        """A total of 25 over a yield of 5 is 5 per unit."""
        material = RawMaterial("rm-x", "X", Decimal("25"), Decimal("1"), "unit")
        recipe = Recipe(
            id="r", name="R", yield_amount=Decimal("5"), yield_unit="portions",
            ingredients=[Ingredient("rm-x", Decimal("1"), "unit")],
        )

        breakdown = CostingService(_materials(material)).compute_recipe_cost(recipe)

        assert breakdown.total_cost == Decimal("25")
        assert breakdown.cost_per_yield_unit == Decimal("5")

    def test_missing_material_makes_breakdown_incomplete(self, flour, eggs, pancakes):
        """Test an unresolved material is flagged and never counted as zero."""
        service = CostingService(_materials(flour, eggs))

        breakdown = service.compute_recipe_cost(pancakes)

        assert breakdown.is_complete is False
        assert breakdown.total_cost is None
        assert breakdown.cost_per_yield_unit is None
        assert breakdown.available_total == Decimal("5.5")
        assert breakdown.unavailable_count == 1
        assert breakdown.missing_materials == [{
            "position": 1,
            "raw_material_id": "rm-milk",
            "raw_material_name": None,
            "reason": UnavailableReason.UNRESOLVED_MATERIAL,
        }]
        milk_line = breakdown.ingredients[1]
        assert milk_line.has_cost is False
        assert milk_line.cost is None

    def test_incompatible_units_makes_breakdown_incomplete(self, flour, milk, eggs):
        recipe = Recipe(
            id="r", name="Odd", yield_amount=Decimal("1"), yield_unit="",
            ingredients=[
                Ingredient("rm-flour", Decimal("100"), "ml"),
                Ingredient("rm-eggs", Decimal("12"), "unit"),
            ],
        )

        breakdown = CostingService(_materials(flour, milk, eggs)).compute_recipe_cost(recipe)

        assert breakdown.is_complete is False
        assert breakdown.available_total == Decimal("3")
        assert breakdown.missing_materials[0]["reason"] == UnavailableReason.INCOMPATIBLE_UNITS
        assert breakdown.missing_materials[0]["raw_material_name"] == "Flour"

    def test_unusable_package_size_is_unavailable(self):
        broken = RawMaterial("rm-broken", "Broken", Decimal("5"), Decimal("0"), "g")
        recipe = Recipe(
            id="r", name="R", yield_amount=Decimal("1"), yield_unit="",
            ingredients=[Ingredient("rm-broken", Decimal("1"), "g")],
        )

        breakdown = CostingService(_materials(broken)).compute_recipe_cost(recipe)

        assert breakdown.is_complete is False
        assert breakdown.missing_materials[0]["reason"] == UnavailableReason.INVALID_MATERIAL

    def test_require_complete_raises_when_incomplete(self, flour, pancakes):
        breakdown = CostingService(_materials(flour)).compute_recipe_cost(pancakes)

        with pytest.raises(IncompleteCostError) as exc_info:
            breakdown.require_complete()

        assert exc_info.value.unavailable_count == 2
        assert exc_info.value.recipe_name == "Pancakes"

    def test_recipe_without_ingredients(self):
        recipe = Recipe(id="r", name="Empty", yield_amount=Decimal("2"), yield_unit="")

        breakdown = CostingService({}).compute_recipe_cost(recipe)

        assert breakdown.is_complete is True
        assert breakdown.total_cost == Decimal("0")
        assert breakdown.cost_per_yield_unit == Decimal("0")

    def test_non_positive_yield_leaves_per_unit_undefined(self, flour):
        recipe = Recipe(
            id="r", name="R", yield_amount=Decimal("0"), yield_unit="",
            ingredients=[Ingredient("rm-flour", Decimal("1"), "kg")],
        )

        breakdown = CostingService(_materials(flour)).compute_recipe_cost(recipe)

        assert breakdown.total_cost == Decimal("10")
        assert breakdown.cost_per_yield_unit is None

    def test_price_change_is_reflected_immediately(self, stocked_book, pancakes):
        """Costs are recomputed from the current materials on every call."""
        service = CostingService.for_recipe_book(stocked_book)
        assert service.compute_recipe_cost(pancakes).total_cost == Decimal("6")

        flour = stocked_book.get_raw_material("rm-flour")
        stocked_book.upsert_raw_material(
            RawMaterial(flour.id, flour.name, Decimal("20"), flour.package_size, flour.unit)
        )

        assert service.compute_recipe_cost(pancakes).total_cost == Decimal("11")

    def test_no_rounding_in_totals(self):
        material = RawMaterial("rm-x", "X", Decimal("1"), Decimal("3"), "unit")
        recipe = Recipe(
            id="r", name="R", yield_amount=Decimal("1"), yield_unit="",
            ingredients=[Ingredient("rm-x", Decimal("1"), "unit")],
        )

        breakdown = CostingService(_materials(material)).compute_recipe_cost(recipe)

        assert breakdown.total_cost == Decimal("1") / Decimal("3")
        assert quantize_money(breakdown.total_cost) == Decimal("0.33")


class TestRecipesSummary:
    """Tests for multi-recipe cost summaries."""

    def test_summary_fields(self, flour, pancakes):
        complete = Recipe(
            id="r-bread", name="Bread", yield_amount=Decimal("2"), yield_unit="loaves",
            ingredients=[Ingredient("rm-flour", Decimal("1"), "kg")],
        )
        service = CostingService(_materials(flour))

        summaries = service.compute_recipes_summary([complete, pancakes])

        assert [s["recipe_id"] for s in summaries] == ["r-bread", "recipe-pancakes"]
        bread, pancake = summaries
        assert bread["total_cost"] == Decimal("10")
        assert bread["cost_per_yield_unit"] == Decimal("5")
        assert bread["is_cost_complete"] is True
        assert bread["missing_count"] == 0
        assert pancake["is_cost_complete"] is False
        assert pancake["has_missing_costs"] is True
        assert pancake["missing_count"] == 2
        assert pancake["available_total"] == Decimal("5")
        assert pancake["ingredient_count"] == 3


class TestQuantizeMoney:

    def test_rounds_half_up(self):
        assert quantize_money(Decimal("1.005")) == Decimal("1.01")
        assert quantize_money(Decimal("2.004")) == Decimal("2.00")

    def test_none_passes_through(self):
        assert quantize_money(None) is None

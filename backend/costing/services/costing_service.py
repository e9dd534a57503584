"""
Costing service for recipes.

Core service for resolving ingredient costs and computing recipe costs.

Cost Resolution (per ingredient):
1. Resolve the raw material the ingredient points to
2. Convert the ingredient quantity into the material's purchase unit
3. Multiply by the material's unit price (price / package size)

An ingredient that fails step 1 or 2 is flagged as unavailable; it never
aborts the recipe and never counts as zero. The recipe breakdown carries
the sum of the available costs together with an explicit completeness flag.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, List, Mapping, Optional, Union

from costing.exceptions import (
    CostingError,
    IncompatibleUnitsError,
    IncompleteCostError,
    UnresolvedMaterialReferenceError,
)
from costing.services.conversion_service import ConversionService
from recipes.entities import Ingredient, RawMaterial, Recipe

logger = logging.getLogger(__name__)

MaterialLookup = Callable[[str], Optional[RawMaterial]]


class UnavailableReason:
    UNRESOLVED_MATERIAL = "unresolved_material"
    INCOMPATIBLE_UNITS = "incompatible_units"
    INVALID_MATERIAL = "invalid_material"


@dataclass
class IngredientCostResult:
    """Result of costing a single ingredient in a recipe."""
    position: int
    raw_material_id: str
    raw_material_name: Optional[str]
    quantity: Decimal  # Quantity in recipe unit
    unit: str  # Recipe unit
    converted_quantity: Optional[Decimal] = None  # Quantity in the material's unit
    material_unit: Optional[str] = None
    unit_price: Optional[Decimal] = None  # Cost per material unit
    cost: Optional[Decimal] = None  # converted_quantity * unit_price
    has_cost: bool = False
    reason: Optional[str] = None
    error: Optional[str] = None


@dataclass
class RecipeCostBreakdown:
    """
    Complete cost breakdown for a recipe.

    ``available_total`` always holds the sum of the ingredient costs that
    could be computed. ``total_cost`` and ``cost_per_yield_unit`` are only
    set when every ingredient was costed.
    """
    recipe_id: str
    recipe_name: str
    yield_amount: Decimal
    yield_unit: str
    available_total: Decimal = Decimal("0")
    total_cost: Optional[Decimal] = None
    cost_per_yield_unit: Optional[Decimal] = None
    ingredients: List[IngredientCostResult] = field(default_factory=list)
    missing_materials: List[dict] = field(default_factory=list)
    is_complete: bool = True

    @property
    def unavailable_count(self) -> int:
        return len(self.missing_materials)

    def require_complete(self) -> "RecipeCostBreakdown":
        """Return self, or raise IncompleteCostError if any ingredient is unavailable."""
        if not self.is_complete:
            raise IncompleteCostError(self.recipe_name, self.unavailable_count)
        return self


def quantize_money(value: Optional[Decimal], places: str = "0.01") -> Optional[Decimal]:
    """Round a cost for display. Costs are kept exact everywhere else."""
    if value is None:
        return None
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


class CostingService:
    """
    Service for computing ingredient and recipe costs.

    Costs are computed from the current material collection on every call;
    nothing is cached, so a price edit is reflected immediately.
    """

    def __init__(
        self,
        materials: Union[Mapping[str, RawMaterial], MaterialLookup],
        conversion_service: Optional[ConversionService] = None,
    ):
        if callable(materials):
            self._lookup = materials
        else:
            self._lookup = materials.get
        self._conversion_service = conversion_service or ConversionService()

    @classmethod
    def for_recipe_book(cls, recipe_book) -> "CostingService":
        return cls(recipe_book.get_raw_material)

    def resolve_material(self, raw_material_id: str) -> RawMaterial:
        """
        Look up the raw material an ingredient points to.

        Raises:
            UnresolvedMaterialReferenceError: If no such material exists.
        """
        material = self._lookup(raw_material_id)
        if material is None:
            raise UnresolvedMaterialReferenceError(raw_material_id)
        return material

    def ingredient_cost(self, ingredient: Ingredient) -> Decimal:
        """
        Compute the cost of one ingredient line.

        Raises:
            UnresolvedMaterialReferenceError: If the material is missing.
            IncompatibleUnitsError: If the ingredient unit cannot be
                converted into the material's unit.
        """
        return self._cost_ingredient(0, ingredient).cost

    def _cost_ingredient(self, position: int, ingredient: Ingredient) -> IngredientCostResult:
        result = IngredientCostResult(
            position=position,
            raw_material_id=ingredient.raw_material_id,
            raw_material_name=None,
            quantity=ingredient.quantity,
            unit=ingredient.unit,
        )

        material = self.resolve_material(ingredient.raw_material_id)
        result.raw_material_name = material.name
        result.material_unit = material.unit

        unit_price = material.unit_price
        if unit_price is None:
            raise CostingError(f"Raw material '{material.name}' has no usable package size")

        converted = self._conversion_service.convert(
            ingredient.quantity,
            ingredient.unit,
            material.unit,
        )

        result.converted_quantity = converted
        result.unit_price = unit_price
        result.cost = converted * unit_price
        result.has_cost = True
        return result

    def compute_recipe_cost(self, recipe: Recipe) -> RecipeCostBreakdown:
        """
        Compute the cost of a recipe from its ingredients.

        Unavailable ingredients are recorded on the breakdown and make it
        incomplete; the remaining ingredients are still costed.
        """
        breakdown = RecipeCostBreakdown(
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            yield_amount=recipe.yield_amount,
            yield_unit=recipe.yield_unit,
        )

        available_total = Decimal("0")

        for position, ingredient in enumerate(recipe.ingredients):
            try:
                ingredient_result = self._cost_ingredient(position, ingredient)
            except UnresolvedMaterialReferenceError as e:
                ingredient_result = self._unavailable(
                    position, ingredient, UnavailableReason.UNRESOLVED_MATERIAL, e
                )
            except IncompatibleUnitsError as e:
                ingredient_result = self._unavailable(
                    position, ingredient, UnavailableReason.INCOMPATIBLE_UNITS, e
                )
                ingredient_result.raw_material_name = self._material_name(ingredient)
            except CostingError as e:
                ingredient_result = self._unavailable(
                    position, ingredient, UnavailableReason.INVALID_MATERIAL, e
                )
                ingredient_result.raw_material_name = self._material_name(ingredient)

            if ingredient_result.has_cost:
                available_total += ingredient_result.cost
            else:
                breakdown.is_complete = False
                breakdown.missing_materials.append({
                    "position": position,
                    "raw_material_id": ingredient.raw_material_id,
                    "raw_material_name": ingredient_result.raw_material_name,
                    "reason": ingredient_result.reason,
                })
            breakdown.ingredients.append(ingredient_result)

        breakdown.available_total = available_total

        if breakdown.is_complete:
            breakdown.total_cost = available_total
            if recipe.yield_amount > 0:
                breakdown.cost_per_yield_unit = available_total / recipe.yield_amount
            else:
                logger.warning(
                    "Recipe %s has non-positive yield %s; per-unit cost left undefined",
                    recipe.id, recipe.yield_amount,
                )
        else:
            logger.debug(
                "Recipe %s cost incomplete: %d unavailable ingredient(s)",
                recipe.id, breakdown.unavailable_count,
            )

        return breakdown

    def _unavailable(self, position, ingredient, reason, error) -> IngredientCostResult:
        return IngredientCostResult(
            position=position,
            raw_material_id=ingredient.raw_material_id,
            raw_material_name=None,
            quantity=ingredient.quantity,
            unit=ingredient.unit,
            has_cost=False,
            reason=reason,
            error=str(error),
        )

    def _material_name(self, ingredient: Ingredient) -> Optional[str]:
        material = self._lookup(ingredient.raw_material_id)
        return material.name if material else None

    def compute_recipes_summary(self, recipes: Iterable[Recipe]) -> List[dict]:
        """
        Compute cost summaries for multiple recipes.

        Returns:
            List of summary dicts for each recipe, in the given order.
        """
        summaries = []

        for recipe in recipes:
            breakdown = self.compute_recipe_cost(recipe)
            summaries.append({
                "recipe_id": breakdown.recipe_id,
                "name": breakdown.recipe_name,
                "yield_amount": breakdown.yield_amount,
                "yield_unit": breakdown.yield_unit,
                "total_cost": breakdown.total_cost,
                "cost_per_yield_unit": breakdown.cost_per_yield_unit,
                "available_total": breakdown.available_total,
                "is_cost_complete": breakdown.is_complete,
                "has_missing_costs": breakdown.unavailable_count > 0,
                "missing_count": breakdown.unavailable_count,
                "ingredient_count": len(breakdown.ingredients),
            })

        return summaries

"""
Recipe book domain entities.

Plain dataclasses: they are stored as whole collections through the
key-value storage layer, never as individual database rows.
"""
import unicodedata
import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import List, Optional, Tuple


def new_id() -> str:
    """Generate a fresh opaque entity id."""
    return str(uuid.uuid4())


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn").casefold()


def name_sort_key(entity) -> Tuple[str, str]:
    """Case- and accent-insensitive sort key for anything with a ``name``; the raw name breaks ties."""
    return (_fold(entity.name), entity.name)


@dataclass
class RawMaterial:
    """A purchasable raw ingredient: ``price`` buys ``package_size`` of ``unit``."""
    id: str
    name: str
    price: Decimal
    package_size: Decimal
    unit: str

    @property
    def unit_price(self) -> Optional[Decimal]:
        """Price of one ``unit`` of this material, None if the package size is unusable."""
        if self.package_size <= 0:
            return None
        return self.price / self.package_size


@dataclass
class RecipeFamily:
    id: str
    name: str


@dataclass
class Ingredient:
    """A line item inside a recipe. Owned by the recipe, not addressable on its own."""
    raw_material_id: str
    quantity: Decimal
    unit: str


@dataclass
class Recipe:
    id: str
    name: str
    yield_amount: Decimal
    yield_unit: str
    description: str = ""
    family_id: Optional[str] = None
    ingredients: List[Ingredient] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)

    def without_family(self) -> "Recipe":
        return replace(self, family_id=None)

    def uses_material(self, raw_material_id: str) -> bool:
        return any(i.raw_material_id == raw_material_id for i in self.ingredients)

    def __repr__(self) -> str:
        return f"Recipe({self.name} yields {self.yield_amount} {self.yield_unit})"

"""
Recipe book service.

Owns the three entity collections (raw materials, recipes, families) and the
integrity rules triggered by structural edits:

- Deleting a family clears ``family_id`` on every recipe that used it.
  Both collections are written inside one storage transaction.
- Deleting a raw material does NOT touch recipes. Ingredients keep the
  dangling reference and the costing service reports them as unavailable.

Collections are loaded once with ``load()`` and every mutation saves the
collection(s) it changed, each fully replaced under its own key.
"""
import logging
from dataclasses import replace
from decimal import Decimal
from typing import Dict, List, Optional

from django.conf import settings

from recipes.entities import RawMaterial, Recipe, RecipeFamily, name_sort_key, new_id
from recipes.exceptions import EntityNotFoundError
from recipes.serializers import RawMaterialSerializer, RecipeFamilySerializer, RecipeSerializer
from recipes.storage import KeyValueStore

logger = logging.getLogger(__name__)


DEFAULT_STORAGE_KEYS = {
    'MATERIALS_KEY': 'rawMaterials',
    'RECIPES_KEY': 'recipes',
    'FAMILIES_KEY': 'families',
}


def get_storage_keys() -> Dict[str, str]:
    config = getattr(settings, 'RECIPE_BOOK', {})
    return {name: config.get(name, default) for name, default in DEFAULT_STORAGE_KEYS.items()}


class RecipeBook:
    """
    The user's recipe book: materials, recipes and families.

    Args:
        store: Key-value storage backend.
        defaults: Optional starting collections used when a key is absent
            or unreadable, keyed like the storage settings
            (``materials``, ``recipes``, ``families``).
    """

    def __init__(self, store: KeyValueStore, defaults: Optional[dict] = None):
        self.store = store
        self._defaults = defaults or {}
        keys = get_storage_keys()
        self.materials_key = keys['MATERIALS_KEY']
        self.recipes_key = keys['RECIPES_KEY']
        self.families_key = keys['FAMILIES_KEY']

        self._materials: List[RawMaterial] = []
        self._recipes: List[Recipe] = []
        self._families: List[RecipeFamily] = []

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> "RecipeBook":
        """Read all three collections from storage."""
        self._materials = self._load_collection(
            self.materials_key, RawMaterialSerializer, self._defaults.get('materials', [])
        )
        self._recipes = self._load_collection(
            self.recipes_key, RecipeSerializer, self._defaults.get('recipes', [])
        )
        self._families = self._load_collection(
            self.families_key, RecipeFamilySerializer, self._defaults.get('families', [])
        )
        logger.info(
            "Recipe book loaded: %d materials, %d recipes, %d families",
            len(self._materials), len(self._recipes), len(self._families),
        )
        return self

    def _load_collection(self, key, serializer_class, default):
        raw = self.store.load(key, None)
        if raw is None:
            return list(default)

        serializer = serializer_class(data=raw, many=True)
        if not serializer.is_valid():
            logger.warning(
                "Stored collection '%s' failed validation; using default. Errors: %s",
                key, serializer.errors,
            )
            return list(default)
        return serializer.save()

    def _save_materials(self, materials):
        self.store.save(self.materials_key, RawMaterialSerializer(materials, many=True).data)

    def _save_recipes(self, recipes):
        self.store.save(self.recipes_key, RecipeSerializer(recipes, many=True).data)

    def _save_families(self, families):
        self.store.save(self.families_key, RecipeFamilySerializer(families, many=True).data)

    def save_all(self) -> None:
        with self.store.atomic():
            self._save_materials(self._materials)
            self._save_recipes(self._recipes)
            self._save_families(self._families)

    def replace_all(self, materials, recipes, families) -> None:
        """Replace every collection at once (used by seeding)."""
        materials, recipes, families = list(materials), list(recipes), list(families)
        with self.store.atomic():
            self._save_materials(materials)
            self._save_recipes(recipes)
            self._save_families(families)
        self._materials, self._recipes, self._families = materials, recipes, families

    def has_stored_content(self) -> bool:
        """Whether any collection has ever been saved, as opposed to served from defaults."""
        keys = (self.materials_key, self.recipes_key, self.families_key)
        return any(self.store.load(key, None) for key in keys)

    # ------------------------------------------------------------------
    # Raw materials
    # ------------------------------------------------------------------

    def raw_materials(self) -> List[RawMaterial]:
        """Raw materials sorted by name."""
        return sorted(self._materials, key=name_sort_key)

    def get_raw_material(self, raw_material_id: str) -> Optional[RawMaterial]:
        for material in self._materials:
            if material.id == raw_material_id:
                return material
        return None

    def add_raw_material(self, name: str, price: Decimal, package_size: Decimal, unit: str) -> RawMaterial:
        material = RawMaterial(
            id=new_id(), name=name, price=price, package_size=package_size, unit=unit
        )
        materials = self._materials + [material]
        self._save_materials(materials)
        self._materials = materials
        return material

    def upsert_raw_material(self, material: RawMaterial) -> RawMaterial:
        materials = self._upsert(self._materials, material)
        self._save_materials(materials)
        self._materials = materials
        return material

    def delete_raw_material(self, raw_material_id: str) -> None:
        """
        Remove a raw material.

        Recipes are left untouched: their ingredients keep pointing at the
        removed id and cost as unavailable from now on.
        """
        self._require(self.get_raw_material(raw_material_id), 'raw material', raw_material_id)
        materials = [m for m in self._materials if m.id != raw_material_id]
        self._save_materials(materials)
        self._materials = materials

        dangling = sum(1 for r in self._recipes if r.uses_material(raw_material_id))
        if dangling:
            logger.info(
                "Deleted raw material %s still referenced by %d recipe(s)",
                raw_material_id, dangling,
            )

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    def recipes(self) -> List[Recipe]:
        """Recipes sorted by name."""
        return sorted(self._recipes, key=name_sort_key)

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def upsert_recipe(self, recipe: Recipe) -> Recipe:
        """Insert the recipe if its id is new, else replace it in place."""
        recipes = self._upsert(self._recipes, recipe)
        self._save_recipes(recipes)
        self._recipes = recipes
        return recipe

    def delete_recipe(self, recipe_id: str) -> None:
        self._require(self.get_recipe(recipe_id), 'recipe', recipe_id)
        recipes = [r for r in self._recipes if r.id != recipe_id]
        self._save_recipes(recipes)
        self._recipes = recipes

    # ------------------------------------------------------------------
    # Families
    # ------------------------------------------------------------------

    def families(self) -> List[RecipeFamily]:
        """Families sorted by name."""
        return sorted(self._families, key=name_sort_key)

    def get_family(self, family_id: Optional[str]) -> Optional[RecipeFamily]:
        if not family_id:
            return None
        for family in self._families:
            if family.id == family_id:
                return family
        return None

    def family_for(self, recipe: Recipe) -> Optional[RecipeFamily]:
        """The recipe's family; an id that no longer resolves reads as unassigned."""
        return self.get_family(recipe.family_id)

    def family_recipe_count(self, family_id: str) -> int:
        return sum(1 for r in self._recipes if r.family_id == family_id)

    def family_recipe_counts(self) -> Dict[str, int]:
        return {f.id: self.family_recipe_count(f.id) for f in self._families}

    def add_family(self, name: str) -> RecipeFamily:
        """Create a family and return it so callers can attach it right away."""
        family = RecipeFamily(id=new_id(), name=name)
        families = self._families + [family]
        self._save_families(families)
        self._families = families
        return family

    def rename_family(self, family_id: str, name: str) -> RecipeFamily:
        family = self._require(self.get_family(family_id), 'family', family_id)
        renamed = replace(family, name=name)
        families = self._upsert(self._families, renamed)
        self._save_families(families)
        self._families = families
        return renamed

    def delete_family(self, family_id: str) -> List[str]:
        """
        Remove a family and unassign it from every recipe that used it.

        Returns:
            Ids of the recipes whose family was cleared.
        """
        self._require(self.get_family(family_id), 'family', family_id)

        families = [f for f in self._families if f.id != family_id]
        cleared = []
        recipes = []
        for recipe in self._recipes:
            if recipe.family_id == family_id:
                recipe = recipe.without_family()
                cleared.append(recipe.id)
            recipes.append(recipe)

        with self.store.atomic():
            self._save_families(families)
            self._save_recipes(recipes)
        self._families, self._recipes = families, recipes

        logger.info("Deleted family %s; unassigned %d recipe(s)", family_id, len(cleared))
        return cleared

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _upsert(items, entity):
        for index, existing in enumerate(items):
            if existing.id == entity.id:
                return items[:index] + [entity] + items[index + 1:]
        return items + [entity]

    @staticmethod
    def _require(entity, entity_type, entity_id):
        if entity is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return entity

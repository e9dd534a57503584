"""
Starter content for a new recipe book.

Used by the ``seed_recipe_book`` command and, when ``SEED_WHEN_EMPTY`` is
enabled, as the default for collections that have never been saved.
"""
from decimal import Decimal

from measurements.models import Unit
from recipes.entities import Ingredient, RawMaterial, Recipe, RecipeFamily


INITIAL_FAMILIES = [
    {"id": "family-breads", "name": "Breads"},
    {"id": "family-pastries", "name": "Pastries"},
    {"id": "family-sauces", "name": "Sauces"},
]

INITIAL_RAW_MATERIALS = [
    {"id": "rm-flour", "name": "Wheat flour", "price": "1.20", "package_size": "1", "unit": Unit.KILOGRAM},
    {"id": "rm-sugar", "name": "Sugar", "price": "1.50", "package_size": "1", "unit": Unit.KILOGRAM},
    {"id": "rm-butter", "name": "Butter", "price": "2.80", "package_size": "250", "unit": Unit.GRAM},
    {"id": "rm-milk", "name": "Whole milk", "price": "1.10", "package_size": "1", "unit": Unit.LITRE},
    {"id": "rm-eggs", "name": "Eggs", "price": "3.00", "package_size": "12", "unit": Unit.UNIT},
    {"id": "rm-yeast", "name": "Dry yeast", "price": "0.90", "package_size": "10", "unit": Unit.GRAM},
    {"id": "rm-salt", "name": "Salt", "price": "0.60", "package_size": "1", "unit": Unit.KILOGRAM},
    {"id": "rm-water", "name": "Water", "price": "0", "package_size": "1", "unit": Unit.LITRE},
]

INITIAL_RECIPES = [
    {
        "id": "recipe-white-bread",
        "name": "White bread",
        "description": "Everyday sandwich loaf.",
        "family_id": "family-breads",
        "yield_amount": "2",
        "yield_unit": "loaves",
        "ingredients": [
            ("rm-flour", "1", Unit.KILOGRAM),
            ("rm-water", "650", Unit.MILLILITRE),
            ("rm-yeast", "10", Unit.GRAM),
            ("rm-salt", "20", Unit.GRAM),
        ],
        "instructions": [
            "Mix flour, water, yeast and salt into a smooth dough.",
            "Knead for 10 minutes and let rise until doubled.",
            "Shape into two loaves, proof for 45 minutes.",
            "Bake at 220 C for 35 minutes.",
        ],
    },
    {
        "id": "recipe-crepes",
        "name": "Crepes",
        "description": "Thin French pancakes.",
        "family_id": "family-pastries",
        "yield_amount": "12",
        "yield_unit": "crepes",
        "ingredients": [
            ("rm-flour", "250", Unit.GRAM),
            ("rm-milk", "500", Unit.MILLILITRE),
            ("rm-eggs", "3", Unit.UNIT),
            ("rm-butter", "50", Unit.GRAM),
            ("rm-sugar", "30", Unit.GRAM),
        ],
        "instructions": [
            "Whisk flour, sugar and eggs, then add the milk gradually.",
            "Stir in the melted butter and rest the batter for 30 minutes.",
            "Cook thin layers in a hot buttered pan.",
        ],
    },
]


def initial_families():
    return [RecipeFamily(**data) for data in INITIAL_FAMILIES]


def initial_raw_materials():
    return [
        RawMaterial(
            id=data["id"],
            name=data["name"],
            price=Decimal(data["price"]),
            package_size=Decimal(data["package_size"]),
            unit=data["unit"].value,
        )
        for data in INITIAL_RAW_MATERIALS
    ]


def initial_recipes():
    recipes = []
    for data in INITIAL_RECIPES:
        recipes.append(Recipe(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            family_id=data["family_id"],
            yield_amount=Decimal(data["yield_amount"]),
            yield_unit=data["yield_unit"],
            ingredients=[
                Ingredient(raw_material_id=rm_id, quantity=Decimal(qty), unit=unit.value)
                for rm_id, qty, unit in data["ingredients"]
            ],
            instructions=list(data["instructions"]),
        ))
    return recipes


def initial_collections():
    return {
        'materials': initial_raw_materials(),
        'recipes': initial_recipes(),
        'families': initial_families(),
    }

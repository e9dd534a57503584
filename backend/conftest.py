"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from decimal import Decimal

from recipes.entities import Ingredient, RawMaterial, Recipe, RecipeFamily


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def reset_recipe_book_after_test():
    """
    Drop the process-wide recipe book after each test.

    The recipe book is loaded once and kept in memory; without this a test
    would see the collections left behind by the previous one.
    """
    from recipes.services import reset_recipe_book

    reset_recipe_book()
    yield
    reset_recipe_book()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/recipes/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


# ============================================================================
# RECIPE BOOK FIXTURES
# ============================================================================

@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    from recipes.storage import InMemoryKeyValueStore
    return InMemoryKeyValueStore()


@pytest.fixture
def recipe_book(memory_store):
    """Empty recipe book backed by the in-memory store."""
    from recipes.services import RecipeBook
    return RecipeBook(memory_store).load()


@pytest.fixture
def flour():
    """Flour at 10.00 per kilogram."""
    return RawMaterial(id="rm-flour", name="Flour", price=Decimal("10"), package_size=Decimal("1"), unit="kg")


@pytest.fixture
def milk():
    """Milk at 2.00 per litre."""
    return RawMaterial(id="rm-milk", name="Milk", price=Decimal("2"), package_size=Decimal("1"), unit="l")


@pytest.fixture
def eggs():
    """Eggs at 3.00 per dozen."""
    return RawMaterial(id="rm-eggs", name="Eggs", price=Decimal("3"), package_size=Decimal("12"), unit="unit")


@pytest.fixture
def pastries():
    return RecipeFamily(id="family-pastries", name="Pastries")


@pytest.fixture
def pancakes(pastries):
    """
    Pancakes for 4: 500 g flour (5.00), 250 ml milk (0.50), 2 eggs (0.50).
    Total 6.00, 1.50 per pancake.
    """
    return Recipe(
        id="recipe-pancakes",
        name="Pancakes",
        yield_amount=Decimal("4"),
        yield_unit="pancakes",
        family_id=pastries.id,
        ingredients=[
            Ingredient(raw_material_id="rm-flour", quantity=Decimal("500"), unit="g"),
            Ingredient(raw_material_id="rm-milk", quantity=Decimal("250"), unit="ml"),
            Ingredient(raw_material_id="rm-eggs", quantity=Decimal("2"), unit="unit"),
        ],
        instructions=["Mix.", "Fry."],
    )


@pytest.fixture
def stocked_book(recipe_book, flour, milk, eggs, pastries, pancakes):
    """Recipe book holding the pancake recipe, its materials and its family."""
    recipe_book.replace_all([flour, milk, eggs], [pancakes], [pastries])
    return recipe_book

"""
Recipe book services.

The process-wide recipe book is created lazily on first access and loaded
from the database-backed store once. Mutations save as they go.
"""
from typing import Optional

from django.conf import settings

from recipes.services.recipe_book import RecipeBook, get_storage_keys
from recipes.services.seed_data import initial_collections


_recipe_book: Optional[RecipeBook] = None


def get_recipe_book() -> RecipeBook:
    """Return the process-wide recipe book, loading it on first use."""
    global _recipe_book
    if _recipe_book is None:
        from recipes.storage import DatabaseKeyValueStore

        seed = getattr(settings, 'RECIPE_BOOK', {}).get('SEED_WHEN_EMPTY', True)
        defaults = initial_collections() if seed else None
        _recipe_book = RecipeBook(DatabaseKeyValueStore(), defaults=defaults).load()
    return _recipe_book


def reset_recipe_book(recipe_book: Optional[RecipeBook] = None) -> None:
    """Drop (or replace) the process-wide recipe book; the next access reloads it."""
    global _recipe_book
    _recipe_book = recipe_book


__all__ = [
    'RecipeBook',
    'get_recipe_book',
    'get_storage_keys',
    'reset_recipe_book',
]

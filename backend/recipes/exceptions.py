"""
Custom exceptions for the recipe book.
"""


class RecipeBookError(Exception):
    """Base exception for recipe book errors."""
    pass


class EntityNotFoundError(RecipeBookError):
    """Raised when an id does not match any entity in a collection."""

    def __init__(self, entity_type, entity_id, message=None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        if message is None:
            message = f"No {entity_type} found with id '{entity_id}'"
        super().__init__(message)

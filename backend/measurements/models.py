"""
Measurements app - shared unit definitions.

The recipe book works with a fixed set of five units. Every unit belongs to
exactly one category (dimension); conversion is only defined between units
of the same category.

Units are plain choices rather than database rows: a gram is a gram
everywhere and nothing about them is user-editable.
"""
from django.db import models
from django.utils.translation import gettext_lazy as _


class UnitCategory(models.TextChoices):
    """Categories (physical dimensions) for measurement units."""
    MASS = "mass", _("Mass")
    VOLUME = "volume", _("Volume")
    COUNT = "count", _("Count")


class Unit(models.TextChoices):
    """
    Measurement unit used for raw-material packages and ingredient quantities.

    The stored value is the short code, e.g. 'g', 'kg', 'ml', 'l', 'unit'.
    """
    GRAM = "g", _("gram")
    KILOGRAM = "kg", _("kilogram")
    MILLILITRE = "ml", _("millilitre")
    LITRE = "l", _("litre")
    UNIT = "unit", _("unit")

    @property
    def category(self) -> "UnitCategory":
        return UNIT_CATEGORIES[self]


UNIT_CATEGORIES = {
    Unit.GRAM: UnitCategory.MASS,
    Unit.KILOGRAM: UnitCategory.MASS,
    Unit.MILLILITRE: UnitCategory.VOLUME,
    Unit.LITRE: UnitCategory.VOLUME,
    Unit.UNIT: UnitCategory.COUNT,
}

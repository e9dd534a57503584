from django.db import models
from django.utils.translation import gettext_lazy as _


class StoredCollection(models.Model):
    """
    One entry of the recipe book's key-value store.

    Each entity collection (raw materials, recipes, families) lives under its
    own key as a JSON document and is replaced wholesale on every save.
    """
    key = models.CharField(
        max_length=100,
        unique=True,
        help_text=_("Storage key, e.g. 'recipes'")
    )
    value = models.TextField(
        help_text=_("Serialized collection (JSON)")
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Stored Collection")
        verbose_name_plural = _("Stored Collections")
        ordering = ['key']

    def __str__(self):
        return self.key

from django.apps import AppConfig
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        """
        Log where the recipe book lives so a misconfigured database path is
        easy to spot at startup.
        """
        db_name = settings.DATABASES["default"]["NAME"]
        keys = getattr(settings, "RECIPE_BOOK", {})
        logger.debug(
            "Recipe book database: %s (keys: %s, %s, %s)",
            db_name,
            keys.get("MATERIALS_KEY"),
            keys.get("RECIPES_KEY"),
            keys.get("FAMILIES_KEY"),
        )

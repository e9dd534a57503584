from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from recipes.services import get_recipe_book
from recipes.services.seed_data import initial_collections


class Command(BaseCommand):
    help = "Seed the recipe book with starter families, raw materials and recipes"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Replace existing recipe book content with the starter content.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        recipe_book = get_recipe_book()
        if recipe_book.has_stored_content() and not options["force"]:
            raise CommandError(
                "Recipe book already has content. Use --force to replace it."
            )

        data = initial_collections()
        recipe_book.replace_all(data["materials"], data["recipes"], data["families"])
        self.stdout.write(self.style.SUCCESS(
            f"Recipe book seeded. Materials: {len(data['materials'])}, "
            f"Recipes: {len(data['recipes'])}, Families: {len(data['families'])}"
        ))

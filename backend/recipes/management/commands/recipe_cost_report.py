from django.core.management.base import BaseCommand

from costing.services import CostingService, quantize_money
from recipes.services import get_recipe_book


class Command(BaseCommand):
    help = "Print the cost of every recipe in the recipe book"

    def handle(self, *args, **options):
        recipe_book = get_recipe_book()
        costing_service = CostingService.for_recipe_book(recipe_book)

        recipes = recipe_book.recipes()
        if not recipes:
            self.stdout.write("No recipes.")
            return

        for recipe in recipes:
            breakdown = costing_service.compute_recipe_cost(recipe)
            if breakdown.is_complete:
                per_unit = quantize_money(breakdown.cost_per_yield_unit)
                self.stdout.write(
                    f"{recipe.name}: {quantize_money(breakdown.total_cost)} "
                    f"({per_unit} per {recipe.yield_unit or 'unit'})"
                )
            else:
                self.stdout.write(self.style.WARNING(
                    f"{recipe.name}: incomplete, {quantize_money(breakdown.available_total)} "
                    f"known, {breakdown.unavailable_count} ingredient(s) without a cost"
                ))

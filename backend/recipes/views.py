"""
Recipe book API views.

Thin layer over the process-wide RecipeBook: views validate input with the
serializers, call one recipe book operation and render the result.
"""
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from costing.serializers import RecipeCostBreakdownSerializer, RecipeCostSummarySerializer
from costing.services import CostingService
from measurements.models import Unit
from recipes.entities import new_id
from recipes.exceptions import EntityNotFoundError
from recipes.serializers import (
    RawMaterialSerializer,
    RecipeFamilySerializer,
    RecipeFamilyWithCountSerializer,
    RecipeSerializer,
    UnitSerializer,
)
from recipes.services import get_recipe_book


class RecipeBookViewSet(viewsets.ViewSet):
    """Base ViewSet: gives access to the recipe book and maps missing ids to 404."""

    @property
    def recipe_book(self):
        return get_recipe_book()

    def handle_exception(self, exc):
        if isinstance(exc, EntityNotFoundError):
            exc = NotFound(str(exc))
        return super().handle_exception(exc)

    def _get_or_404(self, entity, entity_type, pk):
        if entity is None:
            raise EntityNotFoundError(entity_type, pk)
        return entity


class UnitViewSet(viewsets.ViewSet):
    """
    list: Get the five supported units with their category.
    """

    def list(self, request):
        serializer = UnitSerializer(list(Unit), many=True)
        return Response(serializer.data)


class RawMaterialViewSet(RecipeBookViewSet):
    """
    list: Raw materials sorted by name.
    create: Add a raw material.
    retrieve: Get one raw material.
    update: Replace a raw material's fields.
    destroy: Remove a raw material. Recipes keep their references.
    """

    def list(self, request):
        serializer = RawMaterialSerializer(self.recipe_book.raw_materials(), many=True)
        return Response(serializer.data)

    def create(self, request):
        serializer = RawMaterialSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        material = self.recipe_book.upsert_raw_material(serializer.save(id=new_id()))
        return Response(RawMaterialSerializer(material).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        material = self._get_or_404(self.recipe_book.get_raw_material(pk), 'raw material', pk)
        return Response(RawMaterialSerializer(material).data)

    def update(self, request, pk=None):
        material = self._get_or_404(self.recipe_book.get_raw_material(pk), 'raw material', pk)
        serializer = RawMaterialSerializer(material, data=request.data)
        serializer.is_valid(raise_exception=True)
        material = self.recipe_book.upsert_raw_material(serializer.save())
        return Response(RawMaterialSerializer(material).data)

    def destroy(self, request, pk=None):
        self.recipe_book.delete_raw_material(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecipeFamilyViewSet(RecipeBookViewSet):
    """
    list: Families sorted by name, with the number of recipes in each.
    create: Add a family; the response carries the new id.
    update: Rename a family.
    destroy: Remove a family and unassign it from its recipes.
    """

    def _serialize(self, families, many=False):
        return RecipeFamilyWithCountSerializer(
            families,
            many=many,
            context={'recipe_counts': self.recipe_book.family_recipe_counts()},
        ).data

    def list(self, request):
        return Response(self._serialize(self.recipe_book.families(), many=True))

    def create(self, request):
        serializer = RecipeFamilySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        family = self.recipe_book.add_family(serializer.validated_data['name'])
        return Response(self._serialize(family), status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        family = self._get_or_404(self.recipe_book.get_family(pk), 'family', pk)
        return Response(self._serialize(family))

    def update(self, request, pk=None):
        serializer = RecipeFamilySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        family = self.recipe_book.rename_family(pk, serializer.validated_data['name'])
        return Response(self._serialize(family))

    def destroy(self, request, pk=None):
        cleared = self.recipe_book.delete_family(pk)
        return Response({'cleared_recipe_ids': cleared})


class RecipeViewSet(RecipeBookViewSet):
    """
    list: Recipes sorted by name.
    create: Add a recipe.
    retrieve: Get one recipe, with its family name.
    update: Replace a recipe.
    destroy: Remove a recipe.
    cost: Cost breakdown for one recipe.
    costs: Cost summary for every recipe.
    """

    def _detail(self, recipe):
        data = dict(RecipeSerializer(recipe).data)
        family = self.recipe_book.family_for(recipe)
        data['family_name'] = family.name if family else None
        return data

    def list(self, request):
        serializer = RecipeSerializer(self.recipe_book.recipes(), many=True)
        return Response(serializer.data)

    def create(self, request):
        serializer = RecipeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        recipe = self.recipe_book.upsert_recipe(serializer.save(id=new_id()))
        return Response(self._detail(recipe), status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        recipe = self._get_or_404(self.recipe_book.get_recipe(pk), 'recipe', pk)
        return Response(self._detail(recipe))

    def update(self, request, pk=None):
        recipe = self._get_or_404(self.recipe_book.get_recipe(pk), 'recipe', pk)
        serializer = RecipeSerializer(recipe, data=request.data)
        serializer.is_valid(raise_exception=True)
        recipe = self.recipe_book.upsert_recipe(serializer.save())
        return Response(self._detail(recipe))

    def destroy(self, request, pk=None):
        self.recipe_book.delete_recipe(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def cost(self, request, pk=None):
        recipe = self._get_or_404(self.recipe_book.get_recipe(pk), 'recipe', pk)
        breakdown = CostingService.for_recipe_book(self.recipe_book).compute_recipe_cost(recipe)
        return Response(RecipeCostBreakdownSerializer(breakdown).data)

    @action(detail=False, methods=['get'])
    def costs(self, request):
        costing_service = CostingService.for_recipe_book(self.recipe_book)
        summaries = costing_service.compute_recipes_summary(self.recipe_book.recipes())
        return Response(RecipeCostSummarySerializer(summaries, many=True).data)

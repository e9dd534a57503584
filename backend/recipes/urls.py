"""
URL configuration for the recipe book API.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from recipes.views import (
    RawMaterialViewSet,
    RecipeFamilyViewSet,
    RecipeViewSet,
    UnitViewSet,
)

router = DefaultRouter()
router.register(r'units', UnitViewSet, basename='unit')
router.register(r'materials', RawMaterialViewSet, basename='raw-material')
router.register(r'families', RecipeFamilyViewSet, basename='recipe-family')
router.register(r'recipes', RecipeViewSet, basename='recipe')

urlpatterns = [
    path('', include(router.urls)),
]

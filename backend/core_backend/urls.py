"""
URL configuration for the recipe book backend.
"""
from django.http import JsonResponse
from django.urls import path, include


def health_check(request):
    """Simple health check endpoint"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("api/", include("recipes.urls")),
]

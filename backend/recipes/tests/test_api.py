"""
Tests for the recipe book REST API.
"""
from io import StringIO

import pytest
from django.core.management import call_command


@pytest.fixture
def seeded(db):
    """Database-backed recipe book holding the starter content."""
    call_command("seed_recipe_book", stdout=StringIO())


@pytest.mark.django_db
class TestHealthAndUnits:

    def test_health_check(self, api_client):
        response = api_client.get("/api/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_units(self, api_client):
        response = api_client.get("/api/units/")

        assert response.status_code == 200
        assert [u["code"] for u in response.json()] == ["g", "kg", "ml", "l", "unit"]


@pytest.mark.django_db
class TestRawMaterialAPI:

    def test_list_sorted_by_name(self, api_client, seeded):
        response = api_client.get("/api/materials/")

        names = [m["name"] for m in response.json()]
        assert names == sorted(names, key=str.casefold)
        assert "Wheat flour" in names

    def test_create_and_retrieve(self, api_client):
        response = api_client.post("/api/materials/", {
            "name": "Cocoa", "price": "4.50", "package_size": "500", "unit": "grams",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["unit"] == "g"
        assert body["price"] == "4.50"

        detail = api_client.get(f"/api/materials/{body['id']}/")
        assert detail.status_code == 200
        assert detail.json()["name"] == "Cocoa"

    def test_create_invalid(self, api_client):
        response = api_client.post("/api/materials/", {
            "name": "Cocoa", "price": "4.50", "package_size": "0", "unit": "g",
        })

        assert response.status_code == 400
        assert "package_size" in response.json()

    def test_update(self, api_client, seeded):
        response = api_client.put("/api/materials/rm-flour/", {
            "name": "Wheat flour", "price": "2.40", "package_size": "1", "unit": "kg",
        })

        assert response.status_code == 200
        assert response.json()["id"] == "rm-flour"
        assert response.json()["price"] == "2.40"

    def test_delete_leaves_recipe_with_unavailable_cost(self, api_client, seeded):
        response = api_client.delete("/api/materials/rm-yeast/")
        assert response.status_code == 204

        recipe = api_client.get("/api/recipes/recipe-white-bread/").json()
        assert "rm-yeast" in [i["raw_material_id"] for i in recipe["ingredients"]]

        cost = api_client.get("/api/recipes/recipe-white-bread/cost/").json()
        assert cost["is_complete"] is False
        assert cost["total_cost"] is None
        assert cost["unavailable_count"] == 1

    def test_unknown_id_is_404(self, api_client):
        assert api_client.get("/api/materials/nope/").status_code == 404
        assert api_client.delete("/api/materials/nope/").status_code == 404


@pytest.mark.django_db
class TestRecipeFamilyAPI:

    def test_list_with_counts(self, api_client, seeded):
        response = api_client.get("/api/families/")

        families = {f["name"]: f["recipe_count"] for f in response.json()}
        assert families == {"Breads": 1, "Pastries": 1, "Sauces": 0}

    def test_create_returns_id(self, api_client):
        response = api_client.post("/api/families/", {"name": "Soups"})

        assert response.status_code == 201
        assert response.json()["id"]
        assert response.json()["recipe_count"] == 0

    def test_rename(self, api_client, seeded):
        response = api_client.put("/api/families/family-sauces/", {"name": "Dressings"})

        assert response.status_code == 200
        assert response.json()["name"] == "Dressings"

    def test_delete_unassigns_recipes(self, api_client, seeded):
        response = api_client.delete("/api/families/family-breads/")

        assert response.status_code == 200
        assert response.json() == {"cleared_recipe_ids": ["recipe-white-bread"]}

        recipe = api_client.get("/api/recipes/recipe-white-bread/").json()
        assert recipe["family_id"] is None
        assert recipe["family_name"] is None

    def test_delete_unknown_is_404(self, api_client):
        assert api_client.delete("/api/families/nope/").status_code == 404


@pytest.mark.django_db
class TestRecipeAPI:

    def _payload(self, **overrides):
        data = {
            "name": "Toast",
            "description": "",
            "family_id": "family-breads",
            "yield_amount": "2",
            "yield_unit": "slices",
            "ingredients": [{"raw_material_id": "rm-butter", "quantity": "25", "unit": "g"}],
            "instructions": ["Toast the bread.", "Butter it."],
        }
        data.update(overrides)
        return data

    def test_create_and_retrieve(self, api_client, seeded):
        response = api_client.post("/api/recipes/", self._payload())

        assert response.status_code == 201
        body = response.json()
        assert body["family_name"] == "Breads"
        assert body["instructions"] == ["Toast the bread.", "Butter it."]

        assert api_client.get(f"/api/recipes/{body['id']}/").json()["name"] == "Toast"

    def test_update(self, api_client, seeded):
        response = api_client.put(
            "/api/recipes/recipe-crepes/", self._payload(name="Sweet crepes", family_id=""),
        )

        assert response.status_code == 200
        assert response.json()["id"] == "recipe-crepes"
        assert response.json()["family_id"] is None

    def test_create_invalid(self, api_client):
        response = api_client.post("/api/recipes/", self._payload(yield_amount="-1"))

        assert response.status_code == 400

    def test_delete(self, api_client, seeded):
        assert api_client.delete("/api/recipes/recipe-crepes/").status_code == 204
        assert api_client.get("/api/recipes/recipe-crepes/").status_code == 404

    def test_cost_breakdown(self, api_client, seeded):
        """White bread: flour 1.20 + water 0 + yeast 0.90 + salt 0.012 over 2 loaves."""
        response = api_client.get("/api/recipes/recipe-white-bread/cost/")

        assert response.status_code == 200
        body = response.json()
        assert body["is_complete"] is True
        assert body["total_cost"] == "2.11"
        assert body["cost_per_yield_unit"] == "1.06"
        assert [i["raw_material_id"] for i in body["ingredients"]] == [
            "rm-flour", "rm-water", "rm-yeast", "rm-salt",
        ]

    def test_costs_summary(self, api_client, seeded):
        response = api_client.get("/api/recipes/costs/")

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Crepes", "White bread"]
        assert all(s["is_cost_complete"] for s in response.json())

from __future__ import annotations

import unittest

from pydantic import ValidationError

from schemas import IngredientMeasure, MealDetailResponse, MealSearchResponse, RecipeDetail


def _meal_payload() -> dict:
    payload = {
        "idMeal": "52772",
        "strMeal": "Teriyaki Chicken Casserole",
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strInstructions": "Preheat oven to 350F.\r\n\r\nCombine soy sauce and water.\r\nBake for 35 minutes.",
        "strMealThumb": "https://example.test/teriyaki.jpg",
        "strTags": "Meat, Casserole",
        "strYoutube": "https://www.youtube.com/watch?v=4aZr5hZXP_s",
        "strSource": None,
    }
    for index in range(1, 21):
        payload[f"strIngredient{index}"] = ""
        payload[f"strMeasure{index}"] = ""
    payload.update(
        {
            "strIngredient1": "soy sauce",
            "strMeasure1": "3/4 cup",
            "strIngredient2": " water ",
            "strMeasure2": "1/2 cup",
            "strIngredient4": "chicken breasts",
            "strMeasure4": None,
            "strIngredient5": " ",
            "strMeasure5": "2 tbs",
        }
    )
    return payload


class RecipeSchemaTests(unittest.TestCase):
    def test_lookup_payload_keeps_non_empty_slots_in_order(self) -> None:
        response = MealDetailResponse.model_validate({"meals": [_meal_payload()]})
        detail = response.meals[0].to_detail(fallback_id="52772")

        self.assertEqual(
            list(detail.ingredients),
            [
                IngredientMeasure(name="soy sauce", measure="3/4 cup"),
                IngredientMeasure(name="water", measure="1/2 cup"),
                IngredientMeasure(name="chicken breasts", measure=""),
            ],
        )
        self.assertEqual(detail.ingredient_names, ["soy sauce", "water", "chicken breasts"])

    def test_lookup_payload_maps_metadata(self) -> None:
        response = MealDetailResponse.model_validate({"meals": [_meal_payload()]})
        detail = response.meals[0].to_detail(fallback_id="52772")

        self.assertEqual(detail.id, "52772")
        self.assertEqual(detail.category, "Chicken")
        self.assertEqual(detail.area, "Japanese")
        self.assertEqual(detail.tags, ("Meat", "Casserole"))
        self.assertIsNone(detail.source_url)
        self.assertEqual(
            detail.instruction_steps(),
            ["Preheat oven to 350F.", "Combine soy sauce and water.", "Bake for 35 minutes."],
        )
        self.assertTrue(detail.summary.endswith("..."))

    def test_missing_fields_fall_back_to_defaults(self) -> None:
        response = MealDetailResponse.model_validate({"meals": [{"idMeal": 7}]})
        detail = response.meals[0].to_detail(fallback_id="ignored")

        self.assertEqual(detail.id, "7")
        self.assertEqual(detail.name, "Unknown Recipe")
        self.assertEqual(detail.category, "Unknown")
        self.assertEqual(detail.ingredients, ())

    def test_search_response_accepts_null_and_missing_meals(self) -> None:
        self.assertIsNone(MealSearchResponse.model_validate({"meals": None}).meals)
        self.assertIsNone(MealSearchResponse.model_validate({}).meals)

    def test_search_response_rejects_entries_without_id(self) -> None:
        with self.assertRaises(ValidationError):
            MealSearchResponse.model_validate({"meals": [{"strMeal": "No id"}]})

    def test_recipe_detail_is_immutable_and_capped(self) -> None:
        detail = RecipeDetail(id="1", name="Soup")
        with self.assertRaises(ValidationError):
            detail.name = "Stew"
        with self.assertRaises(ValidationError):
            RecipeDetail(
                id="2",
                ingredients=tuple(IngredientMeasure(name=f"item {i}") for i in range(21)),
            )


if __name__ == "__main__":
    unittest.main()

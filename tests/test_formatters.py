from __future__ import annotations

import unittest

from core.formatters import format_ingredients, format_recipe, format_result
from core.services.matching_session import Ingredient, MatchingResult
from core.services.recipe_match_service import build_scored_recipe
from schemas import IngredientMeasure, RecipeDetail


def _recipe():
    detail = RecipeDetail(
        id="1",
        name="Garlic Chicken",
        category="Chicken",
        area="French",
        instructions="Season the chicken.\nRoast for 40 minutes.",
        ingredients=(IngredientMeasure(name="Chicken", measure="1 whole"), IngredientMeasure(name="Garlic")),
        tags=("Roast",),
    )
    return build_scored_recipe(["chicken"], detail)


class FormattersTests(unittest.TestCase):
    def test_format_result_lists_recipes(self) -> None:
        text = format_result(MatchingResult(generation=3, ordered_recipes=(_recipe(),)), "All Recipes")
        self.assertIn("Generation 3", text)
        self.assertIn("Garlic Chicken - 50% match", text)

    def test_format_result_reports_error(self) -> None:
        text = format_result(MatchingResult(generation=1), "All Recipes", error="offline")
        self.assertIn("Could not load recipes: offline", text)

    def test_format_result_empty(self) -> None:
        self.assertIn("No matching recipes", format_result(MatchingResult(generation=1), "Breakfast"))

    def test_format_recipe_includes_missing_and_steps(self) -> None:
        text = format_recipe(_recipe())
        self.assertIn("Missing: Garlic", text)
        self.assertIn("2. Roast for 40 minutes.", text)
        self.assertIn("Cook time: 30-45 mins", text)

    def test_format_ingredients_marks_selection(self) -> None:
        text = format_ingredients([Ingredient(name="Rice", quantity="Available", selected=False)])
        self.assertEqual(text, "[ ] Rice (Available)")


if __name__ == "__main__":
    unittest.main()

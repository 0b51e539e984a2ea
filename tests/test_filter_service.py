from __future__ import annotations

import unittest

from core.services.filter_service import FILTER_OPTIONS, filter_recipes
from core.services.recipe_match_service import ScoredRecipe
from schemas import RecipeDetail


def _scored(recipe_id: str, category: str, score: int = 50) -> ScoredRecipe:
    return ScoredRecipe(detail=RecipeDetail(id=recipe_id, category=category), match_percentage=score)


class FilterServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.recipes = [
            _scored("1", "Breakfast", 90),
            _scored("2", "Main dish", 70),
            _scored("3", "Breakfast", 40),
            _scored("4", "Side", 30),
            _scored("5", "Vegetarian", 20),
        ]

    def test_all_recipes_is_identity(self) -> None:
        self.assertEqual(filter_recipes(self.recipes, "All Recipes"), self.recipes)

    def test_breakfast_keeps_relative_order(self) -> None:
        result = filter_recipes(self.recipes[:3], "Breakfast")
        self.assertEqual([r.detail.id for r in result], ["1", "3"])

    def test_quick_meals_and_lunch(self) -> None:
        self.assertEqual([r.detail.id for r in filter_recipes(self.recipes, "Quick Meals")], ["4"])
        self.assertEqual([r.detail.id for r in filter_recipes(self.recipes, "Lunch")], ["2"])
        self.assertEqual([r.detail.id for r in filter_recipes(self.recipes, "Dinner")], ["2"])
        self.assertEqual([r.detail.id for r in filter_recipes(self.recipes, "Vegetarian")], ["5"])

    def test_unknown_filter_fails_open(self) -> None:
        self.assertEqual(filter_recipes(self.recipes, "Dessert"), self.recipes)

    def test_filtering_only_removes_elements(self) -> None:
        for name in FILTER_OPTIONS:
            result = filter_recipes(self.recipes, name)
            positions = [self.recipes.index(recipe) for recipe in result]
            self.assertEqual(positions, sorted(positions))

    def test_filter_options_start_with_all_recipes(self) -> None:
        self.assertEqual(FILTER_OPTIONS[0], "All Recipes")


if __name__ == "__main__":
    unittest.main()

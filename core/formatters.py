from __future__ import annotations

from core.services.matching_session import Ingredient, MatchingResult
from core.services.recipe_match_service import ScoredRecipe


def format_ingredients(ingredients: list[Ingredient]) -> str:
    if not ingredients:
        return "No ingredients available"
    lines = []
    for item in ingredients:
        mark = "[x]" if item.selected else "[ ]"
        lines.append(f"{mark} {item.name} ({item.quantity or 'Available'})")
    return "\n".join(lines)


def format_recipe_card(recipe: ScoredRecipe) -> str:
    detail = recipe.detail
    return (
        f"{detail.name} - {recipe.match_percentage}% match\n"
        f"  {detail.category} / {detail.area}, {recipe.cook_time}"
    )


def format_result(result: MatchingResult, active_filter: str, error: str | None = None) -> str:
    header = f"Generation {result.generation}, filter: {active_filter}"
    if error:
        return f"{header}\nCould not load recipes: {error}"
    if not result.ordered_recipes:
        return f"{header}\nNo matching recipes"
    cards = "\n".join(format_recipe_card(recipe) for recipe in result.ordered_recipes)
    return f"{header}\n{cards}"


def format_recipe(recipe: ScoredRecipe) -> str:
    detail = recipe.detail
    ingredients = "\n".join(f"- {item.display()}" for item in detail.ingredients) or "- none listed"
    missing = ", ".join(recipe.missing_ingredients) if recipe.missing_ingredients else "nothing"
    steps = "\n".join(f"{i}. {step}" for i, step in enumerate(detail.instruction_steps(), start=1))
    tags = ", ".join(detail.tags) if detail.tags else "none"
    return (
        f"{detail.name} ({detail.category}, {detail.area})\n"
        f"Match: {recipe.match_percentage}%\n"
        f"Cook time: {recipe.cook_time}\n"
        f"Tags: {tags}\n\n"
        "Ingredients:\n"
        f"{ingredients}\n\n"
        f"Missing: {missing}\n\n"
        "Steps:\n"
        f"{steps or 'No instructions available'}"
    )

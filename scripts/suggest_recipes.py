from __future__ import annotations

import argparse
import asyncio

import structlog

from core.config import settings
from core.formatters import format_ingredients, format_recipe, format_result
from core.logging import configure_logging
from core.services.catalog_service import CatalogError, RecipeCatalogClient
from core.services.filter_service import ALL_RECIPES
from core.services.ingredient_source import (
    IngredientSource,
    ShoppingListIngredientSource,
    StaticIngredientSource,
    UserContext,
)
from core.services.matching_session import MatchingSession
from db.session import init_models

logger = structlog.get_logger(__name__)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Suggest recipes for the ingredients you have.")
    parser.add_argument("--user", help="load ingredients from this user's shopping lists")
    parser.add_argument("--filter", default=ALL_RECIPES, help="category filter to apply")
    parser.add_argument(
        "--deselect",
        action="append",
        default=[],
        help="ingredient name to deselect before matching (repeatable)",
    )
    parser.add_argument("--show", help="print the full recipe with this id")
    return parser.parse_args()


async def main() -> None:
    args = _parse_args()
    configure_logging(settings.log_level)

    source: IngredientSource
    if args.user:
        if settings.db_auto_create:
            await init_models()
        source = ShoppingListIngredientSource()
    else:
        source = StaticIngredientSource()

    async with RecipeCatalogClient() as catalog:
        session = MatchingSession(catalog)
        session.set_filter(args.filter)
        await session.load_ingredients(source, UserContext(user_id=args.user))

        deselect = {name.lower() for name in args.deselect}
        for ingredient in list(session.ingredients):
            if ingredient.name.lower() in deselect:
                session.toggle_ingredient(ingredient.id)
        await session.wait_idle()

        print(format_ingredients(session.ingredients))
        print()
        print(format_result(session.current_result(), session.active_filter, session.last_error))

        if args.show:
            try:
                recipe = await session.lookup_recipe(args.show)
            except CatalogError as exc:
                logger.warning("recipe_lookup_failed", recipe_id=args.show, error=str(exc))
                print(f"Could not load recipe {args.show}: {exc}")
            else:
                print()
                print(format_recipe(recipe))


if __name__ == "__main__":
    asyncio.run(main())

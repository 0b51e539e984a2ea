from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.models import ShoppingItem
from db.repo import ShoppingRepository
from db.session import SessionFactory

logger = structlog.get_logger(__name__)

AVAILABLE_QUANTITY = "Available"


class IngredientSourceError(RuntimeError):
    pass


class AuthError(IngredientSourceError):
    pass


class StoreError(IngredientSourceError):
    pass


@dataclass(slots=True, frozen=True)
class UserContext:
    user_id: str | None


@dataclass(slots=True, frozen=True)
class AvailableIngredient:
    name: str
    quantity_description: str = AVAILABLE_QUANTITY


class IngredientSource(Protocol):
    async def get_available_ingredients(self, user_context: UserContext) -> list[AvailableIngredient]: ...


DEFAULT_PANTRY: tuple[AvailableIngredient, ...] = (
    AvailableIngredient("Chicken", "2 items"),
    AvailableIngredient("Potatoes", "4 items"),
    AvailableIngredient("Tomatoes", "3 items"),
    AvailableIngredient("Onion", "1 item"),
    AvailableIngredient("Garlic", "5 items"),
    AvailableIngredient("Rice", AVAILABLE_QUANTITY),
    AvailableIngredient("Pasta", AVAILABLE_QUANTITY),
    AvailableIngredient("Cheese", AVAILABLE_QUANTITY),
)


class StaticIngredientSource:
    def __init__(self, ingredients: Iterable[AvailableIngredient] = DEFAULT_PANTRY) -> None:
        self.ingredients = list(ingredients)

    async def get_available_ingredients(self, user_context: UserContext) -> list[AvailableIngredient]:
        return list(self.ingredients)


def describe_quantity(item: ShoppingItem) -> str:
    quantity = item.current_quantity
    if not quantity:
        return AVAILABLE_QUANTITY
    if item.current_unit:
        return f"{quantity} {item.current_unit}"
    return f"{quantity} item" if quantity == 1 else f"{quantity} items"


class ShoppingListIngredientSource:
    """Ingredients taken from every shopping list the user owns."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self.session_factory = session_factory if session_factory is not None else SessionFactory

    async def get_available_ingredients(self, user_context: UserContext) -> list[AvailableIngredient]:
        if not user_context.user_id:
            raise AuthError("User is not authenticated")

        try:
            async with self.session_factory() as session:
                repo = ShoppingRepository(session)
                user = await repo.get_user_by_external_id(user_context.user_id)
                if user is None:
                    raise AuthError(f"Unknown user {user_context.user_id}")
                items = await repo.list_items_for_user(user.id)
        except SQLAlchemyError as exc:
            logger.warning("ingredient_source_failed", user_id=user_context.user_id, error=str(exc))
            raise StoreError(str(exc)) from exc

        ingredients: list[AvailableIngredient] = []
        seen: set[str] = set()
        for item in items:
            name = item.name.strip()
            key = name.lower()
            if not name or key in seen:
                continue
            seen.add(key)
            ingredients.append(AvailableIngredient(name=name, quantity_description=describe_quantity(item)))

        logger.info("ingredient_source_loaded", user_id=user_context.user_id, count=len(ingredients))
        return ingredients

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import ShoppingItem, ShoppingList, User


class ShoppingRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_by_external_id(self, external_id: str) -> User | None:
        return await self.session.scalar(select(User).where(User.external_id == external_id))

    async def ensure_user(self, external_id: str, display_name: str | None = None) -> User:
        user = await self.get_user_by_external_id(external_id)
        if user:
            if display_name and user.display_name != display_name:
                user.display_name = display_name
                await self.session.flush()
            return user

        user = User(external_id=external_id, display_name=display_name)
        self.session.add(user)
        await self.session.flush()
        return user

    async def create_list(self, user_id: int, name: str, color: str = "#4CAF50") -> ShoppingList:
        shopping_list = ShoppingList(user_id=user_id, name=name, color=color)
        self.session.add(shopping_list)
        await self.session.flush()
        return shopping_list

    async def add_item(
        self,
        list_id: int,
        name: str,
        *,
        current_quantity: int | None = None,
        current_unit: str | None = None,
        category_name: str | None = None,
    ) -> ShoppingItem:
        item = ShoppingItem(
            list_id=list_id,
            name=name,
            current_quantity=current_quantity,
            current_unit=current_unit,
            category_name=category_name,
        )
        self.session.add(item)
        await self.session.flush()
        return item

    async def list_items_for_user(self, user_id: int) -> list[ShoppingItem]:
        rows = await self.session.scalars(
            select(ShoppingItem)
            .join(ShoppingList, ShoppingList.id == ShoppingItem.list_id)
            .where(ShoppingList.user_id == user_id)
            .order_by(ShoppingList.created_at, ShoppingList.id, ShoppingItem.created_at, ShoppingItem.id)
        )
        return list(rows.all())

from db.models import Base, ShoppingItem, ShoppingList, User
from db.repo import ShoppingRepository
from db.session import SessionFactory, engine, init_models

__all__ = [
    "Base",
    "SessionFactory",
    "ShoppingItem",
    "ShoppingList",
    "ShoppingRepository",
    "User",
    "engine",
    "init_models",
]

"""SQLAlchemy models."""

from src.models.food import Food
from src.models.home import Home
from src.models.pantry import PantryEntry
from src.models.recipe import Recipe, RecipeIngredient
from src.models.shopping_list import ShoppingList, ShoppingListItem, ShoppingListItemSource
from src.models.unit import Unit
from src.models.user import User

__all__ = [
    "Home",
    "User",
    "Food",
    "Unit",
    "Recipe",
    "RecipeIngredient",
    "PantryEntry",
    "ShoppingList",
    "ShoppingListItem",
    "ShoppingListItemSource",
]

"""Recipe service for authoring recipes with resolved ingredient mentions."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from src.models.recipe import Recipe, RecipeIngredient
from src.schemas.recipe import RecipeCreate, RecipeIngredientCreate
from src.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class RecipeService:
    """Service for recipe-related operations."""

    def __init__(self, db: Session, catalog: CatalogService | None = None):
        self.db = db
        self.catalog = catalog or CatalogService(db)

    def get_recipe(self, recipe_id: int) -> Recipe:
        recipe = (
            self.db.query(Recipe)
            .filter(Recipe.id == recipe_id, Recipe.not_deleted())
            .first()
        )
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return recipe

    def _mention(self, ing: RecipeIngredientCreate, index: int, user_id: int) -> RecipeIngredient:
        """Build a mention, filling in food and unit ids the author left out."""
        food_id, unit_id = ing.food_id, ing.unit_id
        if food_id is None:
            food = self.catalog.best_food(ing.name, user_id=user_id)
            food_id = food.id if food else None
        if unit_id is None and ing.measurement:
            unit = self.catalog.best_unit(ing.measurement)
            unit_id = unit.id if unit else None

        return RecipeIngredient(
            name=ing.name,
            quantity=ing.quantity,
            measurement=ing.measurement,
            group_name=ing.group_name,
            food_id=food_id,
            unit_id=unit_id,
            sort_order=index,
        )

    def create_recipe(self, user_id: int, data: RecipeCreate) -> Recipe:
        """Create a recipe and resolve its ingredient mentions against the catalog.

        Explicit food/unit ids win. Mentions that do not resolve are stored
        with their raw text only; saved mentions are never rewritten.
        """
        recipe = Recipe(
            user_id=user_id,
            name=data.name,
            description=data.description,
            recipe_yield=data.recipe_yield,
            yield_name=data.yield_name,
        )
        recipe.ingredients = [
            self._mention(ing, index, user_id) for index, ing in enumerate(data.ingredients)
        ]

        unresolved = sum(1 for ing in recipe.ingredients if ing.food_id is None)
        if unresolved:
            logger.info(f"Recipe '{recipe.name}': {unresolved} ingredients left unresolved")

        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)
        return recipe

    def delete_recipe(self, recipe_id: int, user_id: int) -> None:
        """Soft-delete one of the user's recipes.

        Shopping list sources keep the recipe name they were created with.
        """
        recipe = self.get_recipe(recipe_id)
        if recipe.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        recipe.soft_delete()
        self.db.commit()
        logger.info(f"Deleted recipe {recipe_id}")

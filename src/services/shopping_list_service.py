"""Shopping list service: recipe contributions, merging and checking off lines."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.recipe import Recipe
from src.models.shopping_list import ShoppingList, ShoppingListItem, ShoppingListItemSource
from src.services import quantity_scaler
from src.services.catalog_service import CatalogService
from src.services.line_item_aggregator import Contribution, aggregate, identity_key
from src.services.pantry_service import PantryService

logger = logging.getLogger(__name__)

settings = get_settings()


@dataclass
class AddToListResult:
    added_count: int
    list_id: int


class ShoppingListService:
    """Service for shopping list operations."""

    def __init__(
        self,
        db: Session,
        catalog: CatalogService | None = None,
        pantry: PantryService | None = None,
    ):
        self.db = db
        self.catalog = catalog or CatalogService(db)
        self.pantry = pantry or PantryService(db, self.catalog)

    # Lists

    def _find_default_list(self, home_id: int) -> ShoppingList | None:
        return (
            self.db.query(ShoppingList)
            .filter(ShoppingList.home_id == home_id, ShoppingList.is_default.is_(True))
            .first()
        )

    def get_or_create_default_list(self, home_id: int) -> ShoppingList:
        """Get the home's default list, creating it on first use.

        Must run before the operation writes anything: losing the race to a
        concurrent creator rolls the session back and returns their list.
        """
        shopping_list = self._find_default_list(home_id)
        if shopping_list:
            return shopping_list

        shopping_list = ShoppingList(
            home_id=home_id,
            name=settings.default_shopping_list_name,
            is_default=True,
        )
        self.db.add(shopping_list)
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Default shopping list for home {home_id} was created concurrently")
            return self._find_default_list(home_id)

        logger.info(f"Created default shopping list {shopping_list.id} for home {home_id}")
        return shopping_list

    def get_list(self, home_id: int, list_id: int | None, lock: bool = False) -> ShoppingList:
        """Get a list of the home, or its default list when no id is given.

        With ``lock`` the list row is held for update until the transaction
        ends, serializing concurrent merges into the same list.
        """
        if list_id is None:
            list_id = self.get_or_create_default_list(home_id).id

        query = self.db.query(ShoppingList).filter(
            ShoppingList.id == list_id,
            ShoppingList.home_id == home_id,
        )
        if lock:
            query = query.with_for_update()
        shopping_list = query.first()

        if not shopping_list:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Shopping list not found",
            )
        return shopping_list

    def get_lists(self, home_id: int) -> list[ShoppingList]:
        return (
            self.db.query(ShoppingList)
            .filter(ShoppingList.home_id == home_id)
            .order_by(ShoppingList.is_default.desc(), ShoppingList.name)
            .all()
        )

    def get_items(self, home_id: int, list_id: int) -> list[ShoppingListItem]:
        shopping_list = self.get_list(home_id, list_id)
        return (
            self.db.query(ShoppingListItem)
            .filter(ShoppingListItem.shopping_list_id == shopping_list.id)
            .order_by(ShoppingListItem.is_checked, ShoppingListItem.sort_order)
            .all()
        )

    def _get_item(self, home_id: int, item_id: int, lock: bool = False) -> ShoppingListItem:
        query = (
            self.db.query(ShoppingListItem)
            .join(ShoppingList, ShoppingList.id == ShoppingListItem.shopping_list_id)
            .filter(ShoppingListItem.id == item_id, ShoppingList.home_id == home_id)
        )
        if lock:
            query = query.with_for_update()
        item = query.first()
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        return item

    # Merging

    def _find_mergeable_item(
        self, list_id: int, food_id: int, unit_id: int | None
    ) -> ShoppingListItem | None:
        """Unchecked line with the same canonical food and unit, if any."""
        key = identity_key(food_id, unit_id)
        candidates = (
            self.db.query(ShoppingListItem)
            .filter(
                ShoppingListItem.shopping_list_id == list_id,
                ShoppingListItem.is_checked.is_(False),
                ShoppingListItem.food_id.isnot(None),
            )
            .order_by(ShoppingListItem.sort_order)
            .all()
        )
        for item in candidates:
            if identity_key(self.catalog.resolve_food_id(item.food_id), item.unit_id) == key:
                return item
        return None

    def _next_sort_order(self, list_id: int) -> int:
        current = (
            self.db.query(func.max(ShoppingListItem.sort_order))
            .filter(ShoppingListItem.shopping_list_id == list_id)
            .scalar()
        )
        return (current or 0) + 1

    def _add_contribution(
        self, shopping_list: ShoppingList, contribution: Contribution, user_id: int | None
    ) -> ShoppingListItem:
        """Merge a contribution into a matching unchecked line or append a new one."""
        existing = None
        if contribution.food_id is not None:
            existing = self._find_mergeable_item(
                shopping_list.id, contribution.food_id, contribution.unit_id
            )

        if existing:
            values = {
                "quantity": func.coalesce(ShoppingListItem.quantity, 0)
                + (contribution.quantity or Decimal(0))
            }
            if contribution.unit:
                values["display_unit"] = contribution.unit
            self.db.execute(
                update(ShoppingListItem)
                .where(ShoppingListItem.id == existing.id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            self.db.expire(existing)
            logger.info(f"Merged {contribution.quantity} into item {existing.id} ({existing.display_name})")
            return existing

        item = ShoppingListItem(
            shopping_list_id=shopping_list.id,
            food_id=contribution.food_id,
            unit_id=contribution.unit_id,
            display_name=contribution.name,
            display_unit=contribution.unit or "",
            quantity=contribution.quantity,
            is_checked=False,
            sort_order=self._next_sort_order(shopping_list.id),
            created_by=user_id,
        )
        self.db.add(item)
        self.db.flush()
        return item

    # Operations

    def add_recipe_to_list(
        self,
        recipe_id: int,
        home_id: int,
        user_id: int | None = None,
        list_id: int | None = None,
        servings: int | None = None,
        ingredient_ids: list[int] | None = None,
    ) -> AddToListResult:
        """Add a recipe's ingredients to a shopping list, scaled to ``servings``.

        Lines for the same canonical food and unit merge into one, both within
        the recipe and with unchecked lines already on the list. Every merged
        contribution is recorded as a source of its line.
        """
        recipe = (
            self.db.query(Recipe)
            .filter(Recipe.id == recipe_id, Recipe.not_deleted())
            .first()
        )
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")

        if servings is not None and servings <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Servings must be positive",
            )
        try:
            quantity_scaler.validate_yield(recipe.recipe_yield)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

        shopping_list = self.get_list(home_id, list_id, lock=True)

        ingredients = recipe.ingredients
        if ingredient_ids is not None:
            wanted = set(ingredient_ids)
            ingredients = [ing for ing in ingredients if ing.id in wanted]

        contributions = [
            Contribution(
                name=ing.name,
                food_id=self.catalog.resolve_food_id(ing.food_id),
                unit_id=ing.unit_id,
                quantity=quantity_scaler.scale(ing.quantity, recipe.recipe_yield, servings),
                unit=ing.measurement or "",
            )
            for ing in ingredients
        ]

        for contribution in aggregate(contributions):
            item = self._add_contribution(shopping_list, contribution, user_id)
            self.db.add(
                ShoppingListItemSource(
                    item_id=item.id,
                    recipe_id=recipe.id,
                    recipe_name=recipe.name,
                    quantity_added=contribution.quantity,
                    servings_used=servings if servings is not None else recipe.recipe_yield,
                )
            )

        self.db.commit()
        logger.info(
            f"Added {len(contributions)} ingredients of recipe {recipe.id} to list {shopping_list.id}"
        )
        return AddToListResult(added_count=len(contributions), list_id=shopping_list.id)

    def add_custom_item(
        self,
        home_id: int,
        name: str,
        user_id: int | None = None,
        list_id: int | None = None,
        food_id: int | None = None,
        quantity: Decimal | None = None,
        unit: str | None = None,
    ) -> ShoppingListItem:
        """Add a manual line. With a food id it merges like a recipe contribution."""
        trimmed = name.strip()
        if not trimmed:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name is empty")

        canonical_id = None
        if food_id is not None:
            food = self.catalog.resolve_food(food_id)
            if food is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food not found")
            canonical_id = food.id

        shopping_list = self.get_list(home_id, list_id, lock=True)
        item = self._add_contribution(
            shopping_list,
            Contribution(
                name=trimmed,
                food_id=canonical_id,
                quantity=quantity if quantity is not None else Decimal(1),
                unit=unit or "",
            ),
            user_id,
        )
        self.db.commit()
        self.db.refresh(item)
        return item

    def toggle_line_item(self, item_id: int, home_id: int, user_id: int | None = None) -> bool:
        """Flip the checked state of a line and return the new state.

        Checking a line that has a food adds its quantity to the pantry.
        Unchecking leaves the pantry as is, so checking the same line again
        adds the quantity a second time.
        """
        item = self._get_item(home_id, item_id, lock=True)

        item.is_checked = not item.is_checked
        item.checked_at = datetime.now(UTC) if item.is_checked else None

        if item.is_checked and item.food_id is not None:
            self.pantry.accumulate(
                home_id,
                item.food_id,
                item.quantity,
                item.display_unit or None,
                user_id=user_id,
            )

        self.db.commit()
        return item.is_checked

    def clear_checked(self, home_id: int, list_id: int | None = None) -> int:
        """Delete checked lines of a list along with their recipe sources."""
        shopping_list = self.get_list(home_id, list_id)
        item_ids = [
            item_id
            for (item_id,) in self.db.query(ShoppingListItem.id)
            .filter(
                ShoppingListItem.shopping_list_id == shopping_list.id,
                ShoppingListItem.is_checked.is_(True),
            )
            .all()
        ]
        if item_ids:
            self.db.query(ShoppingListItemSource).filter(
                ShoppingListItemSource.item_id.in_(item_ids)
            ).delete(synchronize_session=False)
            self.db.query(ShoppingListItem).filter(ShoppingListItem.id.in_(item_ids)).delete(
                synchronize_session=False
            )
        self.db.commit()
        logger.info(f"Cleared {len(item_ids)} checked items from list {shopping_list.id}")
        return len(item_ids)

    def delete_item(self, item_id: int, home_id: int) -> None:
        item = self._get_item(home_id, item_id)
        self.db.delete(item)
        self.db.commit()

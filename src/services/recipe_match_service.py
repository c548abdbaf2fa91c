"""Recipe matching against pantry contents."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, selectinload

from src.models.recipe import Recipe
from src.services import match_scorer
from src.services.catalog_service import CatalogService
from src.services.match_scorer import MatchScore

logger = logging.getLogger(__name__)


@dataclass
class RankedRecipe:
    """A recipe with its pantry coverage."""

    recipe_id: int
    name: str
    owner_id: int
    created_at: datetime | None
    score: MatchScore
    missing_food_names: list[str] = field(default_factory=list)

    @property
    def match_percentage(self) -> int:
        return self.score.display_percentage

    @property
    def matching_ingredients(self) -> int:
        return self.score.matching

    @property
    def total_ingredients(self) -> int:
        return self.score.total

    @property
    def missing_food_ids(self) -> list[int]:
        return self.score.missing


class RecipeMatchService:
    """Service for scoring recipes against a set of foods."""

    def __init__(self, db: Session, catalog: CatalogService | None = None):
        self.db = db
        self.catalog = catalog or CatalogService(db)

    def _score(self, recipe: Recipe, pantry: set[int]) -> MatchScore:
        food_ids = self.catalog.resolve_food_ids(ing.food_id for ing in recipe.ingredients)
        return match_scorer.score(food_ids, pantry)

    def _ranked(self, recipe: Recipe, score: MatchScore) -> RankedRecipe:
        names = []
        for food_id in score.missing:
            food = self.catalog.resolve_food(food_id)
            names.append(food.name if food else "")
        return RankedRecipe(
            recipe_id=recipe.id,
            name=recipe.name,
            owner_id=recipe.user_id,
            created_at=recipe.created_at,
            score=score,
            missing_food_names=names,
        )

    @staticmethod
    def _rank(results: list[RankedRecipe], limit: int) -> list[RankedRecipe]:
        # Newest first among equal scores
        results.sort(key=lambda r: r.created_at.timestamp() if r.created_at else 0, reverse=True)
        results.sort(key=lambda r: match_scorer.ranking_key(r.score))
        return results[: max(limit, 0)]

    def match_recipe_to_pantry(
        self,
        recipe_id: int,
        pantry_food_ids: Iterable[int],
        min_percentage: float = 0,
        limit: int = 1,
    ) -> list[RankedRecipe]:
        """Score one recipe against pantry food ids.

        Returns the recipe in a one-element list when it reaches
        ``min_percentage``, otherwise an empty list.
        """
        recipe = (
            self.db.query(Recipe)
            .options(selectinload(Recipe.ingredients))
            .filter(Recipe.id == recipe_id, Recipe.not_deleted())
            .first()
        )
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")

        pantry = set(self.catalog.resolve_food_ids(pantry_food_ids))
        score = self._score(recipe, pantry)
        if not score.meets(min_percentage):
            return []
        return self._rank([self._ranked(recipe, score)], limit)

    def match_pantry_to_food_ids(
        self,
        food_ids: Iterable[int],
        min_percentage: float,
        owner_filter: int | None,
        limit: int,
    ) -> list[RankedRecipe]:
        """Find recipes that can be made from the given foods.

        Only recipes with at least one resolvable ingredient and at least one
        match are considered. Alias and canonical foods count as the same food
        on both sides.
        """
        pantry = set(self.catalog.resolve_food_ids(food_ids))
        if not pantry:
            return []

        query = (
            self.db.query(Recipe)
            .options(selectinload(Recipe.ingredients))
            .filter(Recipe.not_deleted())
        )
        if owner_filter is not None:
            query = query.filter(Recipe.user_id == owner_filter)

        results = []
        for recipe in query.all():
            score = self._score(recipe, pantry)
            if score.total == 0 or score.matching == 0:
                continue
            if not score.meets(min_percentage):
                continue
            results.append(self._ranked(recipe, score))

        logger.info(f"Matched {len(results)} recipes against {len(pantry)} foods")
        return self._rank(results, limit)

"""Catalog search and ingredient normalization over the food and unit tables."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.enums import FoodStatus
from src.models.food import Food
from src.models.unit import Unit
from src.services import alias_resolver, fuzzy_matcher
from src.services.fuzzy_matcher import Candidate

logger = logging.getLogger(__name__)

settings = get_settings()

MIN_FOOD_QUERY_LENGTH = 2


@dataclass
class FoodMatch:
    """A ranked food search result with alias metadata."""

    id: int
    name: str
    rank: float
    status: str
    is_own_pending: bool
    canonical_food_id: int | None
    canonical_food_name: str | None


@dataclass
class UnitMatch:
    """A ranked unit search result."""

    id: int
    name: str
    plural: str
    abbreviation: str
    rank: float


@dataclass
class NormalizedIngredient:
    """An ingredient mention after catalog resolution."""

    name: str
    measurement: str
    quantity: str
    food_id: int | None = None
    unit_id: int | None = None


class CatalogService:
    """Service for matching free text against the food and unit catalog."""

    def __init__(self, db: Session, threshold: float | None = None):
        self.db = db
        self.threshold = (
            threshold if threshold is not None else settings.match_acceptance_threshold
        )
        self._lookup = alias_resolver.caching_lookup(lambda food_id: self.db.get(Food, food_id))

    # Alias resolution

    def resolve_food(self, food_id: int | None) -> Food | None:
        """Canonical food for a food id, following alias chains."""
        return alias_resolver.resolve(food_id, self._lookup)

    def resolve_food_id(self, food_id: int | None) -> int | None:
        if food_id is None:
            return None
        return alias_resolver.resolve_id(food_id, self._lookup)

    def resolve_food_ids(self, food_ids: Iterable[int | None]) -> list[int]:
        """Canonical ids for a batch of food ids, deduplicated in order."""
        return alias_resolver.resolve_ids(food_ids, self._lookup)

    # Search

    def _food_candidates(self, user_id: int | None, canonical_only: bool) -> list[Candidate]:
        visible = Food.status == FoodStatus.APPROVED.value
        if user_id is not None:
            visible = or_(
                visible,
                and_(Food.status == FoodStatus.PENDING.value, Food.created_by == user_id),
            )
        query = self.db.query(Food).filter(visible)
        if canonical_only:
            query = query.filter(Food.canonical_food_id.is_(None))

        return [
            Candidate(
                id=food.id,
                fields=(food.name,),
                is_alias=food.is_alias,
                is_approved=food.status == FoodStatus.APPROVED.value,
                payload=food,
            )
            for food in query.all()
        ]

    def search_food(
        self,
        query: str | None,
        limit: int,
        user_id: int | None = None,
        canonical_only: bool = False,
    ) -> list[FoodMatch]:
        """Rank foods visible to the user against a free-text query.

        Visible foods are approved ones plus the user's own pending ones.
        Alias results carry the id and name of the food they resolve to.
        """
        candidates = self._food_candidates(user_id, canonical_only)
        results = []
        for ranked in fuzzy_matcher.match(query, candidates, limit):
            food: Food = ranked.candidate.payload
            canonical_id = canonical_name = None
            if food.is_alias:
                canonical = self.resolve_food(food.id)
                if canonical is not None and canonical.id != food.id:
                    canonical_id, canonical_name = canonical.id, canonical.name
            results.append(
                FoodMatch(
                    id=food.id,
                    name=food.name,
                    rank=ranked.rank,
                    status=food.status,
                    is_own_pending=(
                        food.status == FoodStatus.PENDING.value
                        and user_id is not None
                        and food.created_by == user_id
                    ),
                    canonical_food_id=canonical_id,
                    canonical_food_name=canonical_name,
                )
            )
        return results

    def search_unit(self, query: str | None, limit: int) -> list[UnitMatch]:
        """Rank units by their best matching name, plural or abbreviation."""
        candidates = [
            Candidate(
                id=unit.id,
                fields=(unit.name, unit.plural, unit.abbreviation),
                payload=unit,
            )
            for unit in self.db.query(Unit).all()
        ]
        return [
            UnitMatch(
                id=ranked.candidate.payload.id,
                name=ranked.candidate.payload.name,
                plural=ranked.candidate.payload.plural,
                abbreviation=ranked.candidate.payload.abbreviation,
                rank=ranked.rank,
            )
            for ranked in fuzzy_matcher.match(query, candidates, limit)
        ]

    # Normalization

    def best_food(self, name: str | None, user_id: int | None = None) -> FoodMatch | None:
        """Top food for an ingredient name if its rank clears the threshold."""
        if not name or len(name.strip()) < MIN_FOOD_QUERY_LENGTH:
            return None
        matches = self.search_food(name, 1, user_id=user_id)
        if matches and fuzzy_matcher.accept(matches[0], self.threshold):
            return matches[0]
        return None

    def best_unit(self, measurement: str | None) -> UnitMatch | None:
        """Top unit for a measurement if its rank clears the threshold."""
        matches = self.search_unit(measurement, 1)
        if matches and fuzzy_matcher.accept(matches[0], self.threshold):
            return matches[0]
        return None

    def normalize_ingredient(
        self,
        name: str,
        measurement: str | None = None,
        quantity: str | None = None,
        user_id: int | None = None,
    ) -> NormalizedIngredient:
        """Resolve one raw mention, keeping the raw text where nothing matches."""
        food = self.best_food(name, user_id=user_id)
        unit = self.best_unit(measurement)

        result = NormalizedIngredient(
            name=food.name if food else name,
            measurement=(unit.abbreviation or unit.name) if unit else (measurement or ""),
            quantity=quantity or "",
            food_id=food.id if food else None,
            unit_id=unit.id if unit else None,
        )
        if food is None:
            logger.info(f"No catalog food for ingredient '{name}'")
        return result

    def normalize_ingredients(
        self, mentions: Iterable[dict[str, Any]], user_id: int | None = None
    ) -> list[NormalizedIngredient]:
        return [
            self.normalize_ingredient(
                mention.get("name", ""),
                mention.get("measurement"),
                mention.get("quantity"),
                user_id=user_id,
            )
            for mention in mentions
        ]

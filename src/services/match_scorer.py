"""Score how well a pantry covers a recipe's ingredients."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


@dataclass
class MatchScore:
    """Coverage of a recipe by a pantry."""

    percentage: float
    matching: int
    total: int
    missing: list[Any] = field(default_factory=list)

    @property
    def display_percentage(self) -> int:
        """Percentage rounded half up for display."""
        return int(Decimal(str(self.percentage)).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def meets(self, min_percentage: float) -> bool:
        return self.percentage >= min_percentage


def score(recipe_food_ids: Iterable[Any], pantry_food_ids: Iterable[Any]) -> MatchScore:
    """Compare recipe food ids against pantry food ids.

    Both sides should already be resolved to canonical ids. Ingredients without
    a food id are ignored and repeated foods count once. A recipe with no
    resolvable ingredients scores 0.
    """
    pantry = set(pantry_food_ids)

    required: list[Any] = []
    seen: set[Any] = set()
    for food_id in recipe_food_ids:
        if food_id is None or food_id in seen:
            continue
        seen.add(food_id)
        required.append(food_id)

    missing = [food_id for food_id in required if food_id not in pantry]
    total = len(required)
    matching = total - len(missing)
    percentage = matching / total * 100 if total else 0.0

    return MatchScore(percentage=percentage, matching=matching, total=total, missing=missing)


def ranking_key(match: MatchScore) -> tuple:
    """Sort key: best coverage first, then more matches, then smaller recipes."""
    return (-match.percentage, -match.matching, match.total)

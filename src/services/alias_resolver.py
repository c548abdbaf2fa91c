"""Resolve alias foods to their canonical food."""

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class FoodLike(Protocol):
    id: Any
    canonical_food_id: Any


FoodLookup = Callable[[Any], FoodLike | None]


def resolve(food_id: Any, lookup: FoodLookup) -> FoodLike | None:
    """Follow alias pointers until reaching a food without one.

    The walk is iterative and remembers every visited id, so a cyclic or
    dangling chain ends at the last food that could be loaded instead of
    looping. Returns None when the starting id itself is unknown.
    """
    if food_id is None:
        return None

    current = lookup(food_id)
    if current is None:
        return None

    visited = {current.id}
    while current.canonical_food_id is not None:
        next_id = current.canonical_food_id
        if next_id in visited:
            logger.warning(f"Alias cycle detected at food {next_id}, stopping at {current.id}")
            break
        target = lookup(next_id)
        if target is None:
            logger.warning(f"Food {current.id} points to missing canonical food {next_id}")
            break
        visited.add(target.id)
        current = target

    return current


def resolve_id(food_id: Any, lookup: FoodLookup) -> Any:
    """Canonical id of a food, or the id itself when it cannot be loaded."""
    resolved = resolve(food_id, lookup)
    return resolved.id if resolved is not None else food_id


def resolve_ids(food_ids: Iterable[Any], lookup: FoodLookup) -> list[Any]:
    """Resolve ids to canonical ids, dropping None and duplicates in order."""
    seen: set[Any] = set()
    result = []
    for food_id in food_ids:
        if food_id is None:
            continue
        canonical_id = resolve_id(food_id, lookup)
        if canonical_id not in seen:
            seen.add(canonical_id)
            result.append(canonical_id)
    return result


def caching_lookup(load: FoodLookup) -> FoodLookup:
    """Wrap a loader so each id is fetched at most once per operation."""
    cache: dict[Any, FoodLike | None] = {}

    def lookup(food_id: Any) -> FoodLike | None:
        if food_id not in cache:
            cache[food_id] = load(food_id)
        return cache[food_id]

    return lookup

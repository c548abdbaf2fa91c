"""Merge rules for shopping-list lines and pantry entries.

A contribution with a food id is identified by ``(food_id, unit_id)``; adding
it where that key already exists accumulates the quantity and takes over the
newest display unit. Contributions without a food id are free text and always
stay separate.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

ItemKey = tuple[Any, Any]


@dataclass(frozen=True)
class Contribution:
    """A quantity of something headed for a list or pantry."""

    name: str
    food_id: Any = None
    unit_id: Any = None
    quantity: Decimal | None = None
    unit: str = ""


def identity_key(food_id: Any, unit_id: Any) -> ItemKey | None:
    """Merge key for a line, or None for free-text lines that never merge."""
    if food_id is None:
        return None
    return (food_id, unit_id)


def accumulate(existing: Decimal | None, added: Decimal | None) -> Decimal:
    """Add quantities, treating missing values as zero."""
    return (existing or Decimal(0)) + (added or Decimal(0))


def merge(existing: Contribution, added: Contribution) -> Contribution:
    """Fold ``added`` into ``existing``: quantity accumulates, unit is replaced."""
    return replace(
        existing,
        quantity=accumulate(existing.quantity, added.quantity),
        unit=added.unit if added.unit else existing.unit,
    )


def aggregate(contributions: Iterable[Contribution]) -> list[Contribution]:
    """Collapse contributions sharing an identity key.

    Keeps the order in which keys are first seen. Free-text contributions pass
    through untouched.
    """
    merged: list[Contribution] = []
    positions: dict[ItemKey, int] = {}

    for contribution in contributions:
        key = identity_key(contribution.food_id, contribution.unit_id)
        if key is None:
            merged.append(contribution)
            continue
        if key in positions:
            index = positions[key]
            merged[index] = merge(merged[index], contribution)
        else:
            positions[key] = len(merged)
            merged.append(contribution)

    return merged

"""Proportional scaling of recipe ingredient quantities."""

import re
from decimal import Decimal, InvalidOperation

PLAIN_DECIMAL_RE = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")
DEFAULT_QUANTITY = Decimal(1)


def parse_quantity(raw: str | None) -> Decimal:
    """Parse a raw quantity, defaulting to 1.

    Only plain decimals count ("2", "1.5", ".5"). Fractions such as "1/2",
    ranges and phrases like "en nypa" fall back to 1.
    """
    if raw is None:
        return DEFAULT_QUANTITY
    text = str(raw).strip()
    if not PLAIN_DECIMAL_RE.match(text):
        return DEFAULT_QUANTITY
    try:
        return Decimal(text)
    except InvalidOperation:
        return DEFAULT_QUANTITY


def validate_yield(original_yield: int | float | Decimal | None) -> None:
    """Reject yields that cannot be scaled from."""
    if original_yield is not None and Decimal(str(original_yield)) <= 0:
        raise ValueError(f"Recipe yield must be positive, got {original_yield}")


def scale_factor(
    original_yield: int | float | Decimal | None,
    target_servings: int | float | Decimal | None,
) -> Decimal:
    """Ratio of requested servings to the recipe yield.

    Exactly 1 when no target is given, when the recipe has no yield, or when
    the target equals the yield.
    """
    if target_servings is None or original_yield is None:
        return Decimal(1)
    target = Decimal(str(target_servings))
    base = Decimal(str(original_yield))
    if target == base:
        return Decimal(1)
    return target / base


def scale(
    quantity: str | None,
    original_yield: int | float | Decimal | None,
    target_servings: int | float | Decimal | None,
) -> Decimal:
    """Scale a raw quantity from the recipe yield to the requested servings.

    Examples (yield 4):
    - "4" for 2 servings -> 2
    - "3" for 6 servings -> 4.5
    - "a pinch" for 8 servings -> 2
    """
    parsed = parse_quantity(quantity)
    factor = scale_factor(original_yield, target_servings)
    if factor == 1:
        return parsed
    return parsed * factor

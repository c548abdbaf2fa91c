"""Catalog search and ingredient normalization schemas."""

from pydantic import BaseModel, ConfigDict, Field


class FoodSearchResult(BaseModel):
    """Ranked food search result."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    rank: float
    status: str
    is_own_pending: bool
    canonical_food_id: int | None
    canonical_food_name: str | None


class UnitSearchResult(BaseModel):
    """Ranked unit search result."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    plural: str
    abbreviation: str
    rank: float


class IngredientMentionInput(BaseModel):
    """A raw ingredient mention as it appears in a recipe."""

    name: str = Field(..., max_length=255)
    measurement: str | None = Field(None, max_length=100)
    quantity: str | None = Field(None, max_length=100)


class NormalizeRequest(BaseModel):
    """Batch of mentions to resolve against the catalog."""

    ingredients: list[IngredientMentionInput] = Field(..., max_length=200)


class NormalizedIngredientResponse(BaseModel):
    """A mention after resolution. Unresolved parts keep their raw text."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    measurement: str
    quantity: str
    food_id: int | None
    unit_id: int | None

"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ShoppingListResponse(BaseModel):
    """Shopping list response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    home_id: int
    name: str
    is_default: bool


class ItemSourceResponse(BaseModel):
    """A recipe contribution to a line."""

    model_config = ConfigDict(from_attributes=True)

    recipe_id: int | None
    recipe_name: str
    quantity_added: float | None
    servings_used: int | None


class ShoppingListItemResponse(BaseModel):
    """Shopping list line response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    shopping_list_id: int
    food_id: int | None
    unit_id: int | None
    display_name: str
    display_unit: str
    quantity: float | None
    is_checked: bool
    checked_at: datetime | None
    sort_order: int
    sources: list[ItemSourceResponse] = []


class CustomItemCreate(BaseModel):
    """Add a manual line."""

    name: str = Field(..., max_length=255)
    list_id: int | None = None
    food_id: int | None = None
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)


class ToggleResponse(BaseModel):
    is_checked: bool


class ClearCheckedRequest(BaseModel):
    list_id: int | None = None


class ClearCheckedResponse(BaseModel):
    deleted_count: int

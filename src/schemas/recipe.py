"""Recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# --- Recipe Ingredient ---


class RecipeIngredientCreate(BaseModel):
    """Create a recipe ingredient mention."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: str | None = Field(None, max_length=100)
    measurement: str | None = Field(None, max_length=100)
    group_name: str | None = Field(None, max_length=100)
    food_id: int | None = None
    unit_id: int | None = None


class RecipeIngredientResponse(BaseModel):
    """Recipe ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    name: str
    quantity: str | None
    measurement: str | None
    group_name: str | None
    food_id: int | None
    unit_id: int | None
    sort_order: int


# --- Recipe ---


class RecipeCreate(BaseModel):
    """Create a new recipe."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    recipe_yield: int | None = Field(None, gt=0)
    yield_name: str | None = Field(None, max_length=50)
    ingredients: list[RecipeIngredientCreate] = []


class RecipeResponse(BaseModel):
    """Recipe response with ingredients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: str | None
    recipe_yield: int | None
    yield_name: str | None
    ingredients: list[RecipeIngredientResponse]
    created_at: datetime


# --- Matching ---


class PantryMatchRequest(BaseModel):
    """Score one recipe against a set of foods (defaults to the home pantry)."""

    pantry_food_ids: list[int] | None = None
    min_percentage: float = Field(0, ge=0, le=100)
    limit: int = Field(1, ge=1, le=100)


class FoodIdsMatchRequest(BaseModel):
    """Find recipes that can be made from a set of foods."""

    food_ids: list[int]
    min_percentage: float | None = Field(None, ge=0, le=100)
    owner_id: int | None = None
    limit: int | None = Field(None, ge=1, le=100)


class RankedRecipeResponse(BaseModel):
    """A recipe with its pantry coverage."""

    model_config = ConfigDict(from_attributes=True)

    recipe_id: int
    name: str
    owner_id: int
    match_percentage: int
    matching_ingredients: int
    total_ingredients: int
    missing_food_ids: list[int]
    missing_food_names: list[str]
    created_at: datetime | None


# --- Add to shopping list ---


class AddToListRequest(BaseModel):
    """Add a recipe's ingredients to a shopping list."""

    list_id: int | None = None  # Default list when omitted
    servings: int | None = Field(None, gt=0)
    ingredient_ids: list[int] | None = None  # All ingredients when omitted


class AddToListResponse(BaseModel):
    """Result of adding a recipe to a shopping list."""

    model_config = ConfigDict(from_attributes=True)

    added_count: int
    list_id: int

"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_current_user,
    get_home_id,
    get_pantry_service,
    get_recipe_match_service,
    get_recipe_service,
    get_shopping_list_service,
)
from src.config import get_settings
from src.models.user import User
from src.schemas.recipe import (
    AddToListRequest,
    AddToListResponse,
    FoodIdsMatchRequest,
    PantryMatchRequest,
    RankedRecipeResponse,
    RecipeCreate,
    RecipeResponse,
)
from src.services.pantry_service import PantryService
from src.services.recipe_match_service import RecipeMatchService
from src.services.recipe_service import RecipeService
from src.services.shopping_list_service import ShoppingListService

settings = get_settings()

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    recipe: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Create a recipe. Ingredient mentions are resolved against the catalog."""
    return service.create_recipe(current_user.id, recipe)


@router.post("/match", response_model=list[RankedRecipeResponse])
def match_recipes_to_foods(
    request: FoodIdsMatchRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    matcher: Annotated[RecipeMatchService, Depends(get_recipe_match_service)],
):
    """Find recipes covered by the given foods, best coverage first."""
    return matcher.match_pantry_to_food_ids(
        request.food_ids,
        min_percentage=(
            request.min_percentage
            if request.min_percentage is not None
            else settings.recipe_match_default_min_percentage
        ),
        owner_filter=request.owner_id,
        limit=request.limit or settings.recipe_match_default_limit,
    )


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a recipe with its ingredient mentions."""
    return service.get_recipe(recipe_id)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete one of your recipes. It no longer matches or adds to lists."""
    service.delete_recipe(recipe_id, current_user.id)


@router.post("/{recipe_id}/pantry-match", response_model=list[RankedRecipeResponse])
def match_recipe_to_pantry(
    recipe_id: int,
    home_id: Annotated[int, Depends(get_home_id)],
    pantry: Annotated[PantryService, Depends(get_pantry_service)],
    matcher: Annotated[RecipeMatchService, Depends(get_recipe_match_service)],
    request: PantryMatchRequest | None = None,
):
    """Score a recipe against the given foods, or the home pantry by default."""
    request = request or PantryMatchRequest()
    food_ids = request.pantry_food_ids
    if food_ids is None:
        food_ids = pantry.pantry_food_ids(home_id)
    return matcher.match_recipe_to_pantry(
        recipe_id,
        food_ids,
        min_percentage=request.min_percentage,
        limit=request.limit,
    )


@router.post("/{recipe_id}/add-to-list", response_model=AddToListResponse)
def add_recipe_to_list(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    home_id: Annotated[int, Depends(get_home_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
    request: AddToListRequest | None = None,
):
    """Add a recipe's ingredients to a shopping list, scaled to the servings."""
    request = request or AddToListRequest()
    return service.add_recipe_to_list(
        recipe_id,
        home_id,
        user_id=current_user.id,
        list_id=request.list_id,
        servings=request.servings,
        ingredient_ids=request.ingredient_ids,
    )

"""Pantry API endpoints."""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import (
    get_current_user,
    get_home_id,
    get_pantry_service,
    get_recipe_match_service,
)
from src.config import get_settings
from src.models.user import User
from src.schemas.pantry import PantryAddRequest, PantryEntryResponse
from src.schemas.recipe import RankedRecipeResponse
from src.services.pantry_service import PantryService
from src.services.recipe_match_service import RecipeMatchService

settings = get_settings()

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


@router.get("", response_model=list[PantryEntryResponse])
def list_pantry(
    home_id: Annotated[int, Depends(get_home_id)],
    pantry: Annotated[PantryService, Depends(get_pantry_service)],
):
    """List the home's pantry, expired entries first."""
    return pantry.get_pantry(home_id)


@router.post("", response_model=PantryEntryResponse, status_code=status.HTTP_201_CREATED)
def add_to_pantry(
    request: PantryAddRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    home_id: Annotated[int, Depends(get_home_id)],
    pantry: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Add a food to the pantry. An existing entry is replaced, not accumulated."""
    return pantry.add_to_pantry(
        home_id,
        request.food_id,
        user_id=current_user.id,
        quantity=Decimal(str(request.quantity)) if request.quantity is not None else None,
        unit=request.unit,
        expires_at=request.expires_at,
    )


@router.get("/recipes", response_model=list[RankedRecipeResponse])
def recipes_from_pantry(
    home_id: Annotated[int, Depends(get_home_id)],
    pantry: Annotated[PantryService, Depends(get_pantry_service)],
    matcher: Annotated[RecipeMatchService, Depends(get_recipe_match_service)],
    min_percentage: float | None = None,
    limit: int | None = None,
):
    """Recipes that can be made from what the home has in stock."""
    food_ids = pantry.pantry_food_ids(home_id)
    return matcher.match_pantry_to_food_ids(
        food_ids,
        min_percentage=(
            min_percentage
            if min_percentage is not None
            else settings.recipe_match_default_min_percentage
        ),
        owner_filter=None,
        limit=limit or settings.recipe_match_default_limit,
    )


@router.delete("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_pantry(
    food_id: int,
    home_id: Annotated[int, Depends(get_home_id)],
    pantry: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Remove a food from the pantry."""
    if not pantry.remove_from_pantry(home_id, food_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Pantry entry not found"
        )

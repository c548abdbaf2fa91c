"""Shopping list API endpoints."""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_home_id, get_shopping_list_service
from src.models.user import User
from src.schemas.shopping_list import (
    ClearCheckedRequest,
    ClearCheckedResponse,
    CustomItemCreate,
    ShoppingListItemResponse,
    ShoppingListResponse,
    ToggleResponse,
)
from src.services.shopping_list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])


@router.get("", response_model=list[ShoppingListResponse])
def list_shopping_lists(
    home_id: Annotated[int, Depends(get_home_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """List the home's shopping lists, default list first."""
    return service.get_lists(home_id)


@router.get("/{list_id}/items", response_model=list[ShoppingListItemResponse])
def list_items(
    list_id: int,
    home_id: Annotated[int, Depends(get_home_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """List lines of a shopping list, unchecked first."""
    return service.get_items(home_id, list_id)


@router.post("/items", response_model=ShoppingListItemResponse, status_code=status.HTTP_201_CREATED)
def add_custom_item(
    request: CustomItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    home_id: Annotated[int, Depends(get_home_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Add a manual line. Lines with a food merge into a matching unchecked line."""
    return service.add_custom_item(
        home_id,
        request.name,
        user_id=current_user.id,
        list_id=request.list_id,
        food_id=request.food_id,
        quantity=Decimal(str(request.quantity)) if request.quantity is not None else None,
        unit=request.unit,
    )


@router.post("/items/{item_id}/toggle", response_model=ToggleResponse)
def toggle_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    home_id: Annotated[int, Depends(get_home_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Check or uncheck a line. Checking adds the line's food to the pantry."""
    is_checked = service.toggle_line_item(item_id, home_id, user_id=current_user.id)
    return {"is_checked": is_checked}


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    home_id: Annotated[int, Depends(get_home_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Delete a line and its recipe sources."""
    service.delete_item(item_id, home_id)


@router.post("/clear-checked", response_model=ClearCheckedResponse)
def clear_checked(
    home_id: Annotated[int, Depends(get_home_id)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
    request: ClearCheckedRequest | None = None,
):
    """Delete all checked lines of a list (the default list when none is given)."""
    list_id = request.list_id if request else None
    return {"deleted_count": service.clear_checked(home_id, list_id)}

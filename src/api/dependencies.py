"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.catalog_service import CatalogService
from src.services.pantry_service import PantryService
from src.services.recipe_match_service import RecipeMatchService
from src.services.recipe_service import RecipeService
from src.services.shopping_list_service import ShoppingListService

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_home_id(current_user: Annotated[User, Depends(get_current_user)]) -> int:
    """Home of the current user; pantry and list operations need one."""
    if current_user.home_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User has no home")
    return current_user.home_id


def get_catalog_service(db: Annotated[Session, Depends(get_db)]) -> CatalogService:
    """Get catalog service with dependencies."""
    return CatalogService(db)


def get_pantry_service(db: Annotated[Session, Depends(get_db)]) -> PantryService:
    """Get pantry service with dependencies."""
    return PantryService(db)


def get_shopping_list_service(db: Annotated[Session, Depends(get_db)]) -> ShoppingListService:
    """Get shopping list service with dependencies."""
    return ShoppingListService(db)


def get_recipe_service(db: Annotated[Session, Depends(get_db)]) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_recipe_match_service(db: Annotated[Session, Depends(get_db)]) -> RecipeMatchService:
    """Get recipe match service with dependencies."""
    return RecipeMatchService(db)

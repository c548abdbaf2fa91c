"""Catalog search and ingredient normalization endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_catalog_service, get_current_user
from src.config import get_settings
from src.models.user import User
from src.schemas.catalog import (
    FoodSearchResult,
    NormalizedIngredientResponse,
    NormalizeRequest,
    UnitSearchResult,
)
from src.services.catalog_service import CatalogService

settings = get_settings()

router = APIRouter(prefix="/api/v1", tags=["catalog"])


@router.get("/foods/search", response_model=list[FoodSearchResult])
def search_foods(
    current_user: Annotated[User, Depends(get_current_user)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str, Query(max_length=500)] = "",
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    canonical_only: bool = False,
):
    """Search foods by fuzzy name match.

    Approved foods and the caller's own pending foods are searched. Alias
    results report the canonical food they stand for.
    """
    return catalog.search_food(
        q,
        limit or settings.search_default_limit,
        user_id=current_user.id,
        canonical_only=canonical_only,
    )


@router.get("/units/search", response_model=list[UnitSearchResult])
def search_units(
    current_user: Annotated[User, Depends(get_current_user)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str, Query(max_length=500)] = "",
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
):
    """Search units by name, plural or abbreviation."""
    return catalog.search_unit(q, limit or settings.search_default_limit)


@router.post("/ingredients/normalize", response_model=list[NormalizedIngredientResponse])
def normalize_ingredients(
    request: NormalizeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Resolve raw ingredient mentions to catalog foods and units.

    A mention only resolves when the best match ranks above the acceptance
    threshold; otherwise the raw text comes back unchanged with null ids.
    """
    return catalog.normalize_ingredients(
        (mention.model_dump() for mention in request.ingredients),
        user_id=current_user.id,
    )

"""Pantry schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class PantryAddRequest(BaseModel):
    """Add or replace a pantry entry."""

    food_id: int
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    expires_at: date | None = None


class PantryEntryResponse(BaseModel):
    """Pantry entry response."""

    model_config = ConfigDict(from_attributes=True)

    food_id: int
    food_name: str
    quantity: float | None
    unit: str | None
    expires_at: date | None
    added_at: datetime
    is_expired: bool

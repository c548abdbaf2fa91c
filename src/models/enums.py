"""Enums for model fields."""

from enum import Enum


class FoodStatus(str, Enum):
    """Approval state of a catalog food."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

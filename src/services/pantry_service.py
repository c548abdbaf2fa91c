"""Pantry service: explicit pantry edits and quantity accumulation."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from src.database import dialect_name
from src.models.food import Food
from src.models.pantry import PantryEntry
from src.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


@dataclass
class PantryRow:
    """A pantry entry joined with its food name."""

    food_id: int
    food_name: str
    quantity: Decimal | None
    unit: str | None
    expires_at: date | None
    added_at: datetime
    is_expired: bool


class PantryService:
    """Service for pantry-related operations."""

    def __init__(self, db: Session, catalog: CatalogService | None = None):
        self.db = db
        self.catalog = catalog or CatalogService(db)

    def _insert(self):
        if dialect_name(self.db) == "postgresql":
            return postgresql_insert(PantryEntry)
        return sqlite_insert(PantryEntry)

    def _canonical_food_id(self, food_id: int) -> int:
        food = self.catalog.resolve_food(food_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food not found")
        return food.id

    def get_entry(self, home_id: int, food_id: int) -> PantryEntry | None:
        return (
            self.db.query(PantryEntry)
            .filter(PantryEntry.home_id == home_id, PantryEntry.food_id == food_id)
            .first()
        )

    def add_to_pantry(
        self,
        home_id: int,
        food_id: int,
        user_id: int | None = None,
        quantity: Decimal | None = None,
        unit: str | None = None,
        expires_at: date | None = None,
    ) -> PantryRow:
        """Add a food to the pantry, replacing quantity, unit and expiry if present."""
        canonical_id = self._canonical_food_id(food_id)

        stmt = self._insert().values(
            home_id=home_id,
            food_id=canonical_id,
            quantity=quantity,
            unit=unit or None,
            expires_at=expires_at,
            added_by=user_id,
            added_at=func.now(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["home_id", "food_id"],
            set_={
                "quantity": stmt.excluded.quantity,
                "unit": stmt.excluded.unit,
                "expires_at": stmt.excluded.expires_at,
                "added_by": stmt.excluded.added_by,
                "added_at": func.now(),
            },
        )
        self.db.execute(stmt)
        self.db.commit()

        entry = self.get_entry(home_id, canonical_id)
        return self._row(entry, entry.food.name)

    def accumulate(
        self,
        home_id: int,
        food_id: int,
        quantity: Decimal | None,
        unit: str | None,
        user_id: int | None = None,
    ) -> None:
        """Add a quantity to the pantry entry for a food, creating it if needed.

        Runs as one upsert so concurrent additions both count. Missing
        quantities count as zero; a missing unit keeps the stored one. The
        caller owns the transaction.
        """
        canonical_id = self._canonical_food_id(food_id)

        stmt = self._insert().values(
            home_id=home_id,
            food_id=canonical_id,
            quantity=quantity if quantity is not None else Decimal(0),
            unit=unit or None,
            added_by=user_id,
            added_at=func.now(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["home_id", "food_id"],
            set_={
                "quantity": func.coalesce(PantryEntry.quantity, 0)
                + func.coalesce(stmt.excluded.quantity, 0),
                "unit": func.coalesce(stmt.excluded.unit, PantryEntry.unit),
                "added_at": func.now(),
            },
        )
        self.db.execute(stmt)
        logger.info(f"Pantry of home {home_id}: added {quantity} {unit or ''} of food {canonical_id}")

    def remove_from_pantry(self, home_id: int, food_id: int) -> bool:
        """Remove a food from the pantry. Returns False if it was not there."""
        canonical_id = self.catalog.resolve_food_id(food_id)
        deleted = (
            self.db.query(PantryEntry)
            .filter(PantryEntry.home_id == home_id, PantryEntry.food_id == canonical_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def pantry_food_ids(self, home_id: int) -> list[int]:
        """Canonical food ids in a home's pantry."""
        rows = self.db.query(PantryEntry.food_id).filter(PantryEntry.home_id == home_id).all()
        return self.catalog.resolve_food_ids(food_id for (food_id,) in rows)

    @staticmethod
    def _row(entry: PantryEntry, food_name: str, today: date | None = None) -> PantryRow:
        today = today or date.today()
        return PantryRow(
            food_id=entry.food_id,
            food_name=food_name,
            quantity=entry.quantity,
            unit=entry.unit,
            expires_at=entry.expires_at,
            added_at=entry.added_at,
            is_expired=entry.expires_at is not None and entry.expires_at < today,
        )

    def get_pantry(self, home_id: int, today: date | None = None) -> list[PantryRow]:
        """List a home's pantry: expired entries first, then by expiry and name."""
        today = today or date.today()
        rows = (
            self.db.query(PantryEntry, Food.name)
            .join(Food, Food.id == PantryEntry.food_id)
            .filter(PantryEntry.home_id == home_id)
            .all()
        )

        result = [self._row(entry, name, today) for entry, name in rows]
        result.sort(
            key=lambda row: (
                not row.is_expired,
                row.expires_at is None,
                row.expires_at or date.max,
                row.food_name.casefold(),
            )
        )
        return result

"""Pantry entry model for tracking what a home has in stock."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from src.database import Base


class PantryEntry(Base):
    """One food in a home's pantry."""

    __tablename__ = "pantry_entries"
    __table_args__ = (UniqueConstraint("home_id", "food_id", name="uq_pantry_home_food"),)

    id = Column(Integer, primary_key=True, index=True)
    home_id = Column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)
    food_id = Column(Integer, ForeignKey("foods.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Numeric(), nullable=True)
    unit = Column(String(50), nullable=True)
    expires_at = Column(Date, nullable=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    added_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    home = relationship("Home", back_populates="pantry_entries")
    food = relationship("Food")

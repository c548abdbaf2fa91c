"""Home model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Home(Base, TimestampMixin):
    """A household sharing one pantry and its shopping lists."""

    __tablename__ = "homes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    members = relationship("User", back_populates="home")
    shopping_lists = relationship(
        "ShoppingList", back_populates="home", cascade="all, delete-orphan"
    )
    pantry_entries = relationship(
        "PantryEntry", back_populates="home", cascade="all, delete-orphan"
    )

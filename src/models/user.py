"""User model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User identified by the bearer token; belongs to at most one home."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    home_id = Column(Integer, ForeignKey("homes.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    home = relationship("Home", back_populates="members")

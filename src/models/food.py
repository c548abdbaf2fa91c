"""Food catalog model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import FoodStatus
from src.models.mixins import TimestampMixin


class Food(Base, TimestampMixin):
    """A catalog food. With canonical_food_id set it is an alias of that food."""

    __tablename__ = "foods"
    __table_args__ = (
        CheckConstraint("canonical_food_id IS NULL OR canonical_food_id <> id", name="ck_foods_not_self_alias"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default=FoodStatus.APPROVED.value, index=True)
    canonical_food_id = Column(
        Integer, ForeignKey("foods.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    canonical_food = relationship("Food", remote_side=[id])

    @property
    def is_alias(self) -> bool:
        return self.canonical_food_id is not None

"""Recipe and RecipeIngredient models."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import SoftDeleteMixin, TimestampMixin


class Recipe(Base, TimestampMixin, SoftDeleteMixin):
    """Recipe model for storing recipe definitions."""

    __tablename__ = "recipes"
    __table_args__ = (
        CheckConstraint("recipe_yield IS NULL OR recipe_yield > 0", name="ck_recipes_yield_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    recipe_yield = Column(Integer, nullable=True)  # Servings the quantities are written for
    yield_name = Column(String(50), nullable=True)  # "portioner", "st"

    # Relationships
    user = relationship("User", backref="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.sort_order",
    )


class RecipeIngredient(Base, TimestampMixin):
    """Ingredient mention within a recipe. Raw text is kept after resolution."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    quantity = Column(String(100), nullable=True)  # Raw text: "2", "1/2", "en nypa"
    measurement = Column(String(100), nullable=True)  # Raw text: "msk", "dl"
    group_name = Column(String(100), nullable=True)
    food_id = Column(Integer, ForeignKey("foods.id", ondelete="SET NULL"), nullable=True, index=True)
    unit_id = Column(Integer, ForeignKey("units.id", ondelete="SET NULL"), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
    food = relationship("Food")
    unit = relationship("Unit")

"""Shopping list models."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Index,
    Numeric,
    String,
    func,
    text,
)
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class ShoppingList(Base, TimestampMixin):
    """A home's shopping list. Each home has at most one default list."""

    __tablename__ = "shopping_lists"
    __table_args__ = (
        Index(
            "uq_shopping_lists_default_per_home",
            "home_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    home_id = Column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)

    # Relationships
    home = relationship("Home", back_populates="shopping_lists")
    items = relationship(
        "ShoppingListItem",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        order_by="ShoppingListItem.sort_order",
    )


class ShoppingListItem(Base, TimestampMixin):
    """A line on a shopping list, merged by (food_id, unit_id) while unchecked."""

    __tablename__ = "shopping_list_items"
    __table_args__ = (
        CheckConstraint("quantity IS NULL OR quantity >= 0", name="ck_shopping_list_items_quantity"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shopping_list_id = Column(
        Integer, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    food_id = Column(Integer, ForeignKey("foods.id", ondelete="SET NULL"), nullable=True, index=True)
    unit_id = Column(Integer, ForeignKey("units.id", ondelete="SET NULL"), nullable=True)
    display_name = Column(String(255), nullable=False)
    display_unit = Column(String(50), nullable=False, default="")
    quantity = Column(Numeric(), nullable=True)
    is_checked = Column(Boolean, nullable=False, default=False, index=True)
    checked_at = Column(DateTime(timezone=True), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    shopping_list = relationship("ShoppingList", back_populates="items")
    food = relationship("Food")
    sources = relationship(
        "ShoppingListItemSource",
        back_populates="item",
        cascade="all, delete-orphan",
    )


class ShoppingListItemSource(Base):
    """Which recipe contributed how much to a shopping list line."""

    __tablename__ = "shopping_list_item_sources"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(
        Integer,
        ForeignKey("shopping_list_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True)
    recipe_name = Column(String(255), nullable=False)  # Snapshot, survives recipe deletion
    quantity_added = Column(Numeric(), nullable=True)
    servings_used = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    item = relationship("ShoppingListItem", back_populates="sources")

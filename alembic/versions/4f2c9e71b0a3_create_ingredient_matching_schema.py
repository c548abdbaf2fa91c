"""Create catalog, recipe, pantry and shopping list tables

Revision ID: 4f2c9e71b0a3
Revises:
Create Date: 2026-10-19 09:12:44.218305

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2c9e71b0a3"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "homes",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column(
            "home_id",
            sa.Integer(),
            sa.ForeignKey("homes.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        *_timestamps(),
    )

    op.create_table(
        "foods",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="approved", index=True),
        sa.Column(
            "canonical_food_id",
            sa.Integer(),
            sa.ForeignKey("foods.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "created_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "canonical_food_id IS NULL OR canonical_food_id <> id",
            name="ck_foods_not_self_alias",
        ),
    )

    op.create_table(
        "units",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("plural", sa.String(100), nullable=False, server_default=""),
        sa.Column("abbreviation", sa.String(20), nullable=False, server_default=""),
        *_timestamps(),
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("recipe_yield", sa.Integer(), nullable=True),
        sa.Column("yield_name", sa.String(50), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "recipe_yield IS NULL OR recipe_yield > 0", name="ck_recipes_yield_positive"
        ),
    )

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("quantity", sa.String(100), nullable=True),
        sa.Column("measurement", sa.String(100), nullable=True),
        sa.Column("group_name", sa.String(100), nullable=True),
        sa.Column(
            "food_id",
            sa.Integer(),
            sa.ForeignKey("foods.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "unit_id", sa.Integer(), sa.ForeignKey("units.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "pantry_entries",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "home_id",
            sa.Integer(),
            sa.ForeignKey("homes.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "food_id",
            sa.Integer(),
            sa.ForeignKey("foods.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("quantity", sa.Numeric(), nullable=True),
        sa.Column("unit", sa.String(50), nullable=True),
        sa.Column("expires_at", sa.Date(), nullable=True),
        sa.Column(
            "added_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "added_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
        ),
        sa.UniqueConstraint("home_id", "food_id", name="uq_pantry_home_food"),
    )

    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "home_id",
            sa.Integer(),
            sa.ForeignKey("homes.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    # One default list per home
    op.create_index(
        "uq_shopping_lists_default_per_home",
        "shopping_lists",
        ["home_id"],
        unique=True,
        postgresql_where=sa.text("is_default"),
        sqlite_where=sa.text("is_default"),
    )

    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "shopping_list_id",
            sa.Integer(),
            sa.ForeignKey("shopping_lists.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "food_id",
            sa.Integer(),
            sa.ForeignKey("foods.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "unit_id", sa.Integer(), sa.ForeignKey("units.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("display_unit", sa.String(50), nullable=False, server_default=""),
        sa.Column("quantity", sa.Numeric(), nullable=True),
        sa.Column("is_checked", sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
        sa.Column("checked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "quantity IS NULL OR quantity >= 0", name="ck_shopping_list_items_quantity"
        ),
    )

    op.create_table(
        "shopping_list_item_sources",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("shopping_list_items.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("recipe_name", sa.String(255), nullable=False),
        sa.Column("quantity_added", sa.Numeric(), nullable=True),
        sa.Column("servings_used", sa.Integer(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )


def downgrade() -> None:
    op.drop_table("shopping_list_item_sources")
    op.drop_table("shopping_list_items")
    op.drop_index("uq_shopping_lists_default_per_home", table_name="shopping_lists")
    op.drop_table("shopping_lists")
    op.drop_table("pantry_entries")
    op.drop_table("recipe_ingredients")
    op.drop_table("recipes")
    op.drop_table("units")
    op.drop_table("foods")
    op.drop_table("users")
    op.drop_table("homes")

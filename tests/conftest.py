"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app
from src.models import Food, Home, Recipe, RecipeIngredient, Unit, User
from src.models.enums import FoodStatus
from src.services.auth import create_access_token


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and home_id."""

    def __init__(self, *args, user_id: int | None = None, home_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.home_id = home_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/pantry_matcher", "/pantry_matcher_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Swedish catalog used across tests
FOOD_NAMES = [
    "Ägg",
    "Smör",
    "Mjölk",
    "Olivolja",
    "Vispgrädde",
    "Salt",
    "Citron",
    "Dulce de leche",
    "Xantangummi",
    "Tomat",
    "Gul lök",
    "Vitlök",
    "Pasta",
]

UNITS = [
    ("matsked", "matskedar", "msk"),
    ("tesked", "teskedar", "tsk"),
    ("kryddmått", "kryddmått", "krm"),
    ("deciliter", "deciliter", "dl"),
    ("gram", "gram", "g"),
    ("kilogram", "kilogram", "kg"),
    ("stycken", "stycken", "st"),
]


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    session.query(Food).update({Food.canonical_food_id: None})
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email: str, with_home: bool = True) -> User:
    """Create a user, optionally in a new home."""
    home_id = None
    if with_home:
        home = Home(name=f"Home of {email}")
        db.add(home)
        db.flush()
        home_id = home.id
    user = User(email=email, name=email.split("@")[0], home_id=home_id)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user: User) -> AuthHeaders:
    token = create_access_token(user.id, user.email)
    return AuthHeaders(
        {"Authorization": f"Bearer {token}"}, user_id=user.id, home_id=user.home_id
    )


@pytest.fixture
def user(db):
    """A user with a home."""
    return make_user(db, "test@example.com")


@pytest.fixture
def auth_headers(client, user):
    """Auth headers for the default test user."""
    return headers_for(user)


@pytest.fixture
def foods(db):
    """Seed approved canonical foods, keyed by name."""
    created = {name: Food(name=name, status=FoodStatus.APPROVED.value) for name in FOOD_NAMES}
    db.add_all(created.values())
    db.commit()
    return created


@pytest.fixture
def units(db):
    """Seed units, keyed by abbreviation."""
    created = {
        abbreviation: Unit(name=name, plural=plural, abbreviation=abbreviation)
        for name, plural, abbreviation in UNITS
    }
    db.add_all(created.values())
    db.commit()
    return created


@pytest.fixture
def make_recipe(db, user):
    """Factory for recipes.

    Ingredients are (name, quantity, measurement, food, unit) tuples where food
    and unit may be None.
    """

    def _make(name: str, ingredients: list[tuple], recipe_yield: int | None = 4, owner=None):
        recipe = Recipe(
            user_id=(owner or user).id,
            name=name,
            recipe_yield=recipe_yield,
        )
        for index, (ing_name, quantity, measurement, food, unit) in enumerate(ingredients):
            recipe.ingredients.append(
                RecipeIngredient(
                    name=ing_name,
                    quantity=quantity,
                    measurement=measurement,
                    food_id=food.id if food is not None else None,
                    unit_id=unit.id if unit is not None else None,
                    sort_order=index,
                )
            )
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    return _make


@pytest.fixture
def other_user(db):
    """A second user with a home of their own."""
    return make_user(db, "other@example.com")


@pytest.fixture
def other_auth_headers(client, other_user):
    return headers_for(other_user)


@pytest.fixture
def homeless_auth_headers(client, db):
    """Auth headers for a user that belongs to no home."""
    return headers_for(make_user(db, "nohome@example.com", with_home=False))


@pytest.fixture
def alias(db, foods):
    """Grädde as an alias of Vispgrädde."""
    food = Food(name="Grädde", canonical_food_id=foods["Vispgrädde"].id)
    db.add(food)
    db.commit()
    return food

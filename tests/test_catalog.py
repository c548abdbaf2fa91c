"""Catalog search and ingredient normalization tests."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.database import get_db
from src.main import app
from src.models import Food
from src.models.enums import FoodStatus
from src.services.catalog_service import CatalogService


def test_search_requires_auth(client):
    response = client.get("/api/v1/foods/search", params={"q": "ägg"})
    assert response.status_code in (401, 403)


def test_search_when_store_is_down(client, auth_headers):
    """Test that a lost database connection answers 503 instead of 500."""
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    session.get.side_effect = session.query.side_effect
    previous = app.dependency_overrides[get_db]
    app.dependency_overrides[get_db] = lambda: session
    try:
        response = client.get("/api/v1/foods/search", params={"q": "ägg"}, headers=auth_headers)
    finally:
        app.dependency_overrides[get_db] = previous

    assert response.status_code == 503
    detail = response.json()["detail"]
    assert detail.startswith("Data store unavailable:")
    assert "connection refused" in detail


@pytest.mark.parametrize(
    "query,expected",
    [("ägg", "Ägg"), ("SMÖR", "Smör"), ("mjölk", "Mjölk"), ("dulce de leche", "Dulce de leche")],
)
def test_search_food_finds_exact_name(client, auth_headers, foods, query, expected):
    response = client.get("/api/v1/foods/search", params={"q": query}, headers=auth_headers)
    assert response.status_code == 200
    results = response.json()
    assert results[0]["name"] == expected
    assert results[0]["rank"] == pytest.approx(1.0)
    assert results[0]["canonical_food_id"] is None


def test_search_food_respects_limit(client, auth_headers, foods):
    response = client.get(
        "/api/v1/foods/search", params={"q": "o", "limit": 1}, headers=auth_headers
    )
    assert response.status_code == 200
    assert len(response.json()) == 1


def test_search_food_empty_query_returns_nothing(client, auth_headers, foods):
    response = client.get("/api/v1/foods/search", params={"q": "   "}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == []


def test_search_food_gibberish_returns_nothing(client, auth_headers, foods):
    response = client.get(
        "/api/v1/foods/search", params={"q": "xyzqwrtyuioplkjhgfds"}, headers=auth_headers
    )
    assert response.json() == []


def test_search_food_reports_alias_target(client, auth_headers, alias, foods):
    """Test that alias results carry the canonical food they stand for."""
    response = client.get("/api/v1/foods/search", params={"q": "grädde"}, headers=auth_headers)
    results = response.json()

    assert results[0]["name"] == "Grädde"
    assert results[0]["canonical_food_id"] == foods["Vispgrädde"].id
    assert results[0]["canonical_food_name"] == "Vispgrädde"
    assert "Vispgrädde" in [r["name"] for r in results]


def test_search_food_canonical_only_hides_aliases(client, auth_headers, alias, foods):
    response = client.get(
        "/api/v1/foods/search",
        params={"q": "grädde", "canonical_only": True},
        headers=auth_headers,
    )
    names = [r["name"] for r in response.json()]
    assert "Grädde" not in names
    assert names == ["Vispgrädde"]


def test_search_food_shows_own_pending_only(
    client, db, user, auth_headers, other_user, other_auth_headers, foods
):
    """Test that pending foods are visible to their creator and nobody else."""
    other = other_user
    db.add_all(
        [
            Food(name="Saffran", status=FoodStatus.PENDING.value, created_by=user.id),
            Food(name="Kardemumma", status=FoodStatus.PENDING.value, created_by=other.id),
            Food(name="Sockerkulör", status=FoodStatus.REJECTED.value, created_by=user.id),
        ]
    )
    db.commit()

    own = client.get("/api/v1/foods/search", params={"q": "saffran"}, headers=auth_headers)
    assert own.json()[0]["name"] == "Saffran"
    assert own.json()[0]["is_own_pending"] is True
    assert own.json()[0]["status"] == "pending"

    theirs = client.get("/api/v1/foods/search", params={"q": "kardemumma"}, headers=auth_headers)
    assert theirs.json() == []

    rejected = client.get("/api/v1/foods/search", params={"q": "sockerkulör"}, headers=auth_headers)
    assert rejected.json() == []

    seen_by_other = client.get(
        "/api/v1/foods/search", params={"q": "saffran"}, headers=other_auth_headers
    )
    assert seen_by_other.json() == []


@pytest.mark.parametrize(
    "query,expected",
    [
        ("msk", "matsked"),
        ("dl", "deciliter"),
        ("tsk", "tesked"),
        ("g", "gram"),
        ("st", "stycken"),
        ("krm", "kryddmått"),
        ("matskedar", "matsked"),
    ],
)
def test_search_unit(client, auth_headers, units, query, expected):
    response = client.get("/api/v1/units/search", params={"q": query}, headers=auth_headers)
    assert response.status_code == 200
    results = response.json()
    assert results[0]["name"] == expected
    assert results[0]["rank"] > 0.5


def test_normalize_ingredients(client, auth_headers, foods, units):
    """Test the full normalization pipeline for a batch of mentions."""
    response = client.post(
        "/api/v1/ingredients/normalize",
        json={
            "ingredients": [
                {"name": "ägg", "measurement": "stycken", "quantity": "2"},
                {"name": "citron (finrivet skal)", "quantity": "1"},
                {"name": "Olivolja", "measurement": "msk", "quantity": "2"},
                {"name": "zqxwvbnm", "measurement": "en nypa"},
            ]
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    egg, lemon, oil, unknown = response.json()

    assert egg["name"] == "Ägg"
    assert egg["food_id"] == foods["Ägg"].id
    assert egg["unit_id"] == units["st"].id
    assert egg["measurement"] == "st"
    assert egg["quantity"] == "2"

    assert lemon["name"] == "Citron"
    assert lemon["food_id"] == foods["Citron"].id
    assert lemon["unit_id"] is None
    assert lemon["measurement"] == ""

    assert oil["food_id"] == foods["Olivolja"].id
    assert oil["unit_id"] == units["msk"].id

    assert unknown["name"] == "zqxwvbnm"
    assert unknown["food_id"] is None
    assert unknown["unit_id"] is None
    assert unknown["measurement"] == "en nypa"
    assert unknown["quantity"] == ""


def test_normalize_skips_single_letter_names(client, auth_headers, foods):
    response = client.post(
        "/api/v1/ingredients/normalize",
        json={"ingredients": [{"name": "x"}]},
        headers=auth_headers,
    )
    assert response.json()[0]["food_id"] is None
    assert response.json()[0]["name"] == "x"


def test_normalize_honours_threshold(db, foods):
    """Test that a stricter threshold rejects a partial match."""
    lenient = CatalogService(db, threshold=0.3)
    strict = CatalogService(db, threshold=0.99)

    assert lenient.best_food("vispgrädd").name == "Vispgrädde"
    assert strict.best_food("gul lök hackad") is not None
    assert strict.best_food("vispgrädd") is None

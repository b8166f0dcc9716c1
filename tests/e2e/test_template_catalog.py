"""End-to-end tests for the public template catalog."""

import pytest

from tests.harness import create_client_fixture, seed_admin

client = create_client_fixture()

TEMPLATES = [
    {
        "name": "Rose Garden",
        "category": "wedding",
        "style": "floral",
        "popularity_score": 50,
        "tags": ["roses"],
    },
    {
        "name": "Gold Leaf",
        "category": "wedding",
        "style": "elegant",
        "popularity_score": 80,
        "is_premium": True,
        "price": 9.99,
    },
    {
        "name": "Balloons",
        "category": "birthday",
        "style": "modern",
        "popularity_score": 10,
    },
]


@pytest.fixture
def catalog(client):
    """Seed the catalog through the admin API and return the templates by name."""
    seed_admin(client, "admin@example.com", "admin-password")
    client.post(
        "/admin/auth/login",
        json={"email": "admin@example.com", "password": "admin-password"},
    )
    created = {}
    for template in TEMPLATES:
        response = client.post("/admin/templates", json=template)
        assert response.status_code == 201, response.text
        created[template["name"]] = response.json()["data"]
    client.post("/admin/auth/logout")
    return created


def test_list_sorted_by_popularity(client, catalog):
    response = client.get("/templates")

    body = response.json()
    assert [t["name"] for t in body["data"]] == ["Gold Leaf", "Rose Garden", "Balloons"]
    assert body["meta"] == {"page": 1, "limit": 20, "total": 3, "totalPages": 1}


def test_list_filters(client, catalog):
    response = client.get("/templates?category=wedding&is_premium=false")

    assert [t["name"] for t in response.json()["data"]] == ["Rose Garden"]


def test_filter_all_means_no_filter(client, catalog):
    response = client.get("/templates?category=all&style=all")

    assert response.json()["meta"]["total"] == 3


def test_unknown_category_filter(client, catalog):
    response = client.get("/templates?category=funeral")

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid category: funeral"


def test_search(client, catalog):
    response = client.get("/templates/search?q=ROSES")

    assert [t["name"] for t in response.json()["data"]] == ["Rose Garden"]


@pytest.mark.parametrize("query", ["", "?q=", "?q=%20%20"])
def test_search_needs_a_query(client, query):
    response = client.get(f"/templates/search{query}")

    assert response.status_code == 400
    assert response.json()["error"] == "Search query is required"


def test_popular_and_premium(client, catalog):
    popular = client.get("/templates/popular?limit=2").json()["data"]
    premium = client.get("/templates/premium").json()["data"]

    assert [t["name"] for t in popular] == ["Gold Leaf", "Rose Garden"]
    assert [t["name"] for t in premium] == ["Gold Leaf"]


def test_categories_with_counts(client, catalog):
    categories = {
        c["category"]: c for c in client.get("/templates/categories").json()["data"]
    }

    assert categories["wedding"]["count"] == 2
    assert categories["wedding"]["popular_template"]["name"] == "Gold Leaf"
    assert categories["party"]["count"] == 0
    assert categories["party"]["popular_template"] is None


def test_styles_with_counts(client, catalog):
    styles = {
        s["style"]: s["count"] for s in client.get("/templates/styles").json()["data"]
    }

    assert styles["floral"] == 1
    assert styles["rustic"] == 0


def test_by_category_and_related(client, catalog):
    rose = catalog["Rose Garden"]

    by_category = client.get("/templates/category/birthday").json()["data"]
    related = client.get(f"/templates/{rose['id']}/related").json()["data"]

    assert [t["name"] for t in by_category] == ["Balloons"]
    assert [t["name"] for t in related] == ["Gold Leaf"]


def test_unknown_template(client):
    response = client.get("/templates/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.json()["success"] is False

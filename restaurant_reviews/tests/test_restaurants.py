from __future__ import annotations

from unittest.mock import MagicMock, patch

from botocore.exceptions import NoRegionError
from fastapi.testclient import TestClient

from restaurant_reviews.app import create_app
from restaurant_reviews.catalog.service import filter_restaurants
from restaurant_reviews.config import AppConfig
from restaurant_reviews.errors import StoreUnavailable
from restaurant_reviews.store.config import StoreConfig
from restaurant_reviews.store.memory import MemoryStore

store = MemoryStore()
client = TestClient(create_app(store=store))

SAMPLE = [
    {"restaurantId": "r1", "name": "Saffron Table", "location": "Downtown", "category": "Indian", "priceRange": "$$", "imageUrl": "a"},
    {"restaurantId": "r2", "name": "Nonna's Kitchen", "location": "Little Italy", "category": "Italian", "priceRange": "$$$", "imageUrl": "b"},
    {"restaurantId": "r3", "name": "Sakura Ramen", "location": "Downtown", "category": "Japanese", "priceRange": "$$", "imageUrl": "c"},
]


def _seed():
    store.clear()
    for r in SAMPLE:
        store.put("restaurants", r)


def test_empty_catalog_is_not_an_error():
    store.clear()
    resp = client.get("/restaurants")
    assert resp.status_code == 200
    assert resp.json() == {"items": []}


def test_lists_full_catalog_unchanged():
    _seed()
    resp = client.get("/restaurants")
    assert resp.status_code == 200
    items = resp.json()["items"]
    assert sorted(items, key=lambda r: r["restaurantId"]) == SAMPLE


def test_filter_by_category_is_case_insensitive():
    _seed()
    items = client.get("/restaurants", params={"category": "italian"}).json()["items"]
    assert [r["restaurantId"] for r in items] == ["r2"]


def test_filter_by_location_substring():
    _seed()
    items = client.get("/restaurants", params={"location": "down"}).json()["items"]
    assert {r["restaurantId"] for r in items} == {"r1", "r3"}


def test_filter_by_name_query_combined_with_location():
    _seed()
    items = client.get("/restaurants", params={"location": "Downtown", "q": "ramen"}).json()["items"]
    assert [r["restaurantId"] for r in items] == ["r3"]


def test_filter_without_matches():
    _seed()
    resp = client.get("/restaurants", params={"category": "Thai"})
    assert resp.status_code == 200
    assert resp.json() == {"items": []}


def test_filter_tolerates_missing_attributes():
    items = [{"restaurantId": "x1"}, {"restaurantId": "x2", "category": "Vegan"}]
    assert filter_restaurants(items, category="vegan") == [items[1]]


def test_no_filters_returns_input_as_is():
    assert filter_restaurants(SAMPLE) is SAMPLE


def test_store_failure_is_generic_500():
    broken = MagicMock()
    broken.scan.side_effect = StoreUnavailable("DynamoDB scan on Restaurants failed")
    c = TestClient(create_app(store=broken))
    resp = c.get("/restaurants")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}


@patch("restaurant_reviews.store.dynamo.boto3")
def test_store_setup_failure_is_generic_500(mock_boto3):
    mock_boto3.resource.side_effect = NoRegionError()
    app = create_app(AppConfig(store=StoreConfig(backend="dynamodb", region=None)))
    c = TestClient(app)
    resp = c.get("/restaurants")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}
    assert app.state.store is None

from __future__ import annotations

import pytest

from restaurant_reviews.errors import StoreUnavailable
from restaurant_reviews.store.memory import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


def test_find_one_returns_first_match(store):
    store.put("users", {"userId": "U1", "email": "a@x.com"})
    store.put("users", {"userId": "U2", "email": "a@x.com"})
    assert store.find_one("users", {"email": "a@x.com"})["userId"] == "U1"


def test_find_one_without_match(store):
    store.put("users", {"userId": "U1", "email": "a@x.com"})
    assert store.find_one("users", {"email": "b@x.com"}) is None


def test_put_replaces_same_primary_key(store):
    store.put("restaurants", {"restaurantId": "r1", "name": "Old"})
    store.put("restaurants", {"restaurantId": "r1", "name": "New"})
    assert store.scan("restaurants") == [{"restaurantId": "r1", "name": "New"}]


def test_reviews_keyed_by_restaurant_and_created_at(store):
    store.put("reviews", {"restaurantId": "r1", "createdAt": "2024-01-01T00:00:00.000Z", "reviewId": "a"})
    store.put("reviews", {"restaurantId": "r1", "createdAt": "2024-01-02T00:00:00.000Z", "reviewId": "b"})
    assert len(store.query_by_partition("reviews", "r1")) == 2


def test_query_orders_by_sort_key(store):
    for day in ["02", "01", "03"]:
        store.put("reviews", {"restaurantId": "r1", "createdAt": f"2024-01-{day}T00:00:00.000Z"})
    newest = [r["createdAt"][8:10] for r in store.query_by_partition("reviews", "r1")]
    oldest = [r["createdAt"][8:10] for r in store.query_by_partition("reviews", "r1", newest_first=False)]
    assert newest == ["03", "02", "01"]
    assert oldest == ["01", "02", "03"]


def test_query_empty_partition(store):
    assert store.query_by_partition("reviews", "nothing") == []


def test_records_are_copied(store):
    record = {"restaurantId": "r1", "name": "Saffron"}
    store.put("restaurants", record)
    record["name"] = "changed"
    fetched = store.scan("restaurants")[0]
    fetched["name"] = "also changed"
    assert store.scan("restaurants")[0]["name"] == "Saffron"


def test_put_without_key_attribute(store):
    with pytest.raises(StoreUnavailable):
        store.put("reviews", {"restaurantId": "r1"})


def test_unknown_collection(store):
    with pytest.raises(ValueError):
        store.scan("menus")


def test_clear(store):
    store.put("users", {"userId": "U1", "email": "a@x.com"})
    store.clear()
    assert store.scan("users") == []

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Protocol

Record = dict[str, Any]


@dataclass(frozen=True)
class KeySchema:
    partition_key: str
    sort_key: str | None = None

    def primary_key(self, record: Mapping[str, Any]) -> tuple:
        if self.sort_key is None:
            return (record[self.partition_key],)
        return (record[self.partition_key], record[self.sort_key])


KEY_SCHEMA: dict[str, KeySchema] = {
    "users": KeySchema("userId"),
    "restaurants": KeySchema("restaurantId"),
    "reviews": KeySchema("restaurantId", "createdAt"),
}


def key_schema(collection: str) -> KeySchema:
    try:
        return KEY_SCHEMA[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection!r}") from None


def matches(record: Mapping[str, Any], match: Mapping[str, Any] | None) -> bool:
    """True when every attribute in ``match`` equals the record's value."""
    if not match:
        return True
    return all(name in record and record[name] == value for name, value in match.items())


class StoreClient(Protocol):
    """Primitives the services need from the document store.

    ``match`` is an attribute -> value mapping; a record matches when all
    of its listed attributes are equal. ``query_by_partition`` returns an
    empty list for a partition without records.
    """

    def find_one(self, collection: str, match: Mapping[str, Any]) -> Record | None: ...

    def put(self, collection: str, record: Mapping[str, Any]) -> None: ...

    def query_by_partition(
        self,
        collection: str,
        partition_value: Any,
        newest_first: bool = True,
    ) -> list[Record]: ...

    def scan(self, collection: str, match: Mapping[str, Any] | None = None) -> list[Record]: ...


def first(records: Iterable[Record]) -> Record | None:
    for record in records:
        return record
    return None

from __future__ import annotations

import copy
from typing import Any, Mapping

from ..errors import StoreUnavailable
from .base import Record, first, key_schema, matches


class MemoryStore:
    """Process-local StoreClient used for development and tests.

    Behaves like the DynamoDB tables: ``put`` replaces a record with the
    same primary key, reads hand out copies, and partition queries are
    ordered by the sort key.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[tuple, Record]] = {}

    def _records(self, collection: str) -> dict[tuple, Record]:
        key_schema(collection)
        return self._collections.setdefault(collection, {})

    def find_one(self, collection: str, match: Mapping[str, Any]) -> Record | None:
        found = first(r for r in self._records(collection).values() if matches(r, match))
        return copy.deepcopy(found) if found is not None else None

    def put(self, collection: str, record: Mapping[str, Any]) -> None:
        schema = key_schema(collection)
        try:
            key = schema.primary_key(record)
        except KeyError as exc:
            raise StoreUnavailable(f"Record for {collection} is missing key attribute {exc}") from exc
        self._records(collection)[key] = copy.deepcopy(dict(record))

    def query_by_partition(
        self,
        collection: str,
        partition_value: Any,
        newest_first: bool = True,
    ) -> list[Record]:
        schema = key_schema(collection)
        items = [
            r for r in self._records(collection).values()
            if r.get(schema.partition_key) == partition_value
        ]
        if schema.sort_key is not None:
            items.sort(key=lambda r: r[schema.sort_key], reverse=newest_first)
        return copy.deepcopy(items)

    def scan(self, collection: str, match: Mapping[str, Any] | None = None) -> list[Record]:
        return [copy.deepcopy(r) for r in self._records(collection).values() if matches(r, match)]

    def clear(self) -> None:
        self._collections.clear()

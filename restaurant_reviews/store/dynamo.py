from __future__ import annotations

import logging
from contextlib import contextmanager
from decimal import Decimal
from functools import reduce
from typing import Any, Iterator, Mapping

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import StoreUnavailable
from .base import Record, first, key_schema
from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)


def to_dynamo(value: Any) -> Any:
    """Convert floats to Decimal, recursively, so boto3 can serialise them."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value


def from_dynamo(value: Any) -> Any:
    """Convert Decimal back to int (integral values) or float, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, Mapping):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    return value


def _filter_expression(match: Mapping[str, Any]):
    conditions = [Attr(name).eq(to_dynamo(value)) for name, value in match.items()]
    return reduce(lambda a, b: a & b, conditions)


@contextmanager
def _translate_errors(action: str, table: str) -> Iterator[None]:
    try:
        yield
    except (BotoCoreError, ClientError) as exc:
        raise StoreUnavailable(f"DynamoDB {action} on {table} failed") from exc


class DynamoStore:
    """StoreClient backed by DynamoDB tables via the boto3 resource API."""

    def __init__(self, config: StoreConfig = DEFAULT_STORE_CONFIG, resource: Any = None) -> None:
        self.config = config
        if resource is None:
            # A missing region surfaces here as NoRegionError
            with _translate_errors("resource setup", "dynamodb"):
                resource = boto3.resource(
                    "dynamodb",
                    region_name=config.region,
                    aws_access_key_id=config.access_key_id,
                    aws_secret_access_key=config.secret_access_key,
                    endpoint_url=config.endpoint_url,
                )
        self._resource = resource
        self._tables: dict[str, Any] = {}

    def _table(self, collection: str):
        key_schema(collection)
        if collection not in self._tables:
            self._tables[collection] = self._resource.Table(self.config.table_for(collection))
        return self._tables[collection]

    def _paginate(self, collection: str, action: str, **kwargs: Any) -> Iterator[Record]:
        table = self._table(collection)
        call = getattr(table, action)
        while True:
            with _translate_errors(action, table.name):
                page = call(**kwargs)
            for item in page.get("Items", []):
                yield from_dynamo(item)
            last_key = page.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    def find_one(self, collection: str, match: Mapping[str, Any]) -> Record | None:
        # A filtered scan is applied page by page, so keep paging until a
        # match turns up or the table is exhausted.
        return first(self._paginate(collection, "scan", FilterExpression=_filter_expression(match)))

    def put(self, collection: str, record: Mapping[str, Any]) -> None:
        table = self._table(collection)
        with _translate_errors("put_item", table.name):
            table.put_item(Item=to_dynamo(record))

    def query_by_partition(
        self,
        collection: str,
        partition_value: Any,
        newest_first: bool = True,
    ) -> list[Record]:
        schema = key_schema(collection)
        return list(self._paginate(
            collection,
            "query",
            KeyConditionExpression=Key(schema.partition_key).eq(partition_value),
            ScanIndexForward=not newest_first,
        ))

    def scan(self, collection: str, match: Mapping[str, Any] | None = None) -> list[Record]:
        kwargs: dict[str, Any] = {}
        if match:
            kwargs["FilterExpression"] = _filter_expression(match)
        return list(self._paginate(collection, "scan", **kwargs))

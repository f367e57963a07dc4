from __future__ import annotations

from typing import Any

import pandas as pd

from ..store.base import StoreClient

RESTAURANTS = "restaurants"


def list_all(store: StoreClient) -> list[dict[str, Any]]:
    """Every restaurant in the store, in whatever order the store returns."""
    return store.scan(RESTAURANTS)


def _text_column(df: pd.DataFrame, name: str) -> pd.Series:
    if name not in df.columns:
        return pd.Series("", index=df.index)
    return df[name].fillna("").astype(str).str.lower()


def filter_restaurants(
    items: list[dict[str, Any]],
    category: str | None = None,
    location: str | None = None,
    q: str | None = None,
) -> list[dict[str, Any]]:
    """Narrow a catalog listing. With no filters the input is returned as is."""
    if not (category or location or q) or not items:
        return items

    df = pd.DataFrame(items)
    mask = pd.Series(True, index=df.index)

    if category:
        mask = mask & (_text_column(df, "category") == category.strip().lower())

    if location:
        mask = mask & _text_column(df, "location").str.contains(
            location.strip().lower(), regex=False
        )

    if q:
        mask = mask & _text_column(df, "name").str.contains(q.strip().lower(), regex=False)

    return [items[i] for i in df.index[mask.to_numpy()]]

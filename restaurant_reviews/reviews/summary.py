from __future__ import annotations

from typing import Any

import pandas as pd


def summarize(reviews: list[dict[str, Any]]) -> dict[str, Any]:
    """Review count and mean rating (1 decimal). Non-numeric ratings count as 0."""
    if not reviews:
        return {"count": 0, "averageRating": None}

    ratings = pd.to_numeric(
        pd.Series([r.get("rating") for r in reviews], dtype=object),
        errors="coerce",
    ).fillna(0)
    return {"count": len(reviews), "averageRating": round(float(ratings.mean()), 1)}

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ReviewCreateRequest(BaseModel):
    # Untyped: presence is checked by truthiness in the service and values
    # are stored as sent.
    restaurantId: Any = None
    userId: Any = None
    rating: Any = None
    comment: Any = None
    userName: Any = None


class ReviewSummary(BaseModel):
    restaurantId: str
    count: int
    averageRating: float | None = None

from __future__ import annotations

import logging
import uuid
from typing import Any

from ..errors import ValidationError
from ..store.base import StoreClient
from ..timestamps import utc_now_iso

logger = logging.getLogger(__name__)

REVIEWS = "reviews"

REQUIRED_MESSAGE = "restaurantId, userId and rating are required"
RATING_RANGE_MESSAGE = "rating must be an integer between 1 and 5"


def list_for_restaurant(store: StoreClient, restaurant_id: str | None) -> list[dict[str, Any]]:
    """Reviews for one restaurant, newest ``createdAt`` first."""
    if not restaurant_id:
        raise ValidationError("restaurantId is required")
    return store.query_by_partition(REVIEWS, restaurant_id, newest_first=True)


def _whole_number(rating: Any) -> Any:
    """JSON numbers like 4.0 are stored as 4, the way a JSON client reads them."""
    if isinstance(rating, float) and rating.is_integer():
        return int(rating)
    return rating


def _check_rating_range(rating: Any) -> int:
    if isinstance(rating, bool):
        raise ValidationError(RATING_RANGE_MESSAGE)
    if not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError(RATING_RANGE_MESSAGE)
    return rating


def create_review(
    store: StoreClient,
    restaurant_id: Any,
    user_id: Any,
    rating: Any,
    comment: Any = None,
    user_name: Any = None,
    strict_rating: bool = False,
) -> dict[str, Any]:
    """
    Append a review and return the record exactly as written.

    Required fields are checked for truthiness, so a rating of 0 counts as
    missing. Unless ``strict_rating`` is set the rating is otherwise stored
    as sent, whatever its type; only whole-number floats become ints.
    ``createdAt`` is always the server's clock and doubles as the
    partition sort key.
    """
    if not restaurant_id or not user_id or not rating:
        raise ValidationError(REQUIRED_MESSAGE)
    rating = _whole_number(rating)
    if strict_rating:
        rating = _check_rating_range(rating)

    item = {
        "restaurantId": restaurant_id,
        "createdAt": utc_now_iso(),
        "reviewId": str(uuid.uuid4()),
        "userId": user_id,
        "userName": user_name or "",
        "rating": rating,
        "comment": comment or "",
    }
    store.put(REVIEWS, item)
    logger.info("Created review %s for restaurant %s", item["reviewId"], restaurant_id)
    return item

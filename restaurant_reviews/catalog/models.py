from __future__ import annotations

from typing import List

RESTAURANT_COLUMNS: List[str] = [
    "restaurantId",
    "name",
    "location",
    "category",
    "priceRange",
    "imageUrl",
]

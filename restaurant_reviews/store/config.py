from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class StoreConfig:
    backend: str = os.getenv("STORE_BACKEND", "dynamodb")
    region: str | None = os.getenv("APP_REGION")
    access_key_id: str | None = os.getenv("APP_ACCESS_KEY_ID")
    secret_access_key: str | None = os.getenv("APP_SECRET_ACCESS_KEY")
    endpoint_url: str | None = os.getenv("DYNAMODB_ENDPOINT_URL")
    users_table: str = os.getenv("USERS_TABLE", "Users")
    restaurants_table: str = os.getenv("RESTAURANTS_TABLE", "Restaurants")
    reviews_table: str = os.getenv("REVIEWS_TABLE", "Reviews")
    seed_path: Path | None = Path(os.environ["STORE_SEED_CSV"]) if os.getenv("STORE_SEED_CSV") else None

    def table_for(self, collection: str) -> str:
        tables = {
            "users": self.users_table,
            "restaurants": self.restaurants_table,
            "reviews": self.reviews_table,
        }
        try:
            return tables[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection!r}") from None


DEFAULT_STORE_CONFIG = StoreConfig()

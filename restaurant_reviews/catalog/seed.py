from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..store.base import StoreClient
from .models import RESTAURANT_COLUMNS
from .service import RESTAURANTS


@dataclass(frozen=True)
class SeedConfig:
    """
    Where the catalog seed data lives.
    """

    csv_path: Path = Path(__file__).resolve().parent.parent / "data" / "restaurants.csv"


DEFAULT_SEED_CONFIG = SeedConfig()


def load_restaurants(config: SeedConfig = DEFAULT_SEED_CONFIG) -> pd.DataFrame:
    df = pd.read_csv(config.csv_path, dtype=str, keep_default_na=False)

    missing = [col for col in RESTAURANT_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Seed file {config.csv_path} is missing columns: {', '.join(missing)}")

    df = df[RESTAURANT_COLUMNS].copy()
    for col in RESTAURANT_COLUMNS:
        df[col] = df[col].str.strip()

    # Rows without an id cannot be keyed in the store
    return df[df["restaurantId"] != ""]


def run_seed(config: SeedConfig = DEFAULT_SEED_CONFIG, store: StoreClient | None = None) -> int:
    """
    Write every restaurant in the seed CSV to the store.

    Rows are put one by one; an id already present is overwritten.
    Returns the number of restaurants written.
    """
    if store is None:
        from ..store.factory import build_store

        store = build_store()

    df = load_restaurants(config)
    for record in df.to_dict(orient="records"):
        store.put(RESTAURANTS, record)
    return len(df)


if __name__ == "__main__":
    cfg = SeedConfig(csv_path=Path(sys.argv[1])) if len(sys.argv) > 1 else DEFAULT_SEED_CONFIG
    written = run_seed(cfg)
    print(f"Seeding complete. {written} restaurants written from: {cfg.csv_path}")

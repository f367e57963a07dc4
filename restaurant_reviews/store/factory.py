from __future__ import annotations

import logging

from .base import StoreClient
from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)


def build_store(config: StoreConfig = DEFAULT_STORE_CONFIG) -> StoreClient:
    """Create the StoreClient selected by ``config.backend``."""
    if config.backend == "memory":
        from ..catalog.seed import SeedConfig, run_seed
        from .memory import MemoryStore

        store = MemoryStore()
        if config.seed_path is not None:
            count = run_seed(SeedConfig(csv_path=config.seed_path), store)
            logger.info("Seeded in-memory catalog with %d restaurants", count)
        return store

    if config.backend == "dynamodb":
        from .dynamo import DynamoStore

        return DynamoStore(config)

    raise ValueError(f"Unknown store backend: {config.backend!r}")

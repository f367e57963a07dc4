from __future__ import annotations

import os
from dataclasses import dataclass, field

from .store.config import DEFAULT_STORE_CONFIG, StoreConfig


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "restaurant-reviews-secret-change-in-production")
    # Off: POST /reviews trusts the userId in the body.
    enforce_session_identity: bool = _env_flag("ENFORCE_SESSION_IDENTITY")
    # Off: rating only has to be truthy, so 0 is rejected and 7 is accepted.
    strict_rating: bool = _env_flag("STRICT_RATING")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    store: StoreConfig = field(default_factory=lambda: DEFAULT_STORE_CONFIG)


DEFAULT_APP_CONFIG = AppConfig()

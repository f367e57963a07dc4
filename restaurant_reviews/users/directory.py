from __future__ import annotations

import logging
import uuid
from typing import Any

from ..errors import ValidationError
from ..store.base import StoreClient
from ..timestamps import utc_now_iso

logger = logging.getLogger(__name__)

USERS = "users"


def find_by_email(store: StoreClient, email: str) -> dict[str, Any] | None:
    """Scan the users collection for the first record with this email.

    Unindexed: cost grows with the collection.
    """
    return store.find_one(USERS, {"email": email})


def login_or_create(
    store: StoreClient,
    email: Any,
    name: Any = None,
) -> tuple[dict[str, Any], bool]:
    """
    Resolve ``email`` to a user record, creating one on first sight.

    Returns ``(user, created)``. An existing user is returned as stored;
    ``name`` only applies to new users and is never written back to an
    existing record.

    Lookup and creation are separate store calls, so two concurrent first
    logins with the same email can both create a record.
    """
    if not email:
        raise ValidationError("Email is required")

    existing = find_by_email(store, email)
    if existing is not None:
        return existing, False

    user = {
        "userId": str(uuid.uuid4()),
        "email": email,
        "name": name or "",
        "createdAt": utc_now_iso(),
    }
    store.put(USERS, user)
    logger.info("Created user %s", user["userId"])
    return user, True

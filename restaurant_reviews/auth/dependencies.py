from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request


def require_user(request: Request) -> dict:
    """Raise 401 if nobody is signed in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def resolve_author(request: Request, claimed_user_id: Any, enforce: bool) -> Any:
    """
    Decide which userId a new review is written under.

    Without enforcement the caller's claim is trusted as is. With it, the
    session user is required and a different claimed userId is refused.
    """
    if not enforce:
        return claimed_user_id
    user = require_user(request)
    if claimed_user_id and claimed_user_id != user["userId"]:
        raise HTTPException(status_code=403, detail="userId does not match the signed-in user")
    return user["userId"]

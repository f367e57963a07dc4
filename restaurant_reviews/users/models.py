from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: Any = None
    name: Any = None


class UserOut(BaseModel):
    userId: str
    email: Any
    name: Any = ""

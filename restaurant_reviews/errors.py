from __future__ import annotations


class ServiceError(Exception):
    """Base class for errors raised by the review services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """A required field is missing or falsy. Always a client error."""


class StoreUnavailable(ServiceError):
    """The persistent store could not be reached or rejected the call."""

"""Exceptions raised by the user management service."""
from __future__ import annotations

from typing import Iterable, List, Optional


class ResourceNotFoundError(LookupError):
    """Raised when no user exists for the requested identifier."""

    def __init__(self, resource_id: Optional[int]) -> None:
        super().__init__(f"Resource not found with ID: {resource_id}")
        self.resource_id = resource_id


class ValidationFailure(ValueError):
    """Raised at the HTTP boundary when a user payload is incomplete or malformed."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid user payload")


__all__ = ["ResourceNotFoundError", "ValidationFailure"]

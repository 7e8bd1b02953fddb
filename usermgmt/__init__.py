"""Core package for the user management REST service."""

from __future__ import annotations

from typing import Any

from .database import Database, resolve_database_path
from .errors import ResourceNotFoundError, ValidationFailure
from .models import UserRecord, UserView, record_to_view, view_to_record


def create_app(*args: Any, **kwargs: Any):
    """Factory function that returns the HTTP application."""

    from .service import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = [
    "Database",
    "ResourceNotFoundError",
    "UserRecord",
    "UserView",
    "ValidationFailure",
    "create_app",
    "record_to_view",
    "resolve_database_path",
    "view_to_record",
]

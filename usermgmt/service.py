"""Application factory wiring the repository, hasher, service and routes."""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI

from .actuator import register_actuator_routes
from .api import register_user_routes
from .config import Settings, load_settings
from .database import Database
from .passwords import PasswordHasher
from .users import PasswordEncoder, UserRepository, UserService

logger = logging.getLogger("usermgmt.service")


def create_app(
    *,
    settings: Settings | None = None,
    database: Database | None = None,
    repository: UserRepository | None = None,
    password_encoder: PasswordEncoder | None = None,
    health_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application for the user management API.

    ``repository`` takes precedence over ``database``; when neither is given a
    SQLite database is opened at the configured path and initialised.
    """

    app_settings = settings or load_settings()

    if repository is None:
        db = database or Database(app_settings.database_path)
        db.initialize()
        logger.info("Using user database at %s", db.path)
        repository = db

    user_service = UserService(repository, password_encoder or PasswordHasher())

    app = FastAPI(
        title="User Management API",
        version="0.1.0",
        description="Create, read, update, delete and list user accounts.",
    )

    app.state.settings = app_settings
    app.state.user_service = user_service

    register_user_routes(app, user_service)
    register_actuator_routes(
        app,
        upstream_url=app_settings.health_upstream_url,
        timeout=app_settings.health_timeout,
        transport=health_transport,
    )

    return app


__all__ = ["create_app"]

"""HTTP routes exposing the user CRUD operations."""

from __future__ import annotations

import logging
from typing import Annotated, List

from fastapi import FastAPI, HTTPException, Path, Response, status

from .errors import ResourceNotFoundError, ValidationFailure
from .models import UserView
from .users import UserService
from .validation import validate_user_view

logger = logging.getLogger("usermgmt.api")

# SQLite stores ids as signed 64-bit integers.
UserId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


def _validated(user: UserView) -> UserView:
    try:
        return validate_user_view(user)
    except ValidationFailure as exc:
        logger.info("Rejected user payload: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.errors) from exc


def _not_found(exc: ResourceNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def register_user_routes(app: FastAPI, service: UserService) -> None:
    """Expose the ``/api/users`` endpoints on the provided FastAPI application."""

    @app.post(
        "/api/users",
        status_code=status.HTTP_201_CREATED,
        response_model=UserView,
    )
    async def create_user(user: UserView) -> UserView:
        return await service.create(_validated(user))

    @app.get("/api/users/{user_id}", response_model=UserView)
    async def get_user(user_id: UserId) -> UserView:
        try:
            return await service.get(user_id)
        except ResourceNotFoundError as exc:
            raise _not_found(exc) from exc

    @app.put("/api/users/{user_id}", response_model=UserView)
    async def update_user(user_id: UserId, user: UserView) -> UserView:
        payload = _validated(user).model_copy(update={"id": user_id})
        try:
            return await service.update(payload)
        except ResourceNotFoundError as exc:
            raise _not_found(exc) from exc

    @app.delete("/api/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_user(user_id: UserId) -> Response:
        try:
            await service.delete(user_id)
        except ResourceNotFoundError as exc:
            raise _not_found(exc) from exc
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/api/users", response_model=List[UserView])
    async def list_users() -> List[UserView]:
        return await service.list()


__all__ = ["register_user_routes"]

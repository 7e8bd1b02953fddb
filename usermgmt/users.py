"""User CRUD workflow mediating between the HTTP layer and the repository."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Protocol, Union

import anyio

from .errors import ResourceNotFoundError
from .models import UserRecord, UserView, record_to_view, view_to_record

logger = logging.getLogger("usermgmt.users")


class UserRepository(Protocol):
    """Persistence operations required by :class:`UserService`."""

    def find_by_id(self, user_id: Optional[int]) -> Optional[UserRecord]: ...

    def exists_by_id(self, user_id: Optional[int]) -> bool: ...

    def save(self, record: UserRecord) -> UserRecord: ...

    def delete_by_id(self, user_id: int) -> None: ...

    def find_all(self) -> List[UserRecord]: ...


class PasswordEncoder(Protocol):
    def hash(self, password: str) -> str: ...


UserInput = Union[UserView, UserRecord]


def _as_record(user: UserInput) -> UserRecord:
    if isinstance(user, UserView):
        return view_to_record(user)
    return replace(user)


class UserService:
    """Create, read, update, delete and list users.

    Repository and hasher calls are blocking, so they run in a worker thread.
    Lookups that find nothing raise :class:`ResourceNotFoundError` when the
    coroutine is awaited; repository failures propagate unchanged.
    """

    def __init__(self, repository: UserRepository, password_encoder: PasswordEncoder) -> None:
        self._repository = repository
        self._password_encoder = password_encoder

    async def create(self, user: UserInput) -> UserView:
        record = _as_record(user)
        record.id = None
        record.password = await anyio.to_thread.run_sync(self._password_encoder.hash, record.password)

        saved = await anyio.to_thread.run_sync(self._repository.save, record)
        logger.info("Created user %s", saved.id)
        return record_to_view(saved)

    async def get(self, user_id: Optional[int]) -> UserView:
        record = await anyio.to_thread.run_sync(self._repository.find_by_id, user_id)
        if record is None:
            logger.debug("User %s not found", user_id)
            raise ResourceNotFoundError(user_id)
        return record_to_view(record)

    async def update(self, user: UserInput) -> UserView:
        changes = _as_record(user)
        existing = await anyio.to_thread.run_sync(self._repository.find_by_id, changes.id)
        if existing is None:
            logger.debug("User %s not found for update", changes.id)
            raise ResourceNotFoundError(changes.id)

        # The password is stored as supplied; only create() hashes it.
        existing.first_name = changes.first_name
        existing.last_name = changes.last_name
        existing.email = changes.email
        existing.password = changes.password

        saved = await anyio.to_thread.run_sync(self._repository.save, existing)
        logger.info("Updated user %s", saved.id)
        return record_to_view(saved)

    async def delete(self, user_id: Optional[int]) -> None:
        exists = await anyio.to_thread.run_sync(self._repository.exists_by_id, user_id)
        if not exists:
            logger.debug("User %s not found for deletion", user_id)
            raise ResourceNotFoundError(user_id)

        await anyio.to_thread.run_sync(self._repository.delete_by_id, user_id)
        logger.info("Deleted user %s", user_id)

    async def list(self) -> List[UserView]:
        records = await anyio.to_thread.run_sync(self._repository.find_all)
        return [record_to_view(record) for record in records]


__all__ = ["PasswordEncoder", "UserRepository", "UserService"]

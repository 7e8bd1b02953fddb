"""Tests for the user CRUD workflow."""

from __future__ import annotations

from pathlib import Path
from unittest import mock

import anyio
import pytest

from usermgmt.database import Database
from usermgmt.errors import ResourceNotFoundError
from usermgmt.models import UserRecord, UserView
from usermgmt.passwords import PasswordHasher
from usermgmt.users import UserService


def _stored(**overrides: object) -> UserRecord:
    data = {
        "id": 1,
        "first_name": "Nikko",
        "last_name": "Dasig",
        "email": "nikkodasig@gmail.com",
        "password": "hashed-password",
    }
    data.update(overrides)
    return UserRecord(**data)


def _input(**overrides: object) -> UserView:
    data = {
        "first_name": "Nikko",
        "last_name": "Dasig",
        "email": "nikkodasig@gmail.com",
        "password": "password",
    }
    data.update(overrides)
    return UserView(**data)


@pytest.fixture()
def repository() -> mock.MagicMock:
    return mock.MagicMock()


@pytest.fixture()
def hasher() -> mock.MagicMock:
    encoder = mock.MagicMock()
    encoder.hash.return_value = "hashed-password"
    return encoder


@pytest.fixture()
def service(repository: mock.MagicMock, hasher: mock.MagicMock) -> UserService:
    return UserService(repository, hasher)


def test_create_hashes_once_and_saves_once(service, repository, hasher) -> None:
    repository.save.side_effect = lambda record: UserRecord(
        id=42,
        first_name=record.first_name,
        last_name=record.last_name,
        email=record.email,
        password=record.password,
    )

    created = anyio.run(service.create, _input(id=7))

    hasher.hash.assert_called_once_with("password")
    repository.save.assert_called_once()
    saved_record = repository.save.call_args.args[0]
    assert saved_record.id is None
    assert saved_record.password == "hashed-password"
    assert created.id == 42
    assert created.email == "nikkodasig@gmail.com"
    assert "password" not in created.model_dump(by_alias=True)


def test_create_accepts_record_input_without_mutating_it(service, repository, hasher) -> None:
    repository.save.side_effect = lambda record: UserRecord(**{**record.__dict__, "id": 3})
    source = _stored(id=None, password="password")

    created = anyio.run(service.create, source)

    hasher.hash.assert_called_once_with("password")
    assert created.id == 3
    assert source.password == "password"


def test_get_returns_view(service, repository) -> None:
    repository.find_by_id.return_value = _stored()

    user = anyio.run(service.get, 1)

    repository.find_by_id.assert_called_once_with(1)
    assert user.id == 1
    assert user.first_name == "Nikko"


def test_get_missing_raises_not_found(service, repository) -> None:
    repository.find_by_id.return_value = None

    with pytest.raises(ResourceNotFoundError) as excinfo:
        anyio.run(service.get, 123)

    assert str(excinfo.value) == "Resource not found with ID: 123"
    assert excinfo.value.resource_id == 123


def test_update_overwrites_all_mutable_fields(service, repository, hasher) -> None:
    existing = _stored()
    repository.find_by_id.return_value = existing
    repository.save.side_effect = lambda record: record

    updated = anyio.run(
        service.update,
        _input(id=1, first_name="Nik", last_name="D", email="ndasig@gmail.com", password="new-password"),
    )

    repository.find_by_id.assert_called_once_with(1)
    repository.save.assert_called_once_with(existing)
    assert existing == UserRecord(
        id=1,
        first_name="Nik",
        last_name="D",
        email="ndasig@gmail.com",
        password="new-password",
    )
    hasher.hash.assert_not_called()
    assert updated.email == "ndasig@gmail.com"
    assert updated.password == "new-password"


def test_update_missing_never_saves(service, repository) -> None:
    repository.find_by_id.return_value = None

    with pytest.raises(ResourceNotFoundError, match="Resource not found with ID: 123"):
        anyio.run(service.update, _input(id=123))

    repository.save.assert_not_called()
    repository.delete_by_id.assert_not_called()


def test_delete_existing(service, repository) -> None:
    repository.exists_by_id.return_value = True

    assert anyio.run(service.delete, 1) is None

    repository.exists_by_id.assert_called_once_with(1)
    repository.delete_by_id.assert_called_once_with(1)


def test_delete_missing_never_deletes(service, repository) -> None:
    repository.exists_by_id.return_value = False

    with pytest.raises(ResourceNotFoundError, match="Resource not found with ID: 123"):
        anyio.run(service.delete, 123)

    repository.delete_by_id.assert_not_called()
    repository.save.assert_not_called()


def test_list_preserves_repository_order(service, repository) -> None:
    repository.find_all.return_value = [
        _stored(id=2, first_name="Sheldon", last_name="Cooper", email="sheldon.cooper@gmail.com"),
        _stored(id=1),
    ]

    users = anyio.run(service.list)

    assert [user.id for user in users] == [2, 1]


def test_repository_failures_propagate(service, repository) -> None:
    repository.find_all.side_effect = RuntimeError("storage unavailable")

    with pytest.raises(RuntimeError, match="storage unavailable"):
        anyio.run(service.list)


def test_workflow_against_sqlite(tmp_path: Path) -> None:
    database = Database(tmp_path / "users.sqlite3")
    database.initialize()
    hasher = PasswordHasher()
    service = UserService(database, hasher)

    created = anyio.run(service.create, _input())
    stored = database.find_by_id(created.id)
    assert stored.password != "password"
    assert hasher.verify("password", stored.password)

    change = _input(id=created.id, email="ndasig@gmail.com")
    first = anyio.run(service.update, change)
    second = anyio.run(service.update, change)
    assert first == second
    assert database.find_by_id(created.id).email == "ndasig@gmail.com"

    anyio.run(service.create, _input(first_name="Sheldon", last_name="Cooper", email="sheldon.cooper@gmail.com"))
    assert len(anyio.run(service.list)) == database.count() == 2

    anyio.run(service.delete, created.id)
    with pytest.raises(ResourceNotFoundError):
        anyio.run(service.get, created.id)

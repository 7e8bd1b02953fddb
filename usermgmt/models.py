"""User representations and the conversions between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class UserRecord:
    """Represents a user row stored in the database, password included."""

    id: Optional[int]
    first_name: str
    last_name: str
    email: str
    password: str


class UserView(BaseModel):
    """JSON representation of a user exposed by the HTTP API.

    ``password`` is write-only: it is read from request bodies and kept on the
    instance, but never serialized.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, exclude=True)


def record_to_view(record: Optional[UserRecord]) -> Optional[UserView]:
    if record is None:
        return None

    return UserView(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        email=record.email,
        password=record.password,
    )


def view_to_record(view: Optional[UserView]) -> Optional[UserRecord]:
    if view is None:
        return None

    return UserRecord(
        id=view.id,
        first_name=view.first_name,
        last_name=view.last_name,
        email=view.email,
        password=view.password,
    )


__all__ = ["UserRecord", "UserView", "record_to_view", "view_to_record"]

"""Password hashing for stored user credentials."""
from __future__ import annotations

from typing import Sequence

from passlib.context import CryptContext

DEFAULT_SCHEMES = ("pbkdf2_sha256",)


class PasswordHasher:
    """One-way password transform backed by a passlib :class:`CryptContext`."""

    def __init__(self, schemes: Sequence[str] = DEFAULT_SCHEMES) -> None:
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Return ``True`` if ``password`` matches the stored ``hashed`` value."""

        if not hashed:
            return False
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            return False


__all__ = ["PasswordHasher"]

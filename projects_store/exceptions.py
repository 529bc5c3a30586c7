"""Closed error taxonomy for the store access layer and the repositories."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError


class RepositoryError(RuntimeError):
    """Base exception for every failure reported by a store or repository call."""


class WrongIdError(RepositoryError):
    """Raised when an identifier string does not decode to an ObjectId."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"invalid identifier: {value!r}")
        self.value = value


class NotFoundError(RepositoryError):
    """Raised when a lookup, update or delete filter matched no document."""


class ParseError(RepositoryError):
    """Raised when a stored document does not conform to the requested schema."""

    def __init__(self, cause: ValidationError) -> None:
        super().__init__("Failed to parse the result")
        self.cause = cause
        self.__cause__ = cause


class StoreError(RepositoryError):
    """Raised when the database call itself failed, including unknown failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause


class DuplicateKeyRepositoryError(StoreError):
    """Raised when attempting to insert a document that violates a unique index."""


__all__ = [
    "DuplicateKeyRepositoryError",
    "NotFoundError",
    "ParseError",
    "RepositoryError",
    "StoreError",
    "WrongIdError",
]

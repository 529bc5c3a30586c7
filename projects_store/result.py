"""Success/failure union returned by every fallible store and repository call.

INVARIANT: the access layer and the repositories never raise on a failed
operation; they return ``Err`` carrying one of the exceptions declared in
:mod:`projects_store.exceptions`. Callers that prefer exception flow can use
:meth:`Err.unwrap`, which raises the carried error.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=BaseException)


class Ok(BaseModel, Generic[T]):
    """Successful outcome holding ``value``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(value=fn(self.value))


class Err(BaseModel, Generic[E]):
    """Failed outcome holding the ``error`` that describes it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self.error

    def map(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    return Ok(value=value)


def err(error: E) -> Err[E]:
    return Err(error=error)


__all__ = ["Err", "Ok", "Result", "err", "ok"]

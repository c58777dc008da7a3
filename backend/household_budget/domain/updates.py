"""
Three-state field updates for partial PATCH operations.

    KEEP        leave the stored value unchanged
    CLEAR       set the stored value to null
    Set(value)  replace the stored value
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class Keep:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "KEEP"


class Clear:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CLEAR"


@dataclass(frozen=True)
class Set(Generic[T]):
    value: T


KEEP = Keep()
CLEAR = Clear()

FieldUpdate = Union[Keep, Clear, Set[T]]


def map_update(update: "FieldUpdate[T]", func: Callable[[T], U]) -> "FieldUpdate[U]":
    """Apply ``func`` to the value of a ``Set``; KEEP and CLEAR pass through."""
    if isinstance(update, Set):
        return Set(func(update.value))
    return update


def apply_update(current: T | None, update: "FieldUpdate[T]") -> T | None:
    """Resolve an update against the current value."""
    if isinstance(update, Set):
        return update.value
    if isinstance(update, Clear):
        return None
    return current

"""Optional values for "no update yet" vs "updated with a value".

``Some(None)`` is a real value, so ``None`` can stand for nothing without
colliding with user data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Some(Generic[T]):
    """A present value."""

    value: T


Maybe = Union[Some[T], None]


def is_some(m: Maybe[T]) -> bool:
    return m is not None


def from_some(m: Maybe[T]) -> T:
    """Unwrap a Some. Raises ValueError on nothing."""
    if m is None:
        raise ValueError("from_some() called on an empty Maybe")
    return m.value


def with_default(default: T, m: Maybe[T]) -> T:
    return default if m is None else m.value

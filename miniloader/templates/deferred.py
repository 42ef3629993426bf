"""Deferred field values.

Some loader fields can only be computed once the external stage has filled
its prototype tables. Such fields are stored as ``Pending`` producers and
realised in a second pass; fields known up front are ``Computed``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Computed(Generic[T]):
    """A value available at draft construction time."""

    value: T

    def realize(self) -> T:
        return self.value


@dataclass(frozen=True)
class Pending(Generic[T]):
    """A value produced on demand by a zero-argument callable."""

    producer: Callable[[], T]

    def realize(self) -> T:
        return self.producer()


Deferred = Union[Computed[T], Pending[T]]


def realize(value: "Deferred[T]") -> T:
    """Evaluate a deferred field."""
    if isinstance(value, (Computed, Pending)):
        return value.realize()
    raise TypeError(f"Expected Computed or Pending, got {type(value).__name__}")


def is_pending(value: object) -> bool:
    return isinstance(value, Pending)

"""States of data that is loaded asynchronously from an external service.

Each load operation returns exactly one of these, so callers can match on the type
instead of catching the service's exceptions themselves.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded(Generic[T]):
    value: T


@dataclass(frozen=True)
class LoadFailed:
    message: str


LoadState = Union[Loading, Loaded[T], LoadFailed]

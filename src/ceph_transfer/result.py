"""
Tagged result type returned at the public flow boundary.

`Ok` carries the value of a successful call, `Err` carries the failure kind
and a human-readable message. Both are falsy/truthy like the boolean and null
sentinels they replace.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import CephError, ErrorKind

__all__ = ["Ok", "Err", "Result"]

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def unwrap(self):
        raise ValueError(f"called unwrap() on Err({self.kind.value}): {self.message}")

    @classmethod
    def from_exception(cls, exc: CephError) -> Err:
        return cls(kind=exc.kind, message=str(exc))


Result = Union[Ok[T], Err]

"""Success/failure values returned by game operations.

Game-logic failures (unknown ids, wrong status, not enough money) are
returned as ``Err`` rather than raised; callers branch on the type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    not_found = "not_found"
    invalid_state = "invalid_state"
    insufficient_funds = "insufficient_funds"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    reason: str


Result = Union[Ok[T], Err]


def not_found(reason: str) -> Err:
    return Err(ErrorKind.not_found, reason)


def invalid_state(reason: str) -> Err:
    return Err(ErrorKind.invalid_state, reason)


def insufficient_funds(required: int, available: int) -> Err:
    return Err(
        ErrorKind.insufficient_funds,
        f"Insufficient funds. Required: {required}, Available: {available}",
    )

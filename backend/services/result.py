"""Explicit success/failure wrapper for calls to external collaborators."""

from dataclasses import dataclass
from typing import Awaitable, Generic, TypeVar, Union
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    reason: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


async def capture(awaitable: Awaitable[T], label: str) -> "Result[T]":
    """Await ``awaitable`` and wrap its outcome; exceptions become Err."""
    try:
        return Ok(await awaitable)
    except Exception as e:
        logger.warning("%s failed: %s", label, e)
        return Err(f"{label}: {e}")


def unwrap_or(result: "Result[T]", default: T) -> T:
    """Value of an Ok, or ``default`` for an Err."""
    if isinstance(result, Ok):
        return result.value
    return default

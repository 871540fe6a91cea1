"""Exception bridge for code that does not use the Result monad."""
from __future__ import annotations

from typing import TypeVar

from .types import AppError, Err, Ok, Result

T = TypeVar("T")


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when you need to raise an AppError in code that
    doesn't use the Result monad (e.g., framework hooks).
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self):
        return self.error.code


class PolicyConflictError(AppErrorException):
    """Raised at construction when two policies can never be satisfied together."""


def raise_result(result: Result[T, AppError]) -> T:
    """Unwrap Ok, or raise the carried error as AppErrorException."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            raise AppErrorException(error)
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")

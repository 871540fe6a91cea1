"""Validator Base

Every validator is an immutable policy bundle with three entry points:

- validate_str(text): check only, Result[None, AppError]
- parse_str(text): validate then materialize the typed value
- parse_string(text): same contract as parse_str for an owned buffer

Subclasses implement `_parse`, and `_check` where validity is cheaper to
decide than the value is to build. Rejections are returned, never raised.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from textgate.config import get_settings
from textgate.errors import AppError, Err, Result, invalid_type, policy_conflict, PolicyConflictError, preview
from textgate.logging import validator_logger
from textgate.policy import BiAllow, TriAllow

T = TypeVar("T")


class Validator(ABC, Generic[T]):
    """Base class for text validators.

    Validators hold policy only, so a single instance can be shared across
    threads and call sites.
    """
    name: ClassVar[str] = "validator"

    @abstractmethod
    def _parse(self, text: str) -> Result[T, AppError]:
        """Validate `text` and build the value. `text` is always a str."""

    @property
    def constraint_name(self) -> str:
        """Human-readable constraint name for error messages and schemas."""
        return self.name

    def parse_str(self, text: str) -> Result[T, AppError]:
        if not isinstance(text, str):
            return invalid_type("string", text, validator=self.name)
        return self._reported(text, self._parse(text))

    def parse_string(self, text: str) -> Result[T, AppError]:
        """Parse a buffer the caller hands over. str is immutable, nothing is copied."""
        return self.parse_str(text)

    def validate_str(self, text: str) -> Result[None, AppError]:
        """Check only. Agrees with `parse_str` on every input."""
        if not isinstance(text, str):
            return invalid_type("string", text, validator=self.name)
        return self._reported(text, self._check(text))

    def _check(self, text: str) -> Result[None, AppError]:
        return self._parse(text).map(lambda _: None)

    def _reported(self, text: str, result: Result[Any, AppError]) -> Result[Any, AppError]:
        if isinstance(result, Err) and get_settings().LOG_REJECTIONS:
            validator_logger().debug(
                "input_rejected",
                validator=self.constraint_name,
                code=result.error.code.name,
                reason=result.error.message,
                value=preview(text),
            )
        return result

    def is_valid(self, text: Any) -> bool: return self.validate_str(text).is_ok()

    def __call__(self, text: str) -> Result[T, AppError]: return self.parse_str(text)


def check_conflict(validator: str, must_gate: tuple[str, TriAllow], disallow_gate: tuple[str, TriAllow],
                   conflict: TriAllow) -> bool:
    """Detect a MUST/DISALLOW pair that rejects every input.

    Raises PolicyConflictError when `conflict` disallows the pair; otherwise
    logs a warning and returns True so the validator can reject at runtime.
    """
    (must_name, must_value), (disallow_name, disallow_value) = must_gate, disallow_gate
    if not (must_value.must() and disallow_value.disallows()):
        return False
    report_conflict(validator, f"{must_name}(must)", f"{disallow_name}(disallow)", conflict)
    return True


def report_conflict(validator: str, first: str, second: str, conflict: TriAllow | BiAllow) -> None:
    """Raise for a known conflict, or log it when `conflict` allows deferral."""
    if conflict.disallows():
        raise PolicyConflictError(policy_conflict(validator, first, second))
    validator_logger().warning("policy_conflict_deferred", validator=validator, policies=[first, second])

"""Monadic Error Types for Validation Outcomes

Every validator answers with a Result: Ok carrying the validated value, or
Err carrying an AppError whose ErrorCode names the exact rejection kind.
Caller-supplied text never raises; only incoherent configuration does.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Generic, Iterator, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound="AppError")
F = TypeVar("F", bound="AppError")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E2xxx: Validation errors (one code per rejection kind)
    E6xxx: Resource errors (declaration files)
    E9xxx: Internal errors and configuration bugs
    """
    # Validation (E2xxx)
    E2000_VALIDATION_GENERIC = 2000
    E2002_INVALID_FORMAT = 2002
    E2003_OUT_OF_RANGE = 2003
    E2004_INVALID_TYPE = 2004
    E2005_CONSTRAINT_VIOLATION = 2005
    E2006_PARSE_ERROR = 2006
    E2007_UNPRECISE = 2007
    E2008_TOO_LARGE = 2008
    E2009_TOO_SMALL = 2009
    E2010_INCORRECT_FORMAT = 2010
    E2011_UNSUPPORTED_PROTOCOL = 2011

    # Encoding / separator policy
    E2030_PADDING_MUST = 2030
    E2031_PADDING_DISALLOW = 2031
    E2032_SEPARATOR_MUST = 2032
    E2033_SEPARATOR_DISALLOW = 2033

    # Numeric sign and NaN policy
    E2040_NEGATIVE_NOT_FOUND = 2040
    E2041_NEGATIVE_NOT_ALLOW = 2041
    E2042_ZERO_NOT_FOUND = 2042
    E2043_ZERO_NOT_ALLOW = 2043
    E2044_NAN_MUST = 2044
    E2045_NAN_DISALLOW = 2045

    # Address gates
    E2050_LOCAL_MUST = 2050
    E2051_LOCAL_DISALLOW = 2051
    E2052_PORT_MUST = 2052
    E2053_PORT_DISALLOW = 2053
    E2054_IPV4_MUST = 2054
    E2055_IPV4_DISALLOW = 2055
    E2056_IP_MUST = 2056
    E2057_IP_DISALLOW = 2057
    E2058_AT_LEAST_TWO_LABELS_MUST = 2058
    E2059_AT_LEAST_TWO_LABELS_DISALLOW = 2059
    E2060_COMMENT_DISALLOW = 2060

    # Resource (E6xxx)
    E6001_FILE_NOT_FOUND = 6001
    E6002_FILE_READ_ERROR = 6002

    # Internal (E9xxx)
    E9004_POLICY_CONFLICT = 9004

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 2000 <= code < 3000:
            return "validation"
        if 6000 <= code < 7000:
            return "resource"
        return "internal"

    @property
    def is_policy_gate(self) -> bool:
        """True for rejections caused by a policy knob rather than by grammar."""
        return 2030 <= self.value < 2100


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing and debugging."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""

    def with_origin(self, origin: str) -> ErrorContext:
        return ErrorContext(correlation_id=self.correlation_id, timestamp=self.timestamp, origin=origin)


@dataclass(frozen=True, slots=True)
class AppError:
    """Rejection or failure with its code, display text and context.

    - code: the rejection kind from the taxonomy
    - message: stable, display-able text (e.g. "padding not found")
    - metadata: validator name, offending value preview, bounds...
    - cause: the lower-level exception, when one exists
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    @property
    def error_id(self) -> str:
        """Unique identifier for this error instance."""
        return f"{self.code.name}:{self.context.correlation_id}"

    def with_origin(self, origin: str) -> AppError:
        return AppError(code=self.code, message=self.message, context=self.context.with_origin(origin),
            metadata=self.metadata, cause=self.cause)

    def with_metadata(self, **kwargs) -> AppError:
        """Create new error with additional metadata."""
        return AppError(code=self.code, message=self.message, context=self.context,
            metadata={**self.metadata, **kwargs}, cause=self.cause)

    def to_dict(self) -> dict:
        """Serialize error for logs and API payloads."""
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "message": self.message,
                "category": self.code.category,
                "correlation_id": self.context.correlation_id,
                "timestamp": self.context.timestamp.isoformat(),
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        return self.message


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result.

    Wraps a validated value. Immutable and hashable when T is hashable.
    """
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")

    def map(self, f: Callable[[T], U]) -> Result[U, AppError]:
        """Transform the success value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[AppError], F]) -> Result[T, F]:
        return self  # type: ignore

    def and_then(self, f: Callable[[T], Result[U, AppError]]) -> Result[U, AppError]:
        """Chain operations that may fail."""
        return f(self.value)

    def match(self, ok: Callable[[T], U], err: Callable[[AppError], U]) -> U:
        """Pattern match on Result. Forces exhaustive handling."""
        return ok(self.value)

    def __iter__(self) -> Iterator[T]:
        yield self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result.

    Wraps an AppError. Immutable and carries full error context.
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return self  # type: ignore

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Transform the error."""
        return Err(f(self.error))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return self  # type: ignore

    def match(self, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Pattern match on Result. Forces exhaustive handling."""
        return err(self.error)

    def __iter__(self) -> Iterator:
        return iter([])


# Type alias for Result monad
Result = Union[Ok[T], Err[E]]


def sequence_results(results: list[Result[T, AppError]]) -> Result[list[T], AppError]:
    """Sequence Results, failing fast on first error."""
    values: list[T] = []

    for r in results:
        match r:
            case Ok(v):
                values.append(v)
            case Err(e):
                return Err(e)

    return Ok(values)

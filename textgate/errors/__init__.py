"""Monadic Error Handling System

Validators never raise on caller data: they answer with Result[T, AppError].

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Rejection with code, display text and context
- ErrorCode: Hierarchical error code taxonomy, one code per rejection kind
- Builder functions: Ergonomic error construction

Usage:
    from textgate.errors import Ok, Err, ErrorCode
    from textgate.validation import Base64Validator

    match Base64Validator().parse_str(text):
        case Ok(value):
            print(value.text)
        case Err(error) if error.code is ErrorCode.E2030_PADDING_MUST:
            print("add the padding back")
        case Err(error):
            log.warning(error.message, code=error.code.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Combinators
    sequence_results,
)

from .builders import (
    GATE_MESSAGES,
    preview,
    # Validation (E2xxx)
    validation_error,
    invalid,
    incorrect_format,
    unsupported_protocol,
    gate,
    invalid_type,
    parse_error,
    unprecise,
    too_large,
    too_small,
    constraint_violation,
    # Resource (E6xxx)
    file_not_found,
    file_read_error,
    # Internal (E9xxx)
    policy_conflict,
)

from .exceptions import (
    AppErrorException,
    PolicyConflictError,
    raise_result,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "sequence_results",
    "GATE_MESSAGES",
    "preview",
    "validation_error",
    "invalid",
    "incorrect_format",
    "unsupported_protocol",
    "gate",
    "invalid_type",
    "parse_error",
    "unprecise",
    "too_large",
    "too_small",
    "constraint_violation",
    "file_not_found",
    "file_read_error",
    "policy_conflict",
    "AppErrorException",
    "PolicyConflictError",
    "raise_result",
]

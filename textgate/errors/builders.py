"""Rejection Builders

Ergonomic constructors for typed validation errors. Each builder creates an
Err[AppError] with the code of the rejection kind and its display text.
"""
from __future__ import annotations

from typing import Any

from .types import AppError, Err, ErrorCode, ErrorContext

# Display text for every policy-gate rejection. Grammar rejections carry a
# per-validator text instead ("invalid Base64", "invalid domain", ...).
GATE_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.E2030_PADDING_MUST: "padding not found",
    ErrorCode.E2031_PADDING_DISALLOW: "padding not allowed",
    ErrorCode.E2032_SEPARATOR_MUST: "separators not found",
    ErrorCode.E2033_SEPARATOR_DISALLOW: "separators not allowed",
    ErrorCode.E2040_NEGATIVE_NOT_FOUND: "must be negative",
    ErrorCode.E2041_NEGATIVE_NOT_ALLOW: "must not be negative",
    ErrorCode.E2042_ZERO_NOT_FOUND: "must be zero",
    ErrorCode.E2043_ZERO_NOT_ALLOW: "must not be zero",
    ErrorCode.E2044_NAN_MUST: "must be NaN",
    ErrorCode.E2045_NAN_DISALLOW: "must not be NaN",
    ErrorCode.E2050_LOCAL_MUST: "must be local",
    ErrorCode.E2051_LOCAL_DISALLOW: "must not be local",
    ErrorCode.E2052_PORT_MUST: "port not found",
    ErrorCode.E2053_PORT_DISALLOW: "port not allowed",
    ErrorCode.E2054_IPV4_MUST: "must use an IPv4",
    ErrorCode.E2055_IPV4_DISALLOW: "must not use an IPv4",
    ErrorCode.E2056_IP_MUST: "must use an IP",
    ErrorCode.E2057_IP_DISALLOW: "must not use an IP",
    ErrorCode.E2058_AT_LEAST_TWO_LABELS_MUST: "must have at least two labels",
    ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW: "must have only one label",
    ErrorCode.E2060_COMMENT_DISALLOW: "must not contain comments",
}

PREVIEW_LENGTH = 50


def preview(value: Any, limit: int = PREVIEW_LENGTH) -> str:
    """Truncated rendering of an offending value for metadata and logs."""
    text = value if isinstance(value, str) else repr(value)
    return text[:limit] + ("..." if len(text) > limit else "")


def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    validator: str | None = None,
    value: Any = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    meta = {"validator": validator, "value": preview(value) if value is not None else None, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def invalid(what: str, *, validator: str, value: Any = None, origin: str = "") -> Err[AppError]:
    """Generic grammar violation, rendered as "invalid <what>"."""
    return validation_error(f"invalid {what}", code=ErrorCode.E2002_INVALID_FORMAT,
        validator=validator, value=value, origin=origin)


def incorrect_format(what: str, *, validator: str, value: Any = None, origin: str = "") -> Err[AppError]:
    """Structured-format grammar failure (URIs and friends)."""
    return validation_error(f"incorrect {what} format", code=ErrorCode.E2010_INCORRECT_FORMAT,
        validator=validator, value=value, origin=origin)


def unsupported_protocol(protocols: list[str], *, validator: str, value: Any = None, origin: str = "") -> Err[AppError]:
    """Scheme outside the accepted set, e.g. "need to use `http` or `https` as a protocol"."""
    quoted = [f"`{p}`" for p in protocols]
    names = quoted[0] if len(quoted) == 1 else ", ".join(quoted[:-1]) + " or " + quoted[-1]
    return validation_error(f"need to use {names} as a protocol", code=ErrorCode.E2011_UNSUPPORTED_PROTOCOL,
        validator=validator, value=value, origin=origin, protocols=protocols)


def gate(code: ErrorCode, *, validator: str, value: Any = None, origin: str = "") -> Err[AppError]:
    """Policy gate rejection with its canonical display text."""
    return validation_error(GATE_MESSAGES[code], code=code, validator=validator, value=value, origin=origin)


def invalid_type(expected: str, got: Any, *, validator: str, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Expected {expected}, got {type(got).__name__}",
        code=ErrorCode.E2004_INVALID_TYPE,
        validator=validator,
        origin=origin,
        expected=expected,
        actual=type(got).__name__,
    )


def parse_error(
    message: str, *, validator: str, value: Any = None, cause: Exception | None = None, origin: str = ""
) -> Err[AppError]:
    """Lower-level parse failure; the nested parser message is kept verbatim."""
    return validation_error(message, code=ErrorCode.E2006_PARSE_ERROR, validator=validator,
        value=value, cause=cause, origin=origin)


def unprecise(*, validator: str, value: Any = None, origin: str = "") -> Err[AppError]:
    return validation_error("unprecise number", code=ErrorCode.E2007_UNPRECISE,
        validator=validator, value=value, origin=origin)


def too_large(what: str, *, validator: str, value: Any, bound: Any, origin: str = "") -> Err[AppError]:
    return validation_error(f"{what} is too large", code=ErrorCode.E2008_TOO_LARGE,
        validator=validator, value=value, origin=origin, max=bound)


def too_small(what: str, *, validator: str, value: Any, bound: Any, origin: str = "") -> Err[AppError]:
    return validation_error(f"{what} is too small", code=ErrorCode.E2009_TOO_SMALL,
        validator=validator, value=value, origin=origin, min=bound)


def constraint_violation(message: str, *, origin: str = "", **metadata) -> Err[AppError]:
    """Malformed declarative options (unknown kind, bad policy literal...)."""
    return validation_error(message, code=ErrorCode.E2005_CONSTRAINT_VIOLATION, origin=origin, **metadata)


# =============================================================================
# Resource Errors (E6xxx)
# =============================================================================

def file_not_found(path: str, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6001_FILE_NOT_FOUND,
        message=f"File not found: {path}",
        context=ErrorContext(origin=origin),
        metadata={"path": path},
    ))


def file_read_error(path: str, cause: Exception, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6002_FILE_READ_ERROR,
        message=f"Could not read {path}: {cause}",
        context=ErrorContext(origin=origin),
        metadata={"path": path},
        cause=cause,
    ))


# =============================================================================
# Internal Errors (E9xxx)
# =============================================================================

def policy_conflict(validator: str, first: str, second: str, origin: str = "") -> AppError:
    """Mutually unsatisfiable policy pair. Returned bare: it is raised, not returned."""
    return AppError(
        code=ErrorCode.E9004_POLICY_CONFLICT,
        message=f"`{first}` and `{second}` cannot be used together",
        context=ErrorContext(origin=origin),
        metadata={"validator": validator, "policies": [first, second]},
    )

"""Numeric Precision Validator

Integers written in text, accepted only when the literal means exactly the
integer it parses to. "065", "+65" and "65.00" are 65; "65.5", "1e3" and
"inf" are rejected as unprecise.

Integer pipeline: float parse (syntax) -> exact decimal value -> 128-bit width ->
literal comparison -> sign/zero gates -> range.

NumberValidator takes any float literal, NaN and infinities included, under a
NaN policy and a range.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from textgate.errors import (
    AppError, Err, ErrorCode, Ok, Result, gate, invalid_type, parse_error, too_large, too_small,
    unprecise, validation_error,
)
from textgate.policy import RangeOption, TriAllow
from .base import Validator, report_conflict

I128_MIN = -(2 ** 127)
I128_MAX = 2 ** 127 - 1
U128_MAX = 2 ** 128 - 1


@dataclass(frozen=True, slots=True)
class Integer:
    value: int

    @property
    def is_zero(self) -> bool: return self.value == 0

    @property
    def is_positive(self) -> bool: return self.value > 0

    @property
    def is_negative(self) -> bool: return self.value < 0

    def __int__(self) -> int: return self.value

    def __str__(self) -> str: return str(self.value)


def is_precise_literal(text: str, value: int) -> bool:
    """Whether `text` spells `value` up to sign, leading zeros and a zero fraction."""
    body = text[1:] if text[:1] in ("+", "-") else text
    if text.startswith("-") and value > 0:
        return False
    whole, dot, fraction = body.partition(".")
    if dot and fraction.strip("0"):
        return False
    if not whole and not dot:
        return False
    return whole.lstrip("0") == str(abs(value)).lstrip("0")


def range_error(option: RangeOption, value, what: str, *, validator: str, source) -> Err[AppError] | None:
    """The rejection for a value outside `option`, or None when it fits."""
    if value in option:
        return None
    if not option.below_max(value):
        return too_large(what, validator=validator, value=source, bound=option.max)
    if not option.above_min(value):
        return too_small(what, validator=validator, value=source, bound=option.min)
    return validation_error(f"{what} is out of range", code=ErrorCode.E2003_OUT_OF_RANGE,
        validator=validator, value=source, range=str(option))


@dataclass(frozen=True, slots=True)
class IntegerValidator(Validator[Integer]):
    """Signed 128-bit integer literal with sign, zero and range policies."""
    negative: TriAllow = TriAllow.ALLOW
    zero: TriAllow = TriAllow.ALLOW
    range: RangeOption = field(default_factory=RangeOption)

    name = "integer"
    minimum = I128_MIN
    maximum = I128_MAX

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[negative={self.negative.value},zero={self.zero.value},range={self.range}]"

    # ------------------------------------------------------------------
    # Gates
    # ------------------------------------------------------------------

    def _gates(self, value: int, source) -> Result[Integer, AppError] | None:
        if value > 0:
            if self.negative.must():
                return gate(ErrorCode.E2040_NEGATIVE_NOT_FOUND, validator=self.name, value=source)
            if self.zero.must():
                return gate(ErrorCode.E2042_ZERO_NOT_FOUND, validator=self.name, value=source)
        elif value < 0:
            if self.negative.disallows():
                return gate(ErrorCode.E2041_NEGATIVE_NOT_ALLOW, validator=self.name, value=source)
            if self.zero.must():
                return gate(ErrorCode.E2042_ZERO_NOT_FOUND, validator=self.name, value=source)
        elif self.zero.disallows():
            return gate(ErrorCode.E2043_ZERO_NOT_ALLOW, validator=self.name, value=source)
        return None

    def _fits(self, value: int) -> bool: return self.minimum <= value <= self.maximum

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def _parse(self, text: str) -> Result[Integer, AppError]:
        try:
            number = float(text)
        except ValueError as e:
            return parse_error(str(e), validator=self.name, value=text, cause=e)
        if not math.isfinite(number):
            return unprecise(validator=self.name, value=text)

        try:
            exact = Decimal(text)
        except InvalidOperation:
            return unprecise(validator=self.name, value=text)
        if exact != exact.to_integral_value():
            return unprecise(validator=self.name, value=text)

        value = int(exact)
        if not self._fits(value) or not is_precise_literal(text, value):
            return unprecise(validator=self.name, value=text)
        return self._checked(value, text)

    def _checked(self, value: int, source) -> Result[Integer, AppError]:
        if (rejected := self._gates(value, source)) is not None:
            return rejected
        if (rejected := range_error(self.range, value, "integer", validator=self.name, source=source)) is not None:
            return rejected
        return Ok(Integer(value))

    def parse_str(self, text: str | int | float) -> Result[Integer, AppError]:
        """Parse a literal; native ints and floats go through `validate_int`."""
        if isinstance(text, (int, float)) and not isinstance(text, bool):
            return self.validate_int(text)
        return Validator.parse_str(self, text)

    def validate_str(self, text: str | int | float) -> Result[None, AppError]:
        if isinstance(text, (int, float)) and not isinstance(text, bool):
            return self.validate_int(text).map(lambda _: None)
        return Validator.validate_str(self, text)

    def validate_int(self, value: int | float) -> Result[Integer, AppError]:
        """Apply width, gates and range to a native number.

        A float must be finite and integral; it has no literal to compare.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return invalid_type("integer", value, validator=self.name)
        if isinstance(value, float):
            if not math.isfinite(value) or math.floor(value) != value:
                return unprecise(validator=self.name, value=value)
            value = int(value)
        if not self._fits(value):
            return unprecise(validator=self.name, value=value)
        return self._checked(value, value)


@dataclass(frozen=True)
class UnsignedIntegerValidator(IntegerValidator):
    """Unsigned 128-bit integer literal; every negative value is rejected."""
    negative: TriAllow = field(default=TriAllow.DISALLOW, init=False)

    name = "unsigned_integer"
    minimum = 0
    maximum = U128_MAX

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[zero={self.zero.value},range={self.range}]"

    def _fits(self, value: int) -> bool:
        return value <= self.maximum if value >= 0 else True


# ============================================================================
# Floating-point numbers
# ============================================================================

@dataclass(frozen=True, slots=True)
class Number:
    value: float

    @property
    def is_nan(self) -> bool: return math.isnan(self.value)

    def __float__(self) -> float: return self.value

    def __str__(self) -> str: return repr(self.value)


@dataclass(frozen=True, slots=True)
class NumberValidator(Validator[Number]):
    """Float literal with a NaN policy and a range.

    NaN never falls inside a range, so `nan=MUST` with a limited inside-range
    accepts nothing and is reported at construction.
    """
    nan: TriAllow = TriAllow.ALLOW
    range: RangeOption = field(default_factory=RangeOption)
    conflict: TriAllow = TriAllow.DISALLOW

    name = "number"

    def __post_init__(self) -> None:
        if self.nan.must() and not self.range.outside and not self.range.is_unlimited:
            report_conflict(self.name, "nan(must)", "range(inside)", self.conflict)

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[nan={self.nan.value},range={self.range}]"

    def _parse(self, text: str) -> Result[Number, AppError]:
        # float() tolerates surrounding blanks and digit underscores
        if text != text.strip() or "_" in text:
            return parse_error("invalid float literal", validator=self.name, value=text)
        try:
            number = float(text)
        except ValueError as e:
            return parse_error(str(e), validator=self.name, value=text, cause=e)
        return self._checked(number, text)

    def _checked(self, value: float, source) -> Result[Number, AppError]:
        if math.isnan(value):
            if self.nan.disallows():
                return gate(ErrorCode.E2045_NAN_DISALLOW, validator=self.name, value=source)
            return Ok(Number(value))
        if (rejected := range_error(self.range, value, "number", validator=self.name, source=source)) is not None:
            return rejected
        if self.nan.must():
            return gate(ErrorCode.E2044_NAN_MUST, validator=self.name, value=source)
        return Ok(Number(value))

    def parse_str(self, text: str | int | float) -> Result[Number, AppError]:
        if isinstance(text, (int, float)) and not isinstance(text, bool):
            return self.validate_float(text)
        return Validator.parse_str(self, text)

    def validate_str(self, text: str | int | float) -> Result[None, AppError]:
        if isinstance(text, (int, float)) and not isinstance(text, bool):
            return self.validate_float(text).map(lambda _: None)
        return Validator.validate_str(self, text)

    def validate_float(self, value: int | float) -> Result[Number, AppError]:
        """Apply the NaN policy and range to a native number."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return invalid_type("number", value, validator=self.name)
        try:
            number = float(value)
        except OverflowError:
            return unprecise(validator=self.name, value=value)
        return self._checked(number, value)

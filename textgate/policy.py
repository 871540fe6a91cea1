"""Policy Model

Small closed value types every validator consults instead of re-deriving
tri-state logic inline:

- TriAllow: must / allow / disallow
- BiAllow: allow / disallow
- CaseOption: any / upper / lower
- SeparatorOption: must(sep) / allow(sep) / disallow
- RangeOption: inside or outside [min, max], inclusive or exclusive bounds

All of them are immutable, hashable and side-effect free.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import ClassVar


class TriAllow(str, Enum):
    """Whether an optional grammar feature is required, optional or forbidden."""
    MUST = "must"
    ALLOW = "allow"
    DISALLOW = "disallow"

    def allows(self) -> bool:
        """True unless the feature is forbidden."""
        return self is not TriAllow.DISALLOW

    def must(self) -> bool: return self is TriAllow.MUST

    def disallows(self) -> bool: return self is TriAllow.DISALLOW

    @classmethod
    def default(cls) -> TriAllow: return cls.ALLOW


class BiAllow(str, Enum):
    """Two-way gate (comments in email, non-ASCII local parts)."""
    ALLOW = "allow"
    DISALLOW = "disallow"

    def allows(self) -> bool: return self is BiAllow.ALLOW

    def disallows(self) -> bool: return self is BiAllow.DISALLOW

    @classmethod
    def default(cls) -> BiAllow: return cls.ALLOW


class CaseOption(str, Enum):
    """Letter-case rule for hexadecimal tokens."""
    ANY = "any"
    UPPER = "upper"
    LOWER = "lower"

    def any(self) -> bool: return self is CaseOption.ANY

    def upper(self) -> bool:
        """True when upper-case letters are acceptable."""
        return self is not CaseOption.LOWER

    def lower(self) -> bool:
        """True when lower-case letters are acceptable."""
        return self is not CaseOption.UPPER

    def accepts(self, text: str) -> bool:
        """Check the letters of an ASCII token against this rule."""
        if self is CaseOption.UPPER:
            return not any("a" <= c <= "z" for c in text)
        if self is CaseOption.LOWER:
            return not any("A" <= c <= "Z" for c in text)
        return True


@dataclass(frozen=True, slots=True)
class SeparatorOption:
    """Delimiter rule for tokens such as MAC addresses and UUIDs.

    Build with SeparatorOption.must(":"), SeparatorOption.allow("-") or
    SeparatorOption.disallow().
    """
    mode: TriAllow
    separator: str | None = None

    def __post_init__(self) -> None:
        if self.mode is TriAllow.DISALLOW:
            if self.separator is not None:
                raise ValueError("A disallowed separator cannot name a character")
        elif self.separator is None or len(self.separator) != 1 or not self.separator.isascii():
            raise ValueError(f"Separator must be a single ASCII character, got {self.separator!r}")

    @classmethod
    def must(cls, separator: str) -> SeparatorOption: return cls(TriAllow.MUST, separator)

    @classmethod
    def allow(cls, separator: str) -> SeparatorOption: return cls(TriAllow.ALLOW, separator)

    @classmethod
    def disallow(cls) -> SeparatorOption: return cls(TriAllow.DISALLOW)

    def allows(self) -> str | None:
        """The separator when it may appear, otherwise None."""
        return self.separator

    def must_have(self) -> str | None:
        """The separator only when it is required."""
        return self.separator if self.mode is TriAllow.MUST else None

    def disallows(self) -> bool: return self.mode is TriAllow.DISALLOW

    def __str__(self) -> str:
        return self.mode.value if self.separator is None else f"{self.mode.value}({self.separator})"


@dataclass(frozen=True, slots=True)
class RangeOption:
    """Numeric range policy.

    Inside ranges accept values between min and max; outside ranges reject
    them. Either bound may be None (unbounded on that side). `inclusive`
    applies to both bounds. An inclusive range with min == max is exact and
    compares by equality only.
    """
    min: Real | None = None
    max: Real | None = None
    inclusive: bool = True
    outside: bool = False

    UNLIMITED: ClassVar[RangeOption]

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Range minimum {self.min} exceeds maximum {self.max}")

    @classmethod
    def inside(cls, min: Real | None = None, max: Real | None = None, *, inclusive: bool = True) -> RangeOption:
        return cls(min, max, inclusive)

    @classmethod
    def exclude(cls, min: Real | None = None, max: Real | None = None, *, inclusive: bool = True) -> RangeOption:
        return cls(min, max, inclusive, outside=True)

    @property
    def is_unlimited(self) -> bool: return self.min is None and self.max is None

    @property
    def is_exact(self) -> bool:
        return self.inclusive and self.min is not None and self.min == self.max

    def above_min(self, value: Real) -> bool:
        if self.min is None: return True
        return value >= self.min if self.inclusive else value > self.min

    def below_max(self, value: Real) -> bool:
        if self.max is None: return True
        return value <= self.max if self.inclusive else value < self.max

    def _within(self, value: Real) -> bool:
        if self.is_exact:
            return value == self.min
        return self.above_min(value) and self.below_max(value)

    def contains(self, value: Real) -> bool:
        """Whether `value` satisfies this policy."""
        if self.is_unlimited:
            return not self.outside
        return self._within(value) != self.outside

    def __contains__(self, value: Real) -> bool: return self.contains(value)

    def __str__(self) -> str:
        if self.is_unlimited:
            return "unlimited"
        lo = "-inf" if self.min is None else str(self.min)
        hi = "+inf" if self.max is None else str(self.max)
        left, right = ("[", "]") if self.inclusive else ("(", ")")
        return f"{'outside ' if self.outside else ''}{left}{lo}, {hi}{right}"


RangeOption.UNLIMITED = RangeOption()

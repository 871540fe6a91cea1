"""Hex tokens with separators: MAC addresses and UUIDs.

Both are fixed groups of hex digits, written either run together or with a
single separator between every group:

    MAC:  001a2b3c4d5e      00:1a:2b:3c:4d:5e
    UUID: 67e5504410b1426f9247bb680e5fe0c8
          67e55044-10b1-426f-9247-bb680e5fe0c8
"""
from __future__ import annotations

import string
import uuid
from dataclasses import dataclass, field
from typing import ClassVar

from textgate.errors import AppError, ErrorCode, Ok, Result, gate, invalid
from textgate.policy import CaseOption, SeparatorOption
from .base import Validator

HEX_DIGITS = frozenset(string.hexdigits)


def _is_hex(text: str) -> bool: return bool(text) and all(c in HEX_DIGITS for c in text)


def _split_groups(digits: str, groups: tuple[int, ...]) -> list[str]:
    parts, start = [], 0
    for size in groups:
        parts.append(digits[start:start + size])
        start += size
    return parts


@dataclass(frozen=True, slots=True)
class HexToken:
    """Hex digits of a validated token plus the rendering policy."""
    digits: str
    case: CaseOption = CaseOption.ANY
    separator: str | None = None

    groups: ClassVar[tuple[int, ...]] = ()

    def _cased(self) -> str:
        match self.case:
            case CaseOption.UPPER:
                return self.digits.upper()
            case CaseOption.LOWER:
                return self.digits.lower()
            case _:
                return self.digits

    def to_string(self) -> str:
        digits = self._cased()
        if self.separator is None:
            return digits
        return self.separator.join(_split_groups(digits, self.groups))

    def __str__(self) -> str: return self.to_string()


class MacAddress(HexToken):
    groups = (2, 2, 2, 2, 2, 2)

    def to_bytes(self) -> bytes: return bytes.fromhex(self.digits)


class Uuid(HexToken):
    groups = (8, 4, 4, 4, 12)

    def to_uuid(self) -> uuid.UUID: return uuid.UUID(hex=self.digits)


@dataclass(frozen=True, slots=True)
class _HexTokenValidator(Validator[HexToken]):
    case: CaseOption = CaseOption.ANY
    separator: SeparatorOption = field(default_factory=lambda: SeparatorOption.allow(":"))

    label: ClassVar[str] = "token"
    token: ClassVar[type[HexToken]] = HexToken

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[case={self.case.value},separator={self.separator}]"

    def _invalid(self, text: str) -> Result[HexToken, AppError]:
        return invalid(self.label, validator=self.name, value=text)

    def _separated_digits(self, text: str) -> str | None:
        """Digits of `text` when every group boundary holds one and the same character."""
        groups = self.token.groups
        if len(text) != sum(groups) + len(groups) - 1:
            return None
        parts, boundaries, start = [], set(), 0
        for size in groups:
            parts.append(text[start:start + size])
            if start + size < len(text):
                boundaries.add(text[start + size])
            start += size + 1
        digits = "".join(parts)
        if len(boundaries) != 1 or not _is_hex(digits):
            return None
        return digits

    def _parse(self, text: str) -> Result[HexToken, AppError]:
        groups = self.token.groups
        if len(text) == sum(groups) and _is_hex(text):
            if self.separator.must_have() is not None:
                return gate(ErrorCode.E2032_SEPARATOR_MUST, validator=self.name, value=text)
            digits = text
        elif (digits := self._separated_digits(text)) is not None:
            used = text[groups[0]]
            if self.separator.disallows():
                if used in HEX_DIGITS:
                    return self._invalid(text)
                return gate(ErrorCode.E2033_SEPARATOR_DISALLOW, validator=self.name, value=text)
            if used != self.separator.allows():
                return self._invalid(text)
        else:
            return self._invalid(text)

        if not self.case.accepts(digits):
            return self._invalid(text)
        return Ok(self.token(digits, self.case, self.separator.allows()))


class MacAddressValidator(_HexTokenValidator):
    """48-bit MAC address; separator defaults to allow(":")."""
    name = "mac_address"
    label = "mac address"
    token = MacAddress


@dataclass(frozen=True)
class UuidValidator(_HexTokenValidator):
    """UUID in 8-4-4-4-12 groups; separator defaults to allow("-")."""
    separator: SeparatorOption = field(default_factory=lambda: SeparatorOption.allow("-"))

    name = "uuid"
    label = "uuid"
    token = Uuid

"""Canonical Encoding Validator

Byte-grammar checker and decoder for group-based binary-to-text encodings
(Base64, Base64-URL, Base32) under a padding policy.

The final group is the only place padding may appear. Its apparent length
(len % group_size, zero meaning a full group) decides whether padding could
be present at all, so a MUST policy is settled before any byte is read.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Callable, ClassVar

from textgate.errors import AppError, ErrorCode, Ok, Result, gate, invalid
from textgate.policy import TriAllow
from .base import Validator

PAD = "="

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = _UPPER.lower()
_DIGITS = "0123456789"


@dataclass(frozen=True, slots=True)
class Alphabet:
    """Symbol order, group size and legal first-pad positions of one encoding."""
    label: str
    ordered: str
    group_size: int
    pad_positions: frozenset[int]
    encoder: Callable[[bytes], bytes]
    decoder: Callable[[str], bytes]
    symbols: frozenset[str] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "symbols", frozenset(self.ordered))

    @property
    def bits_per_symbol(self) -> int: return len(self.ordered).bit_length() - 1

    def has_clean_tail(self, unpadded: str) -> bool:
        """Whether the bits left over after the last whole byte are all zero."""
        if not unpadded:
            return True
        spare = len(unpadded) * self.bits_per_symbol % 8
        return self.ordered.index(unpadded[-1]) & ((1 << spare) - 1) == 0

    def encode(self, data: bytes, *, padded: bool = True) -> str:
        text = self.encoder(data).decode("ascii")
        return text if padded else text.rstrip(PAD)

    def decode(self, text: str) -> bytes:
        """Decode validated text, padded or not.

        Raises ValueError when the text does not encode a whole number of
        bytes or carries non-zero trailing bits.
        """
        full = text + PAD * (-len(text) % self.group_size)
        data = self.decoder(full)
        if self.encode(data) != full:
            raise ValueError(f"non-canonical {self.label}")
        return data


BASE64 = Alphabet(
    label="Base64",
    ordered=_UPPER + _LOWER + _DIGITS + "+/",
    group_size=4,
    pad_positions=frozenset({2, 3}),
    encoder=base64.b64encode,
    decoder=lambda s: base64.b64decode(s, validate=True),
)

BASE64_URL = Alphabet(
    label="Base64-url",
    ordered=_UPPER + _LOWER + _DIGITS + "-_",
    group_size=4,
    pad_positions=frozenset({2, 3}),
    encoder=base64.urlsafe_b64encode,
    decoder=lambda s: base64.b64decode(s, altchars=b"-_", validate=True),
)

BASE32 = Alphabet(
    label="Base32",
    ordered=_UPPER + "234567",
    group_size=8,
    pad_positions=frozenset({2, 4, 5, 7}),
    encoder=base64.b32encode,
    decoder=base64.b32decode,
)


def scan_canonical(text: str, alphabet: Alphabet, padding: TriAllow, *, validator: str) -> Result[int, AppError]:
    """Check `text` against `alphabet` under `padding`.

    Returns Ok(number of trailing pad characters).
    """
    length = len(text)
    if length == 0:
        return invalid(alphabet.label, validator=validator, value=text)

    group = alphabet.group_size
    last_length = length % group or group

    if padding.must() and last_length != group:
        return gate(ErrorCode.E2030_PADDING_MUST, validator=validator, value=text)

    body_end = length - last_length
    symbols = alphabet.symbols
    for c in text[:body_end]:
        if c not in symbols:
            return invalid(alphabet.label, validator=validator, value=text)

    tail = text[body_end:]
    for p, c in enumerate(tail):
        if c == PAD:
            if padding.disallows():
                return gate(ErrorCode.E2031_PADDING_DISALLOW, validator=validator, value=text)
            if p in alphabet.pad_positions and last_length == group and tail[p:] == PAD * (group - p):
                return Ok(group - p)
            return invalid(alphabet.label, validator=validator, value=text)
        if c not in symbols:
            return invalid(alphabet.label, validator=validator, value=text)

    # An unpadded tail must still encode whole bytes.
    if last_length == group or last_length in alphabet.pad_positions:
        return Ok(0)
    return invalid(alphabet.label, validator=validator, value=text)


# ============================================================================
# Values
# ============================================================================

@dataclass(frozen=True, slots=True)
class Encoded:
    """Validated encoded text."""
    text: str
    alphabet: Alphabet
    padding_length: int = 0

    @property
    def is_padded(self) -> bool: return self.padding_length > 0

    @property
    def unpadded(self) -> str:
        return self.text[:len(self.text) - self.padding_length]

    def decode(self) -> bytes:
        """Decode the validated text.

        Raises ValueError for non-canonical trailing bits, which the
        non-decoding validators do not inspect.
        """
        return self.alphabet.decode(self.unpadded)

    def __str__(self) -> str: return self.text


@dataclass(frozen=True, slots=True)
class Decoded:
    """Bytes decoded from validated text, plus the padding shape it came in."""
    data: bytes
    alphabet: Alphabet
    padded: bool

    def encode(self) -> str:
        """Re-encode with the same padding choice as the source text."""
        return self.alphabet.encode(self.data, padded=self.padded)

    def __bytes__(self) -> bytes: return self.data

    def __len__(self) -> int: return len(self.data)

    def __str__(self) -> str: return self.encode()


# ============================================================================
# Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class CanonicalEncodingValidator(Validator[Encoded]):
    """Syntactic check of encoded text under a padding policy."""
    padding: TriAllow = TriAllow.ALLOW

    alphabet: ClassVar[Alphabet] = BASE64

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[padding={self.padding.value}]"

    def _parse(self, text: str) -> Result[Encoded, AppError]:
        return scan_canonical(text, self.alphabet, self.padding, validator=self.name).map(
            lambda pads: Encoded(text, self.alphabet, pads))

    def _check(self, text: str) -> Result[None, AppError]:
        return scan_canonical(text, self.alphabet, self.padding, validator=self.name).map(lambda _: None)


@dataclass(frozen=True, slots=True)
class DecodingValidator(Validator[Decoded]):
    """Check then decode; non-canonical trailing bits are rejected."""
    padding: TriAllow = TriAllow.ALLOW

    alphabet: ClassVar[Alphabet] = BASE64

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[padding={self.padding.value}]"

    def _parse(self, text: str) -> Result[Decoded, AppError]:
        return scan_canonical(text, self.alphabet, self.padding, validator=self.name).and_then(
            lambda pads: self._decode(text, pads))

    def _decode(self, text: str, pads: int) -> Result[Decoded, AppError]:
        try:
            data = self.alphabet.decode(text[:len(text) - pads])
        except ValueError:
            return invalid(self.alphabet.label, validator=self.name, value=text)
        return Ok(Decoded(data, self.alphabet, padded=pads > 0))

    def decode_str(self, text: str) -> Result[bytes, AppError]:
        return self.parse_str(text).map(bytes)

    def _check(self, text: str) -> Result[None, AppError]:
        match scan_canonical(text, self.alphabet, self.padding, validator=self.name):
            case Ok(pads) if not self.alphabet.has_clean_tail(text[:len(text) - pads]):
                return invalid(self.alphabet.label, validator=self.name, value=text)
            case result:
                return result.map(lambda _: None)


class Base64Validator(CanonicalEncodingValidator):
    name = "base64"
    alphabet = BASE64


class Base64UrlValidator(CanonicalEncodingValidator):
    name = "base64_url"
    alphabet = BASE64_URL


class Base32Validator(CanonicalEncodingValidator):
    name = "base32"
    alphabet = BASE32


class Base64DecodedValidator(DecodingValidator):
    name = "base64_decoded"
    alphabet = BASE64


class Base64UrlDecodedValidator(DecodingValidator):
    name = "base64_url_decoded"
    alphabet = BASE64_URL


class Base32DecodedValidator(DecodingValidator):
    name = "base32_decoded"
    alphabet = BASE32

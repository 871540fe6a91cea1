"""Boolean Validator

Case-insensitive yes/no words. Native bools pass through; the ints 0 and 1
map to False and True.
"""
from __future__ import annotations

from dataclasses import dataclass

from textgate.errors import AppError, Ok, Result, invalid
from .base import Validator

TRUE_WORDS = frozenset({"t", "true", "y", "yes", "on", "1"})
FALSE_WORDS = frozenset({"f", "false", "n", "no", "off", "0"})


@dataclass(frozen=True, slots=True)
class BooleanValidator(Validator[bool]):
    name = "boolean"

    def _parse(self, text: str) -> Result[bool, AppError]:
        word = text.lower()
        if word in TRUE_WORDS:
            return Ok(True)
        if word in FALSE_WORDS:
            return Ok(False)
        return invalid("boolean", validator=self.name, value=text)

    def parse_str(self, text: str | bool | int) -> Result[bool, AppError]:
        if isinstance(text, bool):
            return Ok(text)
        if isinstance(text, int):
            return Ok(bool(text)) if text in (0, 1) else invalid("boolean", validator=self.name, value=text)
        return Validator.parse_str(self, text)

    def validate_str(self, text: str | bool | int) -> Result[None, AppError]:
        if isinstance(text, (bool, int)):
            return self.parse_str(text).map(lambda _: None)
        return Validator.validate_str(self, text)

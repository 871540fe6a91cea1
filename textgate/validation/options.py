"""Declarative Validator Configuration

Build validators from plain mappings or a YAML document instead of
constructor calls:

    validators:
      contact_email:
        kind: email
        comment: disallow
        at_least_two_labels: must
      device:
        kind: mac_address
        case: lower
        separator: must(:)
      quantity:
        kind: integer
        negative: disallow
        range: {min: 1, max: 1000}
      ratio:
        kind: number
        nan: disallow
        range: {min: 0.0, max: 1.0}

Policy words are case-insensitive. Separators are "must(c)", "allow(c)" or
"disallow". A policy conflict is raised as PolicyConflictError, exactly as
when constructing the validator directly.
"""
from __future__ import annotations

import re
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Annotated, Any, Mapping

import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainValidator, ValidationError

from textgate.config import get_settings
from textgate.errors import (
    AppError, Err, Ok, Result, constraint_violation, file_not_found, file_read_error, sequence_results,
)
from textgate.logging import config_logger
from textgate.policy import BiAllow, CaseOption, RangeOption, SeparatorOption, TriAllow
from .base import Validator
from .boolean import BooleanValidator
from .domain import DomainValidator
from .email import EmailValidator
from .encoding import (
    Base32DecodedValidator, Base32Validator, Base64DecodedValidator, Base64UrlDecodedValidator,
    Base64UrlValidator, Base64Validator,
)
from .host import HostValidator
from .http_url import HttpFtpUrlValidator, HttpUrlValidator
from .ip import IPv4Validator, IPv6Validator, IPValidator
from .numeric import IntegerValidator, NumberValidator, UnsignedIntegerValidator
from .tokens import MacAddressValidator, UuidValidator
from .uri import UriValidator

KINDS: dict[str, type[Validator]] = {
    cls.name: cls
    for cls in (
        Base64Validator, Base64UrlValidator, Base32Validator,
        Base64DecodedValidator, Base64UrlDecodedValidator, Base32DecodedValidator,
        DomainValidator, HostValidator, UriValidator, EmailValidator,
        HttpUrlValidator, HttpFtpUrlValidator,
        IPv4Validator, IPv6Validator, IPValidator,
        IntegerValidator, UnsignedIntegerValidator, NumberValidator, BooleanValidator,
        MacAddressValidator, UuidValidator,
    )
}

_SEPARATOR = re.compile(r"(must|allow)\((.)\)", re.IGNORECASE)


# ============================================================================
# Policy literal parsing
# ============================================================================

def _lower(v: Any) -> Any:
    return v.strip().lower() if isinstance(v, str) else v


def parse_separator(v: Any) -> SeparatorOption:
    """Parse "must(:)", "allow(-)" or "disallow" into a SeparatorOption."""
    if isinstance(v, SeparatorOption):
        return v
    if not isinstance(v, str):
        raise ValueError(f"Separator policy must be a string, got {type(v).__name__}")
    if _lower(v) == "disallow":
        return SeparatorOption.disallow()
    if (m := _SEPARATOR.fullmatch(v.strip())) is None:
        raise ValueError(f"Invalid separator policy: {v!r}")
    return SeparatorOption(TriAllow(m.group(1).lower()), m.group(2))


class RangeSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    min: int | float | None = None
    max: int | float | None = None
    inclusive: bool = True
    outside: bool = False

    def to_option(self) -> RangeOption:
        return RangeOption(self.min, self.max, self.inclusive, self.outside)


def parse_range(v: Any) -> RangeOption:
    if isinstance(v, RangeOption):
        return v
    try:
        spec = RangeSpec.model_validate(v)
    except ValidationError as e:
        raise ValueError(f"Invalid range: {e.errors()[0]['msg']}") from e
    return spec.to_option()


Tri = Annotated[TriAllow, BeforeValidator(_lower)]
Bi = Annotated[BiAllow, BeforeValidator(_lower)]
Case = Annotated[CaseOption, BeforeValidator(_lower)]
Separator = Annotated[SeparatorOption, PlainValidator(parse_separator)]
Range = Annotated[RangeOption, PlainValidator(parse_range)]


class ValidatorSpec(BaseModel):
    """One declared validator: its kind plus the policies it overrides."""
    model_config = ConfigDict(extra="forbid")

    kind: str
    padding: Tri | None = None
    ipv4: Tri | None = None
    ip: Tri | None = None
    local: Tri | None = None
    port: Tri | None = None
    at_least_two_labels: Tri | None = None
    conflict: Tri | None = None
    negative: Tri | None = None
    zero: Tri | None = None
    nan: Tri | None = None
    comment: Bi | None = None
    non_ascii: Bi | None = None
    case: Case | None = None
    separator: Separator | None = None
    range: Range | None = None

    def options(self) -> dict[str, Any]:
        """Policies given explicitly, by constructor keyword."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name != "kind" and getattr(self, name) is not None
        }


def accepted_options(cls: type[Validator]) -> frozenset[str]:
    return frozenset(f.name for f in fields(cls) if f.init) if is_dataclass(cls) else frozenset()


# ============================================================================
# Builders
# ============================================================================

def build_validator(mapping: Mapping[str, Any]) -> Result[Validator, AppError]:
    """Construct a validator from a `{kind: ..., <policy>: ...}` mapping.

    Raises PolicyConflictError for mutually unsatisfiable policies.
    """
    try:
        spec = ValidatorSpec.model_validate(mapping)
    except ValidationError as e:
        return constraint_violation(
            f"Invalid validator options: {e.errors()[0]['msg']}",
            origin="build_validator",
            errors=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
        )

    if (cls := KINDS.get(spec.kind.lower())) is None:
        return constraint_violation(f"Unknown validator kind: {spec.kind}", origin="build_validator",
            kinds=sorted(KINDS))

    options = spec.options()
    if unsupported := sorted(set(options) - accepted_options(cls)):
        return constraint_violation(
            f"`{cls.name}` does not accept: {', '.join(unsupported)}",
            origin="build_validator",
            kind=cls.name,
        )
    return Ok(cls(**options))


def _build_entry(name: str, entry: Any, path: str) -> Result[tuple[str, Validator], AppError]:
    if not isinstance(entry, Mapping):
        return constraint_violation(f"Validator `{name}` must be a mapping", origin="load_validators",
            name=name, path=path)
    return (
        build_validator(entry)
        .map(lambda validator: (name, validator))
        .map_err(lambda error: error.with_metadata(name=name, path=path).with_origin("load_validators"))
    )


def load_validators(path: str | Path | None = None) -> Result[dict[str, Validator], AppError]:
    """Load `validators: {name: spec}` from a YAML file.

    Defaults to the TEXTGATE_VALIDATORS_FILE setting. The first bad entry
    fails the whole file.
    """
    if path is None and (path := get_settings().VALIDATORS_FILE) is None:
        return constraint_violation("No validators file given or configured", origin="load_validators")

    path = Path(path)
    log = config_logger().bind(path=str(path))
    if not path.exists():
        log.error("validators_file_missing")
        return file_not_found(str(path), origin="load_validators")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        log.error("validators_file_unreadable", error=str(e))
        return file_read_error(str(path), e, origin="load_validators")

    entries = data.get("validators") if isinstance(data, dict) else None
    if not isinstance(entries, dict):
        log.error("validators_mapping_missing")
        return constraint_violation("`validators` mapping not found", origin="load_validators", path=str(path))

    match sequence_results([_build_entry(name, entry, str(path)) for name, entry in entries.items()]):
        case Ok(pairs):
            log.info("validators_loaded", count=len(pairs))
            return Ok(dict(pairs))
        case Err(error):
            log.error("validator_rejected", name=error.metadata.get("name"), reason=error.message)
            return Err(error)

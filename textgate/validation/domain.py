"""Domain Validator

Accepts a domain name or an IPv4 literal, optionally followed by ":port".
A single trailing root dot is accepted ("example.com.", "127.0.0.1.").
Unicode names are stored in their IDNA ASCII form.
"""
from __future__ import annotations

from dataclasses import dataclass

from textgate.errors import AppError, ErrorCode, Ok, Result, gate, invalid
from textgate.policy import TriAllow
from .base import Validator, check_conflict
from .net import (
    is_at_least_two_labels_domain, is_local_domain, is_local_ipv4,
    parse_ipv4_allow_trailing_dot, parse_port, to_ascii_domain, uri_authority,
)


@dataclass(frozen=True, slots=True)
class Domain:
    """Validated domain: ASCII name (or IPv4 text) plus the parsed port."""
    domain: str
    port: int | None = None
    is_ipv4: bool = False
    is_local: bool = False

    def is_fully_qualified(self) -> bool: return self.domain.endswith(".")

    @property
    def domain_non_fully_qualified(self) -> str:
        return self.domain[:-1] if self.is_fully_qualified() else self.domain

    def to_uri_authority_string(self) -> str:
        return uri_authority(self.domain_non_fully_qualified, self.port)

    def __str__(self) -> str: return uri_authority(self.domain, self.port)


def split_port(text: str) -> tuple[str, str | None]:
    """Split on the last ':'; the port text is None when there is no colon."""
    host, sep, port = text.rpartition(":")
    return (host, port) if sep else (text, None)


@dataclass(frozen=True, slots=True)
class DomainValidator(Validator[Domain]):
    """Domain name or IPv4 literal under ipv4/local/port/label gates.

    `ipv4=MUST` with `at_least_two_labels=DISALLOW` rejects every input.
    With the default `conflict=DISALLOW` that pairing raises
    PolicyConflictError at construction.
    """
    ipv4: TriAllow = TriAllow.ALLOW
    local: TriAllow = TriAllow.ALLOW
    port: TriAllow = TriAllow.ALLOW
    at_least_two_labels: TriAllow = TriAllow.ALLOW
    conflict: TriAllow = TriAllow.DISALLOW

    name = "domain"

    def __post_init__(self) -> None:
        check_conflict(self.name, ("ipv4", self.ipv4), ("at_least_two_labels", self.at_least_two_labels), self.conflict)

    @property
    def constraint_name(self) -> str:
        return (f"{self.name}[ipv4={self.ipv4.value},local={self.local.value},port={self.port.value},"
                f"at_least_two_labels={self.at_least_two_labels.value}]")

    def _reject(self, code: ErrorCode, text: str) -> Result[Domain, AppError]:
        return gate(code, validator=self.name, value=text)

    def _parse(self, text: str) -> Result[Domain, AppError]:
        if not text:
            return invalid("domain", validator=self.name, value=text)

        host, port_text = split_port(text)
        if port_text is not None and self.port.disallows():
            return self._reject(ErrorCode.E2053_PORT_DISALLOW, text)
        if port_text is None and self.port.must():
            return self._reject(ErrorCode.E2052_PORT_MUST, text)

        port = None
        if port_text is not None and (port := parse_port(port_text)) is None:
            return invalid("domain", validator=self.name, value=text)
        if not host:
            return invalid("domain", validator=self.name, value=text)

        if (address := parse_ipv4_allow_trailing_dot(host)) is not None:
            if self.ipv4.disallows():
                return self._reject(ErrorCode.E2055_IPV4_DISALLOW, text)
            if self.at_least_two_labels.disallows():
                return self._reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW, text)
            domain, is_ipv4, is_local = host, True, is_local_ipv4(address)
        else:
            if self.ipv4.must():
                return self._reject(ErrorCode.E2054_IPV4_MUST, text)
            if (domain := to_ascii_domain(host)) is None:
                return invalid("domain", validator=self.name, value=text)
            is_ipv4, is_local = False, is_local_domain(domain)
            if not is_local:
                two_labels = is_at_least_two_labels_domain(domain)
                if self.at_least_two_labels.must() and not two_labels:
                    return self._reject(ErrorCode.E2058_AT_LEAST_TWO_LABELS_MUST, text)
                if self.at_least_two_labels.disallows() and two_labels:
                    return self._reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW, text)

        if self.local.must() and not is_local:
            return self._reject(ErrorCode.E2050_LOCAL_MUST, text)
        if self.local.disallows() and is_local:
            return self._reject(ErrorCode.E2051_LOCAL_DISALLOW, text)

        return Ok(Domain(domain, port, is_ipv4, is_local))

"""Host Validator

The host grammar of URI authorities: a domain name, an IPv4 literal, a bare
IPv6 literal, or a bracketed IPv6 literal, each optionally with ":port"
(bare IPv6 never carries a port). Unlike DomainValidator, a trailing dot is
rejected: it marks a fully-qualified name but is not part of a URI host.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address

from textgate.errors import AppError, ErrorCode, Ok, Result, gate, invalid
from textgate.policy import TriAllow
from .base import Validator
from .domain import split_port
from .net import (
    is_at_least_two_labels_domain, is_local_domain, is_local_ipv4, is_local_ipv6,
    parse_ipv4, parse_ipv6, parse_port, to_ascii_domain, uri_authority,
)


class HostKind(str, Enum):
    DOMAIN = "domain"
    IPV4 = "ipv4"
    IPV6 = "ipv6"


@dataclass(frozen=True, slots=True)
class Host:
    """Validated host: ASCII domain or canonical IP text, plus optional port."""
    kind: HostKind
    host: str
    port: int | None = None
    is_local: bool = False

    @property
    def address(self) -> IPv4Address | IPv6Address | None:
        return None if self.kind is HostKind.DOMAIN else ip_address(self.host)

    def to_uri_authority_string(self) -> str:
        return uri_authority(self.host, self.port, ipv6=self.kind is HostKind.IPV6)

    def __str__(self) -> str: return self.to_uri_authority_string()


@dataclass(frozen=True, slots=True)
class HostValidator(Validator[Host]):
    local: TriAllow = TriAllow.ALLOW
    port: TriAllow = TriAllow.ALLOW
    at_least_two_labels: TriAllow = TriAllow.ALLOW

    name = "host"

    @property
    def constraint_name(self) -> str:
        return (f"{self.name}[local={self.local.value},port={self.port.value},"
                f"at_least_two_labels={self.at_least_two_labels.value}]")

    def _invalid(self, text: str) -> Result[Host, AppError]:
        return invalid("domain or IP", validator=self.name, value=text)

    def _reject(self, code: ErrorCode, text: str) -> Result[Host, AppError]:
        return gate(code, validator=self.name, value=text)

    def _finish(self, host: Host, text: str) -> Result[Host, AppError]:
        if self.local.must() and not host.is_local:
            return self._reject(ErrorCode.E2050_LOCAL_MUST, text)
        if self.local.disallows() and host.is_local:
            return self._reject(ErrorCode.E2051_LOCAL_DISALLOW, text)
        return Ok(host)

    def _parse(self, text: str) -> Result[Host, AppError]:
        if not text:
            return self._invalid(text)
        if text.startswith("["):
            return self._parse_bracketed(text)
        if (address := parse_ipv6(text)) is not None:
            if self.at_least_two_labels.disallows():
                return self._reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW, text)
            if self.port.must():
                return self._reject(ErrorCode.E2052_PORT_MUST, text)
            return self._finish(Host(HostKind.IPV6, str(address), None, is_local_ipv6(address)), text)
        return self._parse_named(text)

    def _parse_bracketed(self, text: str) -> Result[Host, AppError]:
        if self.at_least_two_labels.disallows():
            return self._reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW, text)

        if text.endswith("]"):
            if self.port.must():
                return self._reject(ErrorCode.E2052_PORT_MUST, text)
            address, port = parse_ipv6(text[1:-1]), None
        else:
            if self.port.disallows():
                return self._reject(ErrorCode.E2053_PORT_DISALLOW, text)
            colon = text.rfind(":")
            if colon <= 2 or text[colon - 1] != "]":
                return self._invalid(text)
            if (port := parse_port(text[colon + 1:])) is None:
                return self._invalid(text)
            address = parse_ipv6(text[1:colon - 1])

        if address is None:
            return self._invalid(text)
        return self._finish(Host(HostKind.IPV6, str(address), port, is_local_ipv6(address)), text)

    def _parse_named(self, text: str) -> Result[Host, AppError]:
        name, port_text = split_port(text)
        if port_text is not None and self.port.disallows():
            return self._reject(ErrorCode.E2053_PORT_DISALLOW, text)
        if port_text is None and self.port.must():
            return self._reject(ErrorCode.E2052_PORT_MUST, text)
        if not name or name.endswith("."):
            return self._invalid(text)

        port = None
        if port_text is not None and (port := parse_port(port_text)) is None:
            return self._invalid(text)

        if (address := parse_ipv4(name)) is not None:
            if self.at_least_two_labels.disallows():
                return self._reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW, text)
            return self._finish(Host(HostKind.IPV4, str(address), port, is_local_ipv4(address)), text)

        if (domain := to_ascii_domain(name)) is None:
            return self._invalid(text)
        is_local = is_local_domain(domain)
        if not is_local:
            two_labels = is_at_least_two_labels_domain(domain)
            if self.at_least_two_labels.must() and not two_labels:
                return self._reject(ErrorCode.E2058_AT_LEAST_TWO_LABELS_MUST, text)
            if self.at_least_two_labels.disallows() and two_labels:
                return self._reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW, text)
        return self._finish(Host(HostKind.DOMAIN, domain, port, is_local), text)

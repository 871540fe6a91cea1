"""IP literal validators with locality and port gates.

Accepted shapes:
- IPv4: "a.b.c.d" or "a.b.c.d:port"
- IPv6: "addr", "[addr]" or "[addr]:port"
"""
from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address

from textgate.errors import AppError, ErrorCode, Ok, Result, gate, invalid
from textgate.policy import TriAllow
from .base import Validator
from .net import is_local_ipv4, is_local_ipv6, parse_ipv4, parse_ipv6, parse_port, uri_authority


@dataclass(frozen=True, slots=True)
class IPAddress:
    """Validated IP literal with optional port."""
    address: IPv4Address | IPv6Address
    port: int | None = None
    is_local: bool = False

    @property
    def version(self) -> int: return self.address.version

    def to_uri_authority_string(self) -> str:
        return uri_authority(str(self.address), self.port, ipv6=self.version == 6)

    def __str__(self) -> str: return self.to_uri_authority_string()


def split_bracketed(text: str) -> tuple[str, str | None] | None:
    """Split "[addr]" / "[addr]:port" into (addr, port text); None when malformed."""
    close = text.find("]")
    if not text.startswith("[") or close < 0:
        return None
    rest = text[close + 1:]
    if not rest:
        return text[1:close], None
    if rest.startswith(":"):
        return text[1:close], rest[1:]
    return None


@dataclass(frozen=True, slots=True)
class _IPValidator(Validator[IPAddress]):
    local: TriAllow = TriAllow.ALLOW
    port: TriAllow = TriAllow.ALLOW

    label = "IP"

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[local={self.local.value},port={self.port.value}]"

    @abstractmethod
    def _split(self, text: str) -> tuple[str, str | None] | None:
        """Separate the address from its port text."""

    @abstractmethod
    def _address(self, text: str) -> IPv4Address | IPv6Address | None:
        """Parse the bare address."""

    def _parse(self, text: str) -> Result[IPAddress, AppError]:
        if not text or (parts := self._split(text)) is None:
            return invalid(self.label, validator=self.name, value=text)
        host, port_text = parts
        if port_text is None and self.port.must():
            return gate(ErrorCode.E2052_PORT_MUST, validator=self.name, value=text)
        if port_text is not None and self.port.disallows():
            return gate(ErrorCode.E2053_PORT_DISALLOW, validator=self.name, value=text)

        port = None
        if port_text is not None and (port := parse_port(port_text)) is None:
            return invalid(self.label, validator=self.name, value=text)
        if (address := self._address(host)) is None:
            return invalid(self.label, validator=self.name, value=text)

        is_local = is_local_ipv4(address) if address.version == 4 else is_local_ipv6(address)
        if self.local.must() and not is_local:
            return gate(ErrorCode.E2050_LOCAL_MUST, validator=self.name, value=text)
        if self.local.disallows() and is_local:
            return gate(ErrorCode.E2051_LOCAL_DISALLOW, validator=self.name, value=text)
        return Ok(IPAddress(address, port, is_local))


class IPv4Validator(_IPValidator):
    name = "ipv4"
    label = "IPv4"

    def _split(self, text: str) -> tuple[str, str | None]:
        host, sep, port = text.rpartition(":")
        return (host, port) if sep else (text, None)

    def _address(self, text: str) -> IPv4Address | None: return parse_ipv4(text)


class IPv6Validator(_IPValidator):
    name = "ipv6"
    label = "IPv6"

    def _split(self, text: str) -> tuple[str, str | None] | None:
        return split_bracketed(text) if text.startswith("[") else (text, None)

    def _address(self, text: str) -> IPv6Address | None: return parse_ipv6(text)


class IPValidator(_IPValidator):
    name = "ip"
    label = "IP"

    def _split(self, text: str) -> tuple[str, str | None] | None:
        if text.startswith("["):
            return split_bracketed(text)
        if text.count(":") == 1:
            host, _, port = text.partition(":")
            return host, port
        return text, None

    def _address(self, text: str) -> IPv4Address | IPv6Address | None:
        ipv4 = parse_ipv4(text)
        return ipv4 if ipv4 is not None else parse_ipv6(text)

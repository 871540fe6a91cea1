"""Address helpers shared by the domain, host, email, IP and URI parsers."""
from __future__ import annotations

from ipaddress import AddressValueError, IPv4Address, IPv4Network, IPv6Address

import idna

MAX_PORT = 65535

_LOCAL_IPV4_NETWORKS = tuple(IPv4Network(n) for n in (
    "10.0.0.0/8",        # private
    "172.16.0.0/12",     # private
    "192.168.0.0/16",    # private
    "127.0.0.0/8",       # loopback
    "169.254.0.0/16",    # link-local
    "192.0.2.0/24",      # documentation
    "198.51.100.0/24",   # documentation
    "203.0.113.0/24",    # documentation
))
_BROADCAST = IPv4Address("255.255.255.255")
_UNSPECIFIED = IPv4Address("0.0.0.0")

# Multicast scope nibble for global reach.
_GLOBAL_SCOPE = 0xE


def is_local_ipv4(addr: IPv4Address) -> bool:
    """Private, loopback, link-local, broadcast, documentation or unspecified."""
    if addr == _BROADCAST or addr == _UNSPECIFIED:
        return True
    return any(addr in net for net in _LOCAL_IPV4_NETWORKS)


def _embedded_ipv4(addr: IPv6Address) -> IPv4Address | None:
    """IPv4 carried by an IPv4-mapped (::ffff:a.b.c.d) or IPv4-compatible (::a.b.c.d) address."""
    if (mapped := addr.ipv4_mapped) is not None:
        return mapped
    value = int(addr)
    return IPv4Address(value) if value >> 32 == 0 else None


def is_local_ipv6(addr: IPv6Address) -> bool:
    """Non-globally-routable IPv6.

    Multicast narrower than global scope, loopback, unspecified, link-local,
    site-local, unique-local, documentation, or an embedded local IPv4.
    """
    first = int(addr) >> 112
    if first & 0xFF00 == 0xFF00:
        return first & 0x000F != _GLOBAL_SCOPE
    if int(addr) in (0, 1):
        return True
    if first & 0xFFC0 in (0xFE80, 0xFEC0):
        return True
    second = (int(addr) >> 96) & 0xFFFF
    if first & 0xFE00 == 0xFC00 or (first == 0x2001 and second == 0x0DB8):
        return True
    ipv4 = _embedded_ipv4(addr)
    return ipv4 is not None and is_local_ipv4(ipv4)


def parse_ipv4(text: str) -> IPv4Address | None:
    """Strict dotted-quad IPv4, or None."""
    try:
        return IPv4Address(text)
    except AddressValueError:
        return None


def parse_ipv4_allow_trailing_dot(text: str) -> IPv4Address | None:
    return parse_ipv4(text[:-1] if text.endswith(".") else text)


def parse_ipv6(text: str) -> IPv6Address | None:
    """IPv6 literal without brackets or zone identifier, or None."""
    if "%" in text:
        return None
    try:
        return IPv6Address(text)
    except AddressValueError:
        return None


def parse_port(text: str) -> int | None:
    """Decimal port in 0..65535, ASCII digits only."""
    if not text or len(text) > 5 or not (text.isascii() and text.isdigit()):
        return None
    port = int(text)
    return port if port <= MAX_PORT else None


def to_ascii_domain(text: str) -> str | None:
    """IDNA (UTS-46, STD3 rules) ASCII form of a domain name, or None.

    Label and total DNS lengths and hyphen placement are checked by the
    encoder; a single trailing root dot is preserved.
    """
    if not text or text.startswith("."):
        return None
    try:
        return idna.encode(text, uts46=True, std3_rules=True).decode("ascii")
    except (idna.IDNAError, UnicodeError):
        return None


def is_local_domain(domain: str) -> bool:
    """True for localhost, case-insensitive, with at most one trailing dot."""
    return (domain[:-1] if domain.endswith(".") else domain).lower() == "localhost"


def is_at_least_two_labels_domain(domain: str) -> bool:
    """Whether a dot appears before the optional trailing root dot."""
    return "." in domain[:-1]


def uri_authority(host: str, port: int | None, *, ipv6: bool = False) -> str:
    """host[:port] with IPv6 bracketed."""
    host = f"[{host}]" if ipv6 else host
    return host if port is None else f"{host}:{port}"

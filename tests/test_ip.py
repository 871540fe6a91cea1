from ipaddress import IPv4Address, IPv6Address

import pytest

from textgate.errors import ErrorCode
from textgate.policy import TriAllow
from textgate.validation import IPv4Validator, IPv6Validator, IPValidator
from textgate.validation.net import is_local_ipv4, is_local_ipv6, parse_port, to_ascii_domain

from conftest import assert_err, assert_ok


@pytest.mark.parametrize("text, local", [
    ("10.1.2.3", True),
    ("172.16.0.1", True),
    ("172.32.0.1", False),
    ("192.168.255.255", True),
    ("127.0.0.1", True),
    ("169.254.1.1", True),
    ("255.255.255.255", True),
    ("0.0.0.0", True),
    ("192.0.2.7", True),
    ("198.51.100.7", True),
    ("203.0.113.7", True),
    ("8.8.8.8", False),
    ("1.1.1.1", False),
])
def test_ipv4_locality(text, local):
    assert is_local_ipv4(IPv4Address(text)) is local


@pytest.mark.parametrize("text, local", [
    ("::", True),
    ("::1", True),
    ("fe80::1", True),
    ("fec0::1", True),
    ("fd12:3456::1", True),
    ("2001:db8::1", True),
    ("ff02::1", True),
    ("ff0e::1", False),
    ("::ffff:192.168.0.1", True),
    ("::ffff:8.8.8.8", False),
    ("::10.0.0.1", True),
    ("2606:4700:4700::1111", False),
])
def test_ipv6_locality(text, local):
    assert is_local_ipv6(IPv6Address(text)) is local


def test_ipv4_validator():
    value = assert_ok(IPv4Validator().parse_str("192.168.0.1:8080"))
    assert value.address == IPv4Address("192.168.0.1")
    assert value.port == 8080
    assert value.is_local
    assert value.version == 4
    assert str(value) == "192.168.0.1:8080"

    assert_err(IPv4Validator().parse_str("::1"), ErrorCode.E2002_INVALID_FORMAT, "invalid IPv4")
    assert_err(IPv4Validator().parse_str("256.0.0.1"), ErrorCode.E2002_INVALID_FORMAT)
    assert_err(IPv4Validator().parse_str("01.2.3.4"), ErrorCode.E2002_INVALID_FORMAT)


def test_ipv6_validator():
    assert assert_ok(IPv6Validator().parse_str("::1")).port is None
    value = assert_ok(IPv6Validator().parse_str("[2001:db8::1]:443"))
    assert value.port == 443
    assert value.to_uri_authority_string() == "[2001:db8::1]:443"
    assert_err(IPv6Validator().parse_str("fe80::1%eth0"), ErrorCode.E2002_INVALID_FORMAT, "invalid IPv6")
    assert_err(IPv6Validator().parse_str("1.2.3.4"), ErrorCode.E2002_INVALID_FORMAT)


def test_ip_validator_takes_both_families():
    assert assert_ok(IPValidator().parse_str("8.8.8.8")).version == 4
    assert assert_ok(IPValidator().parse_str("8.8.8.8:53")).port == 53
    assert assert_ok(IPValidator().parse_str("2001:db8::1")).version == 6
    assert assert_ok(IPValidator().parse_str("[::1]:53")).port == 53
    assert_err(IPValidator().parse_str("example.com"), ErrorCode.E2002_INVALID_FORMAT, "invalid IP")


def test_ip_gates():
    assert_err(IPv4Validator(port=TriAllow.MUST).parse_str("1.2.3.4"), ErrorCode.E2052_PORT_MUST)
    assert_err(IPv4Validator(port=TriAllow.DISALLOW).parse_str("1.2.3.4:1"), ErrorCode.E2053_PORT_DISALLOW)
    assert_err(IPv6Validator(local=TriAllow.DISALLOW).parse_str("::1"), ErrorCode.E2051_LOCAL_DISALLOW)
    assert_err(IPValidator(local=TriAllow.MUST).parse_str("8.8.8.8"), ErrorCode.E2050_LOCAL_MUST)


@pytest.mark.parametrize("text, port", [("0", 0), ("80", 80), ("65535", 65535), ("00080", 80)])
def test_parse_port(text, port):
    assert parse_port(text) == port


@pytest.mark.parametrize("text", ["", "65536", "-1", "+80", "８０", "000080"])
def test_parse_port_rejects(text):
    assert parse_port(text) is None


def test_to_ascii_domain():
    assert to_ascii_domain("bücher.example") == "xn--bcher-kva.example"
    assert to_ascii_domain("example.com.") == "example.com."
    assert to_ascii_domain("") is None
    assert to_ascii_domain("a_b.com") is None

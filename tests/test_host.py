from ipaddress import IPv6Address

import pytest

from textgate.errors import ErrorCode
from textgate.policy import TriAllow
from textgate.validation import HostKind, HostValidator

from conftest import assert_err, assert_ok


@pytest.mark.parametrize("text, kind, host, port, local", [
    ("example.com", HostKind.DOMAIN, "example.com", None, False),
    ("example.com:443", HostKind.DOMAIN, "example.com", 443, False),
    ("localhost", HostKind.DOMAIN, "localhost", None, True),
    ("8.8.8.8:53", HostKind.IPV4, "8.8.8.8", 53, False),
    ("127.0.0.1", HostKind.IPV4, "127.0.0.1", None, True),
    ("::1", HostKind.IPV6, "::1", None, True),
    ("[::1]", HostKind.IPV6, "::1", None, True),
    ("[2606:4700::1111]:8443", HostKind.IPV6, "2606:4700::1111", 8443, False),
])
def test_host_kinds(text, kind, host, port, local):
    value = assert_ok(HostValidator().parse_str(text))
    assert value.kind is kind
    assert value.host == host
    assert value.port == port
    assert value.is_local is local


def test_uri_authority_string_brackets_ipv6():
    assert str(assert_ok(HostValidator().parse_str("[::1]:80"))) == "[::1]:80"
    assert assert_ok(HostValidator().parse_str("::1")).to_uri_authority_string() == "[::1]"
    assert assert_ok(HostValidator().parse_str("example.com:80")).to_uri_authority_string() == "example.com:80"


def test_address_property():
    assert assert_ok(HostValidator().parse_str("[::1]")).address == IPv6Address("::1")
    assert assert_ok(HostValidator().parse_str("example.com")).address is None


@pytest.mark.parametrize("text", [
    "",
    "example.com.",
    "127.0.0.1.",
    "[::1",
    "[::1]x",
    "[::1]:",
    "[::1]:70000",
    "[fe80::1%eth0]",
    "[127.0.0.1]",
    "exa mple.com",
])
def test_rejects_malformed(text):
    assert_err(HostValidator().parse_str(text), ErrorCode.E2002_INVALID_FORMAT, "invalid domain or IP")


def test_bare_ipv6_never_has_a_port():
    assert_err(HostValidator(port=TriAllow.MUST).parse_str("::1"), ErrorCode.E2052_PORT_MUST)
    assert_ok(HostValidator(port=TriAllow.MUST).parse_str("[::1]:22"))


def test_port_gates():
    assert_err(HostValidator(port=TriAllow.MUST).parse_str("[::1]"), ErrorCode.E2052_PORT_MUST)
    assert_err(HostValidator(port=TriAllow.DISALLOW).parse_str("[::1]:22"), ErrorCode.E2053_PORT_DISALLOW)
    assert_err(HostValidator(port=TriAllow.DISALLOW).parse_str("example.com:22"), ErrorCode.E2053_PORT_DISALLOW)


def test_ip_hosts_fail_single_label_only_gate():
    validator = HostValidator(at_least_two_labels=TriAllow.DISALLOW)
    assert_ok(validator.parse_str("intranet"))
    for text in ("::1", "[::1]", "10.0.0.1"):
        assert_err(validator.parse_str(text), ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW)


def test_local_gates():
    assert_err(HostValidator(local=TriAllow.DISALLOW).parse_str("[fd00::1]"), ErrorCode.E2051_LOCAL_DISALLOW)
    assert_err(HostValidator(local=TriAllow.MUST).parse_str("example.com"), ErrorCode.E2050_LOCAL_MUST)
    assert_ok(HostValidator(local=TriAllow.MUST).parse_str("localhost:8000"))

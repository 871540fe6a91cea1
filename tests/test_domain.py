import pytest
from structlog.testing import capture_logs

from textgate.errors import ErrorCode, PolicyConflictError
from textgate.policy import TriAllow
from textgate.validation import DomainValidator

from conftest import assert_err, assert_ok


def test_plain_domain():
    domain = assert_ok(DomainValidator().parse_str("example.com"))
    assert domain.domain == "example.com"
    assert domain.port is None
    assert not domain.is_ipv4
    assert not domain.is_local
    assert not domain.is_fully_qualified()


def test_trailing_dot_is_fully_qualified():
    domain = assert_ok(DomainValidator().parse_str("example.com."))
    assert domain.is_fully_qualified()
    assert domain.domain == "example.com."
    assert domain.domain_non_fully_qualified == "example.com"
    assert domain.to_uri_authority_string() == "example.com"


def test_port_and_authority():
    domain = assert_ok(DomainValidator().parse_str("example.com:8080"))
    assert domain.port == 8080
    assert domain.to_uri_authority_string() == "example.com:8080"
    assert str(domain) == "example.com:8080"


def test_idna_ascii_form():
    domain = assert_ok(DomainValidator().parse_str("中文.com"))
    assert domain.domain == "xn--fiq228c.com"
    assert assert_ok(DomainValidator().parse_str("Example.COM")).domain == "example.com"
    assert not assert_ok(DomainValidator().parse_str("臺灣.tw")).is_local


@pytest.mark.parametrize("text", ["localhost", "LOCALHOST", "localhost.", "localhost:80"])
def test_localhost_is_local(text):
    assert assert_ok(DomainValidator().parse_str(text)).is_local


@pytest.mark.parametrize("text, local", [
    ("127.0.0.1", True),
    ("127.0.0.1.", True),
    ("192.168.1.1:22", True),
    ("8.8.8.8", False),
    ("168.17.212.1", False),
])
def test_ipv4_literals(text, local):
    domain = assert_ok(DomainValidator().parse_str(text))
    assert domain.is_ipv4
    assert domain.is_local is local


@pytest.mark.parametrize("text", [
    "",
    ":80",
    "example.com:",
    "example.com:65536",
    "example.com:8o",
    "exa mple.com",
    "a..b",
    ".example.com",
    "-example.com",
    "under_score.com",
    "a" * 64 + ".com",
])
def test_rejects_malformed(text):
    assert_err(DomainValidator().parse_str(text), ErrorCode.E2002_INVALID_FORMAT, "invalid domain")


def test_port_gates():
    assert_err(DomainValidator(port=TriAllow.MUST).parse_str("example.com"), ErrorCode.E2052_PORT_MUST,
        "port not found")
    assert_err(DomainValidator(port=TriAllow.DISALLOW).parse_str("example.com:80"), ErrorCode.E2053_PORT_DISALLOW,
        "port not allowed")
    assert_ok(DomainValidator(port=TriAllow.MUST).parse_str("example.com:0"))


def test_ipv4_gates():
    assert_err(DomainValidator(ipv4=TriAllow.MUST).parse_str("example.com"), ErrorCode.E2054_IPV4_MUST,
        "must use an IPv4")
    assert_err(DomainValidator(ipv4=TriAllow.DISALLOW).parse_str("1.2.3.4"), ErrorCode.E2055_IPV4_DISALLOW,
        "must not use an IPv4")


def test_local_gates():
    assert_err(DomainValidator(local=TriAllow.MUST).parse_str("example.com"), ErrorCode.E2050_LOCAL_MUST)
    assert_err(DomainValidator(local=TriAllow.DISALLOW).parse_str("localhost"), ErrorCode.E2051_LOCAL_DISALLOW,
        "must not be local")
    assert_err(DomainValidator(local=TriAllow.DISALLOW).parse_str("10.0.0.1"), ErrorCode.E2051_LOCAL_DISALLOW)


def test_label_gates():
    must = DomainValidator(at_least_two_labels=TriAllow.MUST)
    assert_err(must.parse_str("intranet"), ErrorCode.E2058_AT_LEAST_TWO_LABELS_MUST,
        "must have at least two labels")
    assert_err(must.parse_str("intranet."), ErrorCode.E2058_AT_LEAST_TWO_LABELS_MUST)
    assert_ok(must.parse_str("localhost"))

    disallow = DomainValidator(at_least_two_labels=TriAllow.DISALLOW)
    assert_ok(disallow.parse_str("intranet"))
    assert_err(disallow.parse_str("example.com"), ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW,
        "must have only one label")
    assert_err(disallow.parse_str("1.2.3.4"), ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW)


def test_conflict_raises_at_construction():
    with pytest.raises(PolicyConflictError) as exc_info:
        DomainValidator(ipv4=TriAllow.MUST, at_least_two_labels=TriAllow.DISALLOW)
    assert exc_info.value.code is ErrorCode.E9004_POLICY_CONFLICT
    assert "cannot be used together" in str(exc_info.value)


def test_conflict_allowed_rejects_at_runtime():
    with capture_logs() as logs:
        validator = DomainValidator(ipv4=TriAllow.MUST, at_least_two_labels=TriAllow.DISALLOW,
            conflict=TriAllow.ALLOW)
    assert any(e["event"] == "policy_conflict_deferred" and e["log_level"] == "warning" for e in logs)

    assert_err(validator.parse_str("example.com"), ErrorCode.E2054_IPV4_MUST)
    assert_err(validator.parse_str("1.2.3.4"), ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW)


def test_validators_are_values():
    assert DomainValidator(port=TriAllow.MUST) == DomainValidator(port=TriAllow.MUST)
    assert hash(DomainValidator()) == hash(DomainValidator())

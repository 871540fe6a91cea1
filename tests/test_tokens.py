import uuid

import pytest

from textgate.errors import ErrorCode
from textgate.policy import CaseOption, SeparatorOption
from textgate.validation import MacAddressValidator, UuidValidator

from conftest import assert_err, assert_ok

INVALID = ErrorCode.E2002_INVALID_FORMAT


@pytest.mark.parametrize("text", ["00:1a:2B:3c:4d:5e", "001a2b3c4d5e", "FF:FF:FF:FF:FF:FF"])
def test_mac_default_policy(text):
    assert_ok(MacAddressValidator().parse_str(text))


@pytest.mark.parametrize("text", [
    "",
    "00:1a:2b:3c:4d",
    "00:1a:2b:3c:4d:5e:6f",
    "00-1a-2b-3c-4d-5e",
    "00:1a-2b:3c:4d:5e",
    "001a:2b3c:4d5e",
    "00:1a:2b:3c:4d:5g",
    "001a2b3c4d5",
])
def test_mac_rejects(text):
    assert_err(MacAddressValidator().parse_str(text), INVALID, "invalid mac address")


def test_mac_value():
    mac = assert_ok(MacAddressValidator().parse_str("00:1A:2b:3C:4d:5E"))
    assert mac.to_bytes() == bytes([0x00, 0x1A, 0x2B, 0x3C, 0x4D, 0x5E])
    assert mac.to_string() == "00:1A:2b:3C:4d:5E"

    lower = assert_ok(MacAddressValidator(case=CaseOption.LOWER, separator=SeparatorOption.must("-"))
        .parse_str("00-1a-2b-3c-4d-5e"))
    assert str(lower) == "00-1a-2b-3c-4d-5e"


def test_mac_separator_policies():
    must = MacAddressValidator(separator=SeparatorOption.must(":"))
    assert_ok(must.parse_str("00:1a:2b:3c:4d:5e"))
    assert_err(must.parse_str("001a2b3c4d5e"), ErrorCode.E2032_SEPARATOR_MUST, "separators not found")

    disallow = MacAddressValidator(separator=SeparatorOption.disallow())
    assert_ok(disallow.parse_str("001a2b3c4d5e"))
    assert_err(disallow.parse_str("00:1a:2b:3c:4d:5e"), ErrorCode.E2033_SEPARATOR_DISALLOW, "separators not allowed")
    assert str(assert_ok(disallow.parse_str("001A2B3C4D5E"))) == "001A2B3C4D5E"


def test_mac_case_policies():
    assert_err(MacAddressValidator(case=CaseOption.LOWER).parse_str("00:1A:2b:3c:4d:5e"), INVALID)
    assert_err(MacAddressValidator(case=CaseOption.UPPER).parse_str("00:1A:2b:3c:4d:5e"), INVALID)
    assert_ok(MacAddressValidator(case=CaseOption.UPPER).parse_str("00:1A:2B:3C:4D:5E"))


def test_uuid():
    text = "67e55044-10b1-426f-9247-bb680e5fe0c8"
    value = assert_ok(UuidValidator().parse_str(text))
    assert value.to_uuid() == uuid.UUID(text)
    assert value.to_string() == text

    compact = assert_ok(UuidValidator().parse_str("67e5504410b1426f9247bb680e5fe0c8"))
    assert compact.to_string() == text


def test_uuid_rejects():
    assert_err(UuidValidator().parse_str("67e55044:10b1:426f:9247:bb680e5fe0c8"), INVALID, "invalid uuid")
    assert_err(UuidValidator().parse_str("67e55044-10b1-426f-9247"), INVALID)
    assert_err(UuidValidator().parse_str("{67e55044-10b1-426f-9247-bb680e5fe0c8}"), INVALID)
    assert_err(UuidValidator(separator=SeparatorOption.must("-")).parse_str("67e5504410b1426f9247bb680e5fe0c8"),
        ErrorCode.E2032_SEPARATOR_MUST)
    assert_err(UuidValidator(separator=SeparatorOption.disallow()).parse_str("67e55044-10b1-426f-9247-bb680e5fe0c8"),
        ErrorCode.E2033_SEPARATOR_DISALLOW)

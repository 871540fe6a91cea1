"""validate_str and parse_str must reach the same verdict for every kind."""
import pytest

from textgate.validation import KINDS

CORPUS = [
    "", " ", "\n", "0", "1", "12", "-065.00", "1e3", "65.5", "nan", "inf", "yes", "off",
    "QQ==", "QR==", "aGVsbG8", "aGVsbG8=", "__8", "-_-_", "ME======", "MF======", "MFRGGZDF", "mfrggzdf",
    "example.com", "example.com.", "xn--nxasmq6b.com", "bücher.de", "localhost:80", "exa_mple.org",
    "127.0.0.1", "10.0.0.1:8080", "::1", "[::1]:8080", "[127.0.0.1]", "fe80::1%eth0",
    "a@example.com", "\"a b\"@example.org", "a.@example.com", "(note)a@[127.0.0.1]",
    "https://example.org/a?b#c", "ftp://example.org/pub", "http://[::1/", "urn:isbn:0451450523", "example:",
    "00:1a:2b:3c:4d:5e", "001A2B3C4D5E", "550e8400-e29b-41d4-a716-446655440000", "550E8400E29B41D4A716446655440000",
]
NATIVE = [0, 1, 7, -3, 2.5, 1e300, float("nan"), True, False, None, b"QQ==", ["QQ=="]]


@pytest.mark.parametrize("kind", sorted(KINDS))
def test_validate_str_agrees_with_parse_str(kind):
    validator = KINDS[kind]()
    for value in CORPUS + NATIVE:
        parsed, checked = validator.parse_str(value), validator.validate_str(value)
        assert parsed.is_ok() == checked.is_ok(), f"{kind}: {value!r}"
        if parsed.is_err():
            assert parsed.error.code is checked.error.code, f"{kind}: {value!r}"
        assert validator.is_valid(value) == parsed.is_ok()

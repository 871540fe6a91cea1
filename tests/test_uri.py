import pytest

from textgate.errors import ErrorCode
from textgate.validation import UriValidator

from conftest import assert_err, assert_ok


def test_full_uri_components():
    uri = assert_ok(UriValidator().parse_str("ssh://root@127.0.0.1:886/path/to?query=1#fragment"))
    assert uri.scheme == "ssh"
    assert uri.authority == "root@127.0.0.1:886"
    assert uri.user_info == "root"
    assert uri.host == "127.0.0.1"
    assert uri.port == 886
    assert uri.path == "/path/to"
    assert uri.query == "query=1"
    assert uri.fragment == "fragment"
    assert str(uri) == "ssh://root@127.0.0.1:886/path/to?query=1#fragment"


def test_components_are_offsets_into_the_text():
    text = "foo://example.com:8042/over/there?name=ferret#nose"
    uri = assert_ok(UriValidator().parse_str(text))
    start, end = uri.host_span
    assert text[start:end] == "example.com"
    assert uri.scheme_span == (0, 3)
    assert uri.path == "/over/there"
    assert uri.query == "name=ferret"
    assert uri.fragment == "nose"


def test_authority_without_path():
    uri = assert_ok(UriValidator().parse_str("https://example.com"))
    assert uri.host == "example.com"
    assert uri.port is None
    assert uri.user_info is None
    assert uri.path is None
    assert uri.query is None
    assert uri.fragment is None


def test_uri_without_authority():
    uri = assert_ok(UriValidator().parse_str("mailto:user@example.com"))
    assert uri.scheme == "mailto"
    assert uri.authority is None
    assert uri.host is None
    assert uri.path == "user@example.com"

    urn = assert_ok(UriValidator().parse_str("urn:example:animal:ferret:nose"))
    assert urn.path == "example:animal:ferret:nose"


def test_scheme_is_case_insensitive():
    uri = assert_ok(UriValidator().parse_str("HTTP://EXAMPLE.COM/A"))
    assert uri.scheme == "HTTP"
    assert uri.host == "EXAMPLE.COM"


@pytest.mark.parametrize("text", [
    "",
    "example.com",
    "h:path",
    "1http://example.com",
    "http://example.com:99999",
    "http://exa mple.com",
    "http://example.com/ä",
    "http://example.com/a\n",
    "http://example.com\n",
    "\nhttp://example.com",
])
def test_rejects(text):
    assert_err(UriValidator().parse_str(text), ErrorCode.E2010_INCORRECT_FORMAT, "incorrect URI format")

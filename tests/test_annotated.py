from typing import Annotated

import pytest
from pydantic import BaseModel, ValidationError

from textgate.policy import TriAllow
from textgate.validation import (
    Base64Str,
    BooleanFlag,
    Domain,
    DomainValidator,
    EmailAddress,
    FloatNumber,
    HostName,
    HttpUrlStr,
    PreciseInt,
    UriStr,
    Validated,
)


class Contact(BaseModel):
    email: EmailAddress
    site: UriStr
    server: HostName
    avatar: Base64Str | None = None


class Order(BaseModel):
    quantity: PreciseInt
    origin: Annotated[Domain, Validated(DomainValidator(port=TriAllow.DISALLOW))]


def test_fields_hold_parsed_values():
    contact = Contact.model_validate({
        "email": "(work)jane@Example.com",
        "site": "https://example.com/about",
        "server": "[::1]:8080",
        "avatar": "aGk=",
    })
    assert contact.email.local_part == "jane"
    assert contact.email.comment_before_local_part == "work"
    assert contact.site.path == "/about"
    assert contact.server.port == 8080
    assert contact.avatar.decode() == b"hi"


def test_serializes_canonical_text():
    contact = Contact(email="(work)jane@Example.com", site="https://example.com", server="localhost")
    assert contact.model_dump() == {
        "email": "jane@example.com",
        "site": "https://example.com",
        "server": "localhost",
        "avatar": None,
    }
    assert '"email":"jane@example.com"' in contact.model_dump_json()


def test_precise_int_accepts_text_and_ints():
    assert Order(quantity="065", origin="example.com").quantity.value == 65
    assert Order(quantity=7, origin="example.com").quantity.value == 7
    assert Order(quantity=7.0, origin="example.com").quantity.value == 7
    assert Order(quantity="065.00", origin="example.com").model_dump()["quantity"] == 65


def test_rejections_surface_the_display_text():
    with pytest.raises(ValidationError) as exc_info:
        Contact(email="not an email", site="https://example.com", server="localhost")
    assert "invalid email" in str(exc_info.value)

    with pytest.raises(ValidationError) as exc_info:
        Order(quantity="1e3", origin="example.com")
    assert "unprecise number" in str(exc_info.value)

    with pytest.raises(ValidationError) as exc_info:
        Order(quantity=7.5, origin="example.com")
    assert "unprecise number" in str(exc_info.value)

    with pytest.raises(ValidationError) as exc_info:
        Order(quantity="1", origin="example.com:80")
    assert "port not allowed" in str(exc_info.value)


def test_non_string_input_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        Contact(email=123, site="https://example.com", server="localhost")
    assert "Expected string, got int" in str(exc_info.value)


def test_json_schema_names_the_validator():
    schema = Order.model_json_schema()
    assert schema["properties"]["quantity"]["type"] == "integer"
    assert schema["properties"]["origin"]["x-validator"].startswith("domain[")
    assert "port=disallow" in schema["properties"]["origin"]["x-validator"]


class Endpoint(BaseModel):
    url: HttpUrlStr
    enabled: BooleanFlag
    weight: FloatNumber


def test_url_boolean_and_number_fields():
    endpoint = Endpoint(url="https://example.org/hook", enabled="yes", weight="0.5")
    assert endpoint.url.is_https
    assert endpoint.enabled is True
    assert endpoint.weight.value == 0.5
    assert endpoint.model_dump() == {"url": "https://example.org/hook", "enabled": True, "weight": 0.5}
    with pytest.raises(ValidationError, match="need to use `http` or `https` as a protocol"):
        Endpoint(url="ftp://example.org/", enabled=False, weight=1)


def test_json_schema_types():
    properties = Endpoint.model_json_schema()["properties"]
    assert properties["enabled"]["type"] == "boolean"
    assert properties["weight"]["type"] == "number"
    assert properties["url"]["x-validator"] == "http_url[local=allow]"

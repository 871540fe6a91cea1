"""Annotated Types for Pydantic Models

Wraps any validator as a Pydantic v2 Annotated marker, so model fields carry
the parsed value and serialize back to its canonical text.

Usage:
    from textgate.validation.annotated import EmailAddress, Validated, DomainName

    class Contact(BaseModel):
        email: EmailAddress
        site: DomainName
        backup: Annotated[Domain, Validated(DomainValidator(port=TriAllow.DISALLOW))]
"""
from __future__ import annotations

from typing import Annotated, Any, Callable

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import CoreSchema, core_schema

from textgate.errors import Err, Ok
from .base import Validator
from .boolean import BooleanValidator
from .domain import Domain, DomainValidator
from .email import Email, EmailValidator
from .encoding import Base32Validator, Base64UrlValidator, Base64Validator, Encoded
from .host import Host, HostValidator
from .http_url import HttpFtpUrlValidator, HttpUrl, HttpUrlValidator
from .numeric import Integer, IntegerValidator, Number, NumberValidator
from .tokens import MacAddress, MacAddressValidator, Uuid, UuidValidator
from .uri import Uri, UriValidator


class Validated:
    """Annotated marker running `validator.parse_str` on the field input."""
    __slots__ = ("validator", "serializer", "json_type")

    def __init__(self, validator: Validator, *, serializer: Callable[[Any], Any] = str, json_type: str = "string"):
        self.validator, self.serializer, self.json_type = validator, serializer, json_type

    def __get_pydantic_core_schema__(self, source_type: type, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(self.serializer),
        )

    def _validate(self, v: Any) -> Any:
        match self.validator.parse_str(v):
            case Ok(value):
                return value
            case Err(error):
                raise ValueError(error.message)

    def __get_pydantic_json_schema__(self, core_schema: CoreSchema, handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {"type": self.json_type, "x-validator": self.validator.constraint_name}


# ============================================================================
# Ready-made field types (default policies)
# ============================================================================

Base64Str = Annotated[Encoded, Validated(Base64Validator())]
Base64UrlStr = Annotated[Encoded, Validated(Base64UrlValidator())]
Base32Str = Annotated[Encoded, Validated(Base32Validator())]
DomainName = Annotated[Domain, Validated(DomainValidator())]
HostName = Annotated[Host, Validated(HostValidator())]
UriStr = Annotated[Uri, Validated(UriValidator())]
HttpUrlStr = Annotated[HttpUrl, Validated(HttpUrlValidator())]
HttpFtpUrlStr = Annotated[HttpUrl, Validated(HttpFtpUrlValidator())]
EmailAddress = Annotated[Email, Validated(EmailValidator())]
PreciseInt = Annotated[Integer, Validated(IntegerValidator(), serializer=int, json_type="integer")]
FloatNumber = Annotated[Number, Validated(NumberValidator(), serializer=float, json_type="number")]
BooleanFlag = Annotated[bool, Validated(BooleanValidator(), serializer=bool, json_type="boolean")]
MacAddressStr = Annotated[MacAddress, Validated(MacAddressValidator())]
UuidStr = Annotated[Uuid, Validated(UuidValidator())]

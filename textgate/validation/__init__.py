"""Text Validators

Every validator is an immutable policy bundle answering Result[T, AppError]:

    from textgate.policy import TriAllow
    from textgate.validation import EmailValidator

    validator = EmailValidator(at_least_two_labels=TriAllow.MUST)
    match validator.parse_str("admin@example.com"):
        case Ok(email):
            send(email.to_email_string())
        case Err(error):
            reject(error.message)

Modules:
- encoding: Base64 / Base64-URL / Base32 under a padding policy, with decoding
- domain, host, uri, email, ip: structured addresses with locality gates
- http_url: http(s) and ftp URLs over the host grammar
- numeric: precise integer literals and float numbers
- boolean: yes/no words
- tokens: MAC addresses and UUIDs with separator policies
- annotated: Pydantic field types
- options: declarative (dict / YAML) construction
"""

from .base import Validator, check_conflict

from .encoding import (
    Alphabet,
    BASE32,
    BASE64,
    BASE64_URL,
    Encoded,
    Decoded,
    scan_canonical,
    CanonicalEncodingValidator,
    DecodingValidator,
    Base64Validator,
    Base64UrlValidator,
    Base32Validator,
    Base64DecodedValidator,
    Base64UrlDecodedValidator,
    Base32DecodedValidator,
)

from .ip import IPAddress, IPv4Validator, IPv6Validator, IPValidator
from .domain import Domain, DomainValidator
from .host import Host, HostKind, HostValidator
from .uri import Uri, UriValidator
from .http_url import HttpFtpUrlValidator, HttpUrl, HttpUrlValidator, Protocol
from .email import Email, EmailValidator
from .numeric import Integer, IntegerValidator, Number, NumberValidator, UnsignedIntegerValidator
from .boolean import BooleanValidator
from .tokens import MacAddress, MacAddressValidator, Uuid, UuidValidator

from .annotated import (
    Validated,
    Base64Str,
    Base64UrlStr,
    Base32Str,
    DomainName,
    HostName,
    UriStr,
    HttpUrlStr,
    HttpFtpUrlStr,
    EmailAddress,
    PreciseInt,
    FloatNumber,
    BooleanFlag,
    MacAddressStr,
    UuidStr,
)

from .options import KINDS, ValidatorSpec, build_validator, load_validators

__all__ = [
    # Base
    "Validator",
    "check_conflict",
    # Encodings
    "Alphabet",
    "BASE32",
    "BASE64",
    "BASE64_URL",
    "Encoded",
    "Decoded",
    "scan_canonical",
    "CanonicalEncodingValidator",
    "DecodingValidator",
    "Base64Validator",
    "Base64UrlValidator",
    "Base32Validator",
    "Base64DecodedValidator",
    "Base64UrlDecodedValidator",
    "Base32DecodedValidator",
    # Addresses
    "IPAddress",
    "IPv4Validator",
    "IPv6Validator",
    "IPValidator",
    "Domain",
    "DomainValidator",
    "Host",
    "HostKind",
    "HostValidator",
    "Uri",
    "UriValidator",
    "HttpUrl",
    "HttpUrlValidator",
    "HttpFtpUrlValidator",
    "Protocol",
    "Email",
    "EmailValidator",
    # Numbers
    "Integer",
    "IntegerValidator",
    "UnsignedIntegerValidator",
    "Number",
    "NumberValidator",
    "BooleanValidator",
    # Tokens
    "MacAddress",
    "MacAddressValidator",
    "Uuid",
    "UuidValidator",
    # Pydantic
    "Validated",
    "Base64Str",
    "Base64UrlStr",
    "Base32Str",
    "DomainName",
    "HostName",
    "UriStr",
    "HttpUrlStr",
    "HttpFtpUrlStr",
    "EmailAddress",
    "PreciseInt",
    "FloatNumber",
    "BooleanFlag",
    "MacAddressStr",
    "UuidStr",
    # Declarative
    "KINDS",
    "ValidatorSpec",
    "build_validator",
    "load_validators",
]

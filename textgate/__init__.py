"""textgate: policy-driven validators for encoded text, addresses and numbers."""

__version__ = "0.1.0"

from textgate.errors import AppError, AppErrorException, Err, ErrorCode, Ok, PolicyConflictError, Result
from textgate.policy import BiAllow, CaseOption, RangeOption, SeparatorOption, TriAllow
from textgate.validation import (
    Base32DecodedValidator,
    Base32Validator,
    Base64DecodedValidator,
    Base64UrlDecodedValidator,
    Base64UrlValidator,
    Base64Validator,
    BooleanValidator,
    DomainValidator,
    EmailValidator,
    HostValidator,
    HttpFtpUrlValidator,
    HttpUrlValidator,
    IntegerValidator,
    IPv4Validator,
    IPv6Validator,
    IPValidator,
    MacAddressValidator,
    NumberValidator,
    UnsignedIntegerValidator,
    UriValidator,
    UuidValidator,
    Validator,
    build_validator,
    load_validators,
)

__all__ = [
    "__version__",
    "AppError",
    "AppErrorException",
    "Err",
    "ErrorCode",
    "Ok",
    "PolicyConflictError",
    "Result",
    "BiAllow",
    "CaseOption",
    "RangeOption",
    "SeparatorOption",
    "TriAllow",
    "Base32DecodedValidator",
    "Base32Validator",
    "Base64DecodedValidator",
    "Base64UrlDecodedValidator",
    "Base64UrlValidator",
    "Base64Validator",
    "BooleanValidator",
    "DomainValidator",
    "EmailValidator",
    "HostValidator",
    "HttpFtpUrlValidator",
    "HttpUrlValidator",
    "IntegerValidator",
    "IPv4Validator",
    "IPv6Validator",
    "IPValidator",
    "MacAddressValidator",
    "NumberValidator",
    "UnsignedIntegerValidator",
    "UriValidator",
    "UuidValidator",
    "Validator",
    "build_validator",
    "load_validators",
]

"""HTTP(S) and FTP URL Validators

Absolute web URLs: a scheme from a fixed set, an authority whose host goes
through HostValidator (so IDNA, IPv6 brackets, ports and locality behave as
they do everywhere else), then path, query and fragment as written.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar
from urllib.parse import urlsplit

from textgate.errors import AppError, Err, Ok, Result, incorrect_format, preview, unsupported_protocol
from textgate.policy import TriAllow
from .base import Validator
from .host import Host, HostValidator


class Protocol(str, Enum):
    HTTP = "http"
    HTTPS = "https"
    FTP = "ftp"


@dataclass(frozen=True, slots=True)
class HttpUrl:
    """Validated URL. `host` is normalised; the other parts are as written."""
    text: str
    protocol: Protocol
    host: Host
    user_info: str | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    @property
    def is_https(self) -> bool: return self.protocol is Protocol.HTTPS

    @property
    def is_local(self) -> bool: return self.host.is_local

    def __str__(self) -> str: return self.text


def _has_control(text: str) -> bool:
    return any(c <= " " or c == "\x7f" for c in text)


@dataclass(frozen=True, slots=True)
class HttpUrlValidator(Validator[HttpUrl]):
    """`http` / `https` URL with a locality policy."""
    local: TriAllow = TriAllow.ALLOW

    name = "http_url"
    protocols: ClassVar[tuple[Protocol, ...]] = (Protocol.HTTP, Protocol.HTTPS)

    @property
    def constraint_name(self) -> str:
        return f"{self.name}[local={self.local.value}]"

    def _protocol(self, text: str) -> Protocol | None:
        scheme, colon, _ = text.partition(":")
        if colon:
            for protocol in self.protocols:
                if scheme.lower() == protocol.value:
                    return protocol
        return None

    def _parse(self, text: str) -> Result[HttpUrl, AppError]:
        if (protocol := self._protocol(text)) is None:
            return unsupported_protocol([p.value for p in self.protocols], validator=self.name, value=text)
        if _has_control(text):
            return incorrect_format("URL", validator=self.name, value=text)

        try:
            parts = urlsplit(text)
        except ValueError:
            return incorrect_format("URL", validator=self.name, value=text)

        user_info, at, host_text = parts.netloc.rpartition("@")
        if not host_text or ("[" not in host_text and host_text.count(":") > 1):
            return incorrect_format("URL", validator=self.name, value=text)

        match HostValidator(local=self.local).parse_str(host_text):
            case Ok(host):
                pass
            case Err(error):
                return Err(error.with_metadata(validator=self.name, value=preview(text)))

        return Ok(HttpUrl(
            text=text,
            protocol=protocol,
            host=host,
            user_info=user_info if at else None,
            path=parts.path,
            query=parts.query if "?" in text.partition("#")[0] else None,
            fragment=parts.fragment if "#" in text else None,
        ))


class HttpFtpUrlValidator(HttpUrlValidator):
    """`http`, `https` or `ftp` URL with a locality policy."""
    name = "http_ftp_url"
    protocols: ClassVar[tuple[Protocol, ...]] = (Protocol.HTTP, Protocol.HTTPS, Protocol.FTP)

"""URI Validator

One case-insensitive pattern decomposes the whole string. Every component is
stored as a (start, end) offset pair into the original text; accessors slice
on demand, so a Uri holds exactly one string however many fields it has.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from textgate.errors import AppError, Ok, Result, incorrect_format
from .base import Validator
from .net import MAX_PORT

Span = tuple[int, int]

_UNRESERVED = r"[a-z0-9._~-]|%[a-f0-9]|[!$&'()*+,;=:@]"

# Groups: 1 scheme, 2 authority, 3 user-info, 4 host, 5 port, 6 path, 7 query, 8 fragment
URI_PATTERN = re.compile(
    r"([a-z][a-z0-9+.-]+):"
    r"(//([^@]+@)?([a-z0-9._~-]+)(:[0-9]{1,5})?)?"
    rf"((?:{_UNRESERVED})+(?:/(?:{_UNRESERVED})*)*|(?:/(?:{_UNRESERVED})+)*)?"
    rf"(\?(?:{_UNRESERVED}|[/?])+)?"
    rf"(#(?:{_UNRESERVED}|[/?])+)?",
    re.IGNORECASE | re.ASCII,
)


@dataclass(frozen=True, slots=True)
class Uri:
    """Validated URI: the full text plus component offsets."""
    text: str
    scheme_span: Span
    authority_span: Span | None = None
    user_info_span: Span | None = None
    host_span: Span | None = None
    port: int | None = None
    path_span: Span | None = None
    query_span: Span | None = None
    fragment_span: Span | None = None

    def _slice(self, span: Span | None) -> str | None:
        return None if span is None else self.text[span[0]:span[1]]

    @property
    def scheme(self) -> str: return self.text[self.scheme_span[0]:self.scheme_span[1]]

    @property
    def authority(self) -> str | None: return self._slice(self.authority_span)

    @property
    def user_info(self) -> str | None: return self._slice(self.user_info_span)

    @property
    def host(self) -> str | None: return self._slice(self.host_span)

    @property
    def path(self) -> str | None: return self._slice(self.path_span)

    @property
    def query(self) -> str | None: return self._slice(self.query_span)

    @property
    def fragment(self) -> str | None: return self._slice(self.fragment_span)

    def __str__(self) -> str: return self.text


def _span(match: re.Match, group: int, *, skip_start: int = 0, skip_end: int = 0) -> Span | None:
    start, end = match.span(group)
    if start < 0:
        return None
    return start + skip_start, end - skip_end


class UriValidator(Validator[Uri]):
    """Generic URI decomposition (scheme ":" ["//" authority] path ["?" query] ["#" fragment])."""
    name = "uri"

    def _parse(self, text: str) -> Result[Uri, AppError]:
        if (m := URI_PATTERN.fullmatch(text)) is None:
            return incorrect_format("URI", validator=self.name, value=text)

        port = None
        if (port_span := _span(m, 5, skip_start=1)) is not None:
            port = int(text[port_span[0]:port_span[1]])
            if port > MAX_PORT:
                return incorrect_format("URI", validator=self.name, value=text)

        path_span = _span(m, 6)
        if path_span is not None and path_span[0] == path_span[1]:
            path_span = None

        return Ok(Uri(
            text=text,
            scheme_span=m.span(1),
            authority_span=_span(m, 2, skip_start=2),
            user_info_span=_span(m, 3, skip_end=1),
            host_span=_span(m, 4),
            port=port,
            path_span=path_span,
            query_span=_span(m, 7, skip_start=1),
            fragment_span=_span(m, 8, skip_start=1),
        ))

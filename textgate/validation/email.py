"""Email Validator

Grammar:
    [(comment)] local-part [(comment)] "@" [(comment)] domain-part [(comment)]

- local-part: dot-atom, or a quoted string with backslash escapes
- domain-part: IDNA domain name (no trailing dot), "[a.b.c.d]" or "[IPv6:...]"

Limits: 64 bytes of local part, 255 bytes of domain part, 320 bytes total.
"""
from __future__ import annotations

from dataclasses import dataclass

from textgate.errors import AppError, ErrorCode, Ok, Result, gate, invalid
from textgate.policy import BiAllow, TriAllow
from .base import Validator, check_conflict
from .host import Host, HostKind
from .net import (
    is_at_least_two_labels_domain, is_local_domain, is_local_ipv4, is_local_ipv6,
    parse_ipv4, parse_ipv6, to_ascii_domain,
)

MAX_LENGTH = 320
MAX_LOCAL_PART_LENGTH = 64
MAX_DOMAIN_PART_LENGTH = 255

ATEXT = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789!#$%&'*+-/=?^_`{|}~")
# Allowed inside quotes only when escaped.
SPECIALS = frozenset('(),:;<>@[]"')
QUOTED_WHITESPACE = frozenset(" \t")


def _utf8_length(text: str) -> int: return len(text.encode("utf-8"))


class _Reject(Exception):
    """Internal short-circuit carrying the rejection code."""

    def __init__(self, code: ErrorCode = ErrorCode.E2002_INVALID_FORMAT):
        super().__init__(code.name)
        self.code = code


@dataclass(frozen=True, slots=True)
class Email:
    """Validated email address split into its parts."""
    local_part: str
    need_quoted: bool
    domain_part: Host
    comment_before_local_part: str | None = None
    comment_after_local_part: str | None = None
    comment_before_domain_part: str | None = None
    comment_after_domain_part: str | None = None
    is_local: bool = False

    def to_email_string(self) -> str:
        """Canonical address: comments dropped, quotes only where required."""
        local = f'"{self.local_part}"' if self.need_quoted else self.local_part
        match self.domain_part.kind:
            case HostKind.IPV4:
                domain = f"[{self.domain_part.host}]"
            case HostKind.IPV6:
                domain = f"[IPv6:{self.domain_part.host}]"
            case _:
                domain = self.domain_part.host
        return f"{local}@{domain}"

    def __str__(self) -> str: return self.to_email_string()


@dataclass(frozen=True, slots=True)
class EmailValidator(Validator[Email]):
    """Email address under comment/ip/local/label/non-ASCII gates.

    `ip=MUST` with `at_least_two_labels=DISALLOW` rejects every input; with
    the default `conflict=DISALLOW` that pairing raises PolicyConflictError.
    """
    comment: BiAllow = BiAllow.ALLOW
    ip: TriAllow = TriAllow.ALLOW
    local: TriAllow = TriAllow.ALLOW
    at_least_two_labels: TriAllow = TriAllow.ALLOW
    non_ascii: BiAllow = BiAllow.ALLOW
    conflict: TriAllow = TriAllow.DISALLOW

    name = "email"

    def __post_init__(self) -> None:
        check_conflict(self.name, ("ip", self.ip), ("at_least_two_labels", self.at_least_two_labels), self.conflict)

    @property
    def constraint_name(self) -> str:
        return (f"{self.name}[comment={self.comment.value},ip={self.ip.value},local={self.local.value},"
                f"at_least_two_labels={self.at_least_two_labels.value},non_ascii={self.non_ascii.value}]")

    def _parse(self, text: str) -> Result[Email, AppError]:
        try:
            return Ok(self._scan(text))
        except _Reject as rejection:
            if rejection.code is ErrorCode.E2002_INVALID_FORMAT:
                return invalid("email", validator=self.name, value=text)
            return gate(rejection.code, validator=self.name, value=text)

    # ------------------------------------------------------------------
    # Scanner
    # ------------------------------------------------------------------

    def _comment(self, text: str, start: int, *, limit: int | None = None) -> tuple[str, int]:
        """Read "(...)" at `start`; returns the comment and the index after ')'."""
        if self.comment.disallows():
            raise _Reject(ErrorCode.E2060_COMMENT_DISALLOW)
        close = text.find(")", start + 1)
        if close < 0 or (limit is not None and close - start - 1 > limit):
            raise _Reject()
        return text[start + 1:close], close + 1

    def _accepts_non_ascii(self, c: str) -> bool:
        return not c.isascii() and self.non_ascii.allows()

    def _unquoted(self, text: str, start: int) -> tuple[str, int]:
        first = text[start]
        if first not in ATEXT and not self._accepts_non_ascii(first):
            raise _Reject()
        last_dot = False
        for p in range(start + 1, len(text)):
            c = text[p]
            if c in "@(":
                if last_dot:
                    raise _Reject()
                return text[start:p], p
            if c == ".":
                if last_dot:
                    raise _Reject()
                last_dot = True
            elif c in ATEXT or self._accepts_non_ascii(c):
                last_dot = False
            else:
                raise _Reject()
        raise _Reject()

    def _quoted(self, text: str, start: int) -> tuple[str, bool, int]:
        """Read '"..."' at `start`; returns content, need_quoted, index after the quote."""
        need_quoted = escaping = last_dot = False
        for p in range(start + 1, len(text)):
            c = text[p]
            if c == "\\":
                need_quoted, escaping = True, not escaping
                continue
            if c == '"' and not escaping:
                content = text[start + 1:p]
                if not content:
                    raise _Reject()
                if content.startswith(".") or content.endswith("."):
                    need_quoted = True
                return content, need_quoted, p + 1
            if c == ".":
                need_quoted = need_quoted or last_dot
                last_dot = True
            elif c in QUOTED_WHITESPACE:
                need_quoted, last_dot = True, False
            elif c in SPECIALS:
                if not escaping:
                    raise _Reject()
                last_dot = False
            elif c in ATEXT or self._accepts_non_ascii(c):
                last_dot = False
            else:
                raise _Reject()
            escaping = False
        raise _Reject()

    def _domain_literal(self, text: str) -> tuple[Host, int]:
        if self.ip.disallows():
            raise _Reject(ErrorCode.E2057_IP_DISALLOW)
        if self.at_least_two_labels.disallows():
            raise _Reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW)
        if (close := text.find("]")) < 0:
            raise _Reject()
        inner = text[1:close]
        if inner.startswith("IPv6:"):
            if (v6 := parse_ipv6(inner[5:])) is None:
                raise _Reject()
            return Host(HostKind.IPV6, str(v6), None, is_local_ipv6(v6)), close + 1
        if (v4 := parse_ipv4(inner)) is None:
            raise _Reject()
        return Host(HostKind.IPV4, str(v4), None, is_local_ipv4(v4)), close + 1

    def _domain_name(self, text: str) -> tuple[Host, int]:
        if self.ip.must():
            raise _Reject(ErrorCode.E2056_IP_MUST)
        end = text.find("(")
        name = text if end < 0 else text[:end]
        if not name or name.endswith(".") or (domain := to_ascii_domain(name)) is None:
            raise _Reject()
        is_local = is_local_domain(domain)
        if not is_local:
            two_labels = is_at_least_two_labels_domain(domain)
            if self.at_least_two_labels.must() and not two_labels:
                raise _Reject(ErrorCode.E2058_AT_LEAST_TWO_LABELS_MUST)
            if self.at_least_two_labels.disallows() and two_labels:
                raise _Reject(ErrorCode.E2059_AT_LEAST_TWO_LABELS_DISALLOW)
        return Host(HostKind.DOMAIN, domain, None, is_local), len(name)

    def _scan(self, text: str) -> Email:
        length = len(text)
        if length == 0 or _utf8_length(text) > MAX_LENGTH:
            raise _Reject()

        pos, before_local = 0, None
        if text[0] == "(":
            before_local, pos = self._comment(text, 0, limit=MAX_LOCAL_PART_LENGTH - 2)
            if pos == length:
                raise _Reject()

        if text[pos] == '"':
            local_part, need_quoted, pos = self._quoted(text, pos)
            if pos == length:
                raise _Reject()
        else:
            (local_part, pos), need_quoted = self._unquoted(text, pos), False
        if _utf8_length(local_part) + (2 if need_quoted else 0) > MAX_LOCAL_PART_LENGTH:
            raise _Reject()

        after_local = None
        if text[pos] == "(":
            after_local, pos = self._comment(text, pos)
            if pos == length:
                raise _Reject()
        if text[pos] != "@" or pos + 1 == length:
            raise _Reject()

        rest = text[pos + 1:]
        if _utf8_length(rest) > MAX_DOMAIN_PART_LENGTH:
            raise _Reject()

        pos, before_domain = 0, None
        if rest[0] == "(":
            before_domain, pos = self._comment(rest, 0, limit=MAX_DOMAIN_PART_LENGTH - 2)
            if pos == len(rest):
                raise _Reject()
        rest = rest[pos:]

        match rest[0]:
            case "(":
                raise _Reject()
            case "[":
                host, consumed = self._domain_literal(rest)
            case _:
                host, consumed = self._domain_name(rest)

        if self.local.must() and not host.is_local:
            raise _Reject(ErrorCode.E2050_LOCAL_MUST)
        if self.local.disallows() and host.is_local:
            raise _Reject(ErrorCode.E2051_LOCAL_DISALLOW)

        after_domain, tail = None, rest[consumed:]
        if tail:
            if tail[0] != "(":
                raise _Reject()
            after_domain, end = self._comment(tail, 0)
            if end != len(tail):
                raise _Reject()

        return Email(
            local_part=local_part,
            need_quoted=need_quoted,
            domain_part=host,
            comment_before_local_part=before_local,
            comment_after_local_part=after_local,
            comment_before_domain_part=before_domain,
            comment_after_domain_part=after_domain,
            is_local=host.is_local,
        )

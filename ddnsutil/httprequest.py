"""A mutable HTTP request model that the API signers read and annotate."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import parse_qs, quote, unquote, urlsplit, urlunsplit

HEADER_AUTHORIZATION = "Authorization"

_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
)
_PATH_SAFE = "/:@!$&'()*+,;=~"


def _canonical_key(name: str) -> str:
    """Canonical MIME form of a header name, e.g. ``x-sdk-date`` -> ``X-Sdk-Date``."""
    if not name or any(char not in _TOKEN_CHARS for char in name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class HttpRequest:
    """An outgoing request: method, URL parts, multi-valued headers and a body."""

    def __init__(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        parts = urlsplit(url)
        self.method = method or "GET"
        self.scheme = parts.scheme
        self.host = parts.netloc.rpartition("@")[2]
        self.path = unquote(parts.path)
        self.raw_query = parts.query
        self.body = body
        self.headers: dict[str, list[str]] = {}
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    @property
    def url(self) -> str:
        """The request URL rebuilt from its current parts."""
        path = quote(self.path, safe=_PATH_SAFE)
        return urlunsplit((self.scheme, self.host, path, self.raw_query, ""))

    def get_header(self, name: str) -> str:
        """The first value of a header, or an empty string."""
        values = self.headers.get(_canonical_key(name))
        return values[0] if values else ""

    def set_header(self, name: str, value: str) -> None:
        """Replace all values of a header with one value."""
        self.headers[_canonical_key(name)] = [value]

    def add_header(self, name: str, value: str) -> None:
        """Append a value to a header."""
        self.headers.setdefault(_canonical_key(name), []).append(value)

    def query(self) -> dict[str, list[str]]:
        """The query string parsed into lists of values per key."""
        return parse_qs(self.raw_query, keep_blank_values=True)
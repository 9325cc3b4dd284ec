"""Request signing for the Huawei Cloud API gateway (SDK-HMAC-SHA256)."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone

from .httprequest import HEADER_AUTHORIZATION, HttpRequest
from .textutil import escape

BASIC_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
ALGORITHM = "SDK-HMAC-SHA256"
HEADER_X_DATE = "X-Sdk-Date"
HEADER_HOST = "host"
HEADER_CONTENT_SHA256 = "X-Sdk-Content-Sha256"

__all__ = [
    "ALGORITHM",
    "BASIC_DATE_FORMAT",
    "HEADER_AUTHORIZATION",
    "HEADER_CONTENT_SHA256",
    "HEADER_HOST",
    "HEADER_X_DATE",
    "Signer",
    "auth_header_value",
    "canonical_headers",
    "canonical_query_string",
    "canonical_request",
    "canonical_uri",
    "hex_encode_sha256_hash",
    "request_payload",
    "sign_string_to_sign",
    "signed_headers",
    "string_to_sign",
]


def _utc(when: datetime) -> datetime:
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def canonical_request(request: HttpRequest, signed_headers: list[str]) -> str:
    """Method, URI, query, headers, signed header list and payload hash, one per line."""
    payload_hash = request.get_header(HEADER_CONTENT_SHA256)
    if not payload_hash:
        payload_hash = hex_encode_sha256_hash(request_payload(request))
    return "\n".join(
        (
            request.method,
            canonical_uri(request),
            canonical_query_string(request),
            canonical_headers(request, signed_headers),
            ";".join(signed_headers),
            payload_hash,
        )
    )


def canonical_uri(request: HttpRequest) -> str:
    """The escaped path, always ending with a slash."""
    path = "/".join(escape(segment) for segment in request.path.split("/"))
    return path if path.endswith("/") else path + "/"


def canonical_query_string(request: HttpRequest) -> str:
    """Sorted, escaped query pairs; the request's query is rewritten to match."""
    query = request.query()
    pairs = [
        f"{escape(key)}={escape(value)}"
        for key in sorted(query)
        for value in sorted(query[key])
    ]
    request.raw_query = "&".join(pairs)
    return request.raw_query


def canonical_headers(request: HttpRequest, signed_headers: list[str]) -> str:
    """``name:value`` lines for the signed headers, each value trimmed."""
    lowered = {name.lower(): values for name, values in request.headers.items()}
    lines = []
    for key in signed_headers:
        values = [request.host] if key.lower() == HEADER_HOST else lowered.get(key, [])
        lines.extend(f"{key}:{value.strip()}" for value in sorted(values))
    return "\n".join(lines) + "\n"


def signed_headers(request: HttpRequest) -> list[str]:
    """The request's header names, lower-cased and sorted."""
    return sorted(name.lower() for name in request.headers)


def request_payload(request: HttpRequest) -> bytes:
    """The request body, or empty bytes when there is none."""
    return request.body or b""


def string_to_sign(canonical_request: str, when: datetime) -> str:
    """The algorithm, the UTC time and the hash of the canonical request."""
    digest = hashlib.sha256(canonical_request.encode("utf-8")).hexdigest()
    return f"{ALGORITHM}\n{_utc(when).strftime(BASIC_DATE_FORMAT)}\n{digest}"


def sign_string_to_sign(string_to_sign: str, signing_key: bytes) -> str:
    """Hex HMAC-SHA256 of the string to sign."""
    return hmac.new(signing_key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()


def hex_encode_sha256_hash(body: bytes | None) -> str:
    """Hex SHA-256 of the body; None counts as empty."""
    return hashlib.sha256(body or b"").hexdigest()


def auth_header_value(signature: str, access_key: str, signed_headers: list[str]) -> str:
    """The value of the Authorization header."""
    return (
        f"{ALGORITHM} Access={access_key}, "
        f"SignedHeaders={';'.join(signed_headers)}, Signature={signature}"
    )


def _parse_date(text: str) -> datetime | None:
    try:
        return datetime.strptime(text, BASIC_DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


@dataclass
class Signer:
    """Access key and secret used to sign requests."""

    key: str
    secret: str

    def sign(self, request: HttpRequest) -> None:
        """Set the date header if needed and the Authorization header."""
        date_header = request.get_header(HEADER_X_DATE)
        when = _parse_date(date_header) if date_header else None
        if when is None:
            when = datetime.now(timezone.utc)
            request.set_header(HEADER_X_DATE, when.strftime(BASIC_DATE_FORMAT))

        headers = signed_headers(request)
        canonical = canonical_request(request, headers)
        signature = sign_string_to_sign(
            string_to_sign(canonical, when), self.secret.encode("utf-8")
        )
        request.set_header(HEADER_AUTHORIZATION, auth_header_value(signature, self.key, headers))
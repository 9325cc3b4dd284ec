"""Request signing for the Volcengine TrafficRoute DNS API (HMAC-SHA256)."""

from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Mapping
from datetime import datetime, timezone

from .aliyun import encode_values
from .httprequest import HEADER_AUTHORIZATION, HttpRequest

VERSION = "2018-08-01"
SERVICE = "DNS"
REGION = "cn-north-1"
HOST = "open.volcengineapi.com"
CONTENT_TYPE = "application/json"
_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
_SIGNED_HEADERS = ";".join(("content-type", "host", "x-content-sha256", "x-date"))


def _hmac_sha256(key: bytes, content: str) -> bytes:
    return hmac.new(key, content.encode("utf-8"), hashlib.sha256).digest()


def _hash_sha256(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def traffic_route_signer(
    method: str,
    query: Mapping[str, list[str]],
    header: Mapping[str, str],
    ak: str,
    sk: str,
    action: str,
    body: bytes | None,
) -> HttpRequest:
    """Build a signed request for the given API action."""
    payload = body or b""
    request = HttpRequest(method, f"https://{HOST}/", body=payload)

    values: dict[str, list[str]] = {key: list(value) for key, value in query.items()}
    values["Action"] = [action]
    values["Version"] = [VERSION]
    request.raw_query = encode_values(values)
    for name, value in header.items():
        request.set_header(name, value)

    now = datetime.fromtimestamp(time.time(), timezone.utc)
    x_date = now.strftime(_DATE_FORMAT)
    short_date = x_date[:8]
    content_sha256 = _hash_sha256(payload)

    canonical_headers = "\n".join(
        (
            "content-type:" + CONTENT_TYPE,
            "host:" + request.host,
            "x-content-sha256:" + content_sha256,
            "x-date:" + x_date,
        )
    )
    canonical_request = "\n".join(
        (
            request.method,
            "/",
            request.raw_query,
            canonical_headers,
            "",
            _SIGNED_HEADERS,
            content_sha256,
        )
    )
    credential_scope = "/".join((short_date, REGION, SERVICE, "request"))
    string_to_sign = "\n".join(
        ("HMAC-SHA256", x_date, credential_scope, _hash_sha256(canonical_request.encode("utf-8")))
    )

    k_date = _hmac_sha256(sk.encode("utf-8"), short_date)
    k_region = _hmac_sha256(k_date, REGION)
    k_service = _hmac_sha256(k_region, SERVICE)
    k_signing = _hmac_sha256(k_service, "request")
    signature = _hmac_sha256(k_signing, string_to_sign).hex()
    authorization = (
        f"HMAC-SHA256 Credential={ak}/{credential_scope}, "
        f"SignedHeaders={_SIGNED_HEADERS}, Signature={signature}"
    )

    request.set_header("Host", request.host)
    request.set_header("Content-Type", CONTENT_TYPE)
    request.set_header("X-Date", x_date)
    request.set_header("X-Content-Sha256", content_sha256)
    request.set_header(HEADER_AUTHORIZATION, authorization)
    return request
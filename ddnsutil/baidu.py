"""Request signing for the Baidu Cloud (BCE) API, auth version 1."""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timezone

from .httprequest import HEADER_AUTHORIZATION, HttpRequest
from .huawei import canonical_uri

BAIDU_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
EXPIRATION_PERIOD = "1800"
# Only a few fixed POST endpoints are called, so the query and headers are constant.
_CANONICAL_HEADERS = "host:bcd.baidubce.com"


def hmac_sha256_hex(secret: str, message: str) -> str:
    """Hex HMAC-SHA256 of the message keyed with the secret."""
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def baidu_canonical_uri(request: HttpRequest) -> str:
    """The escaped path without a trailing slash."""
    return canonical_uri(request)[:-1]


def baidu_signer(access_key_id: str, access_secret: str, request: HttpRequest) -> None:
    """Set the Authorization header of the request."""
    timestamp = datetime.now(timezone.utc).strftime(BAIDU_DATE_FORMAT)
    prefix = f"bce-auth-v1/{access_key_id}/{timestamp}/{EXPIRATION_PERIOD}"
    canonical = f"{request.method}\n{baidu_canonical_uri(request)}\n\n{_CANONICAL_HEADERS}"

    signing_key = hmac_sha256_hex(access_secret, prefix)
    signature = hmac_sha256_hex(signing_key, canonical)
    request.set_header(HEADER_AUTHORIZATION, f"{prefix}/host/{signature}")
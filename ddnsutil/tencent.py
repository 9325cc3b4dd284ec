"""Request signing for the Tencent Cloud DNSPod API (TC3-HMAC-SHA256)."""

from __future__ import annotations

import hashlib
import hmac
import time
from datetime import datetime, timezone

from .httprequest import HEADER_AUTHORIZATION, HttpRequest
from .textutil import write_string

ALGORITHM = "TC3-HMAC-SHA256"
SERVICE = "dnspod"
HOST = write_string(SERVICE, ".tencentcloudapi.com")
SIGNED_HEADERS = "content-type;host;x-tc-action"
_REQUEST_SCOPE = "tc3_request"


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _hmac_sha256(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def tencent_cloud_signer(
    secret_id: str, secret_key: str, request: HttpRequest, action: str, payload: str
) -> None:
    """Add the Authorization, Host, X-TC-Action and X-TC-Timestamp headers."""
    timestamp = int(time.time())
    timestamp_str = str(timestamp)

    canonical_headers = write_string(
        "content-type:application/json\nhost:", HOST, "\nx-tc-action:", action.lower(), "\n"
    )
    canonical_request = write_string(
        "POST\n/\n\n", canonical_headers, "\n", SIGNED_HEADERS, "\n", _sha256_hex(payload)
    )

    date = datetime.fromtimestamp(timestamp, timezone.utc).strftime("%Y-%m-%d")
    credential_scope = write_string(date, "/", SERVICE, "/", _REQUEST_SCOPE)
    string_to_sign = write_string(
        ALGORITHM, "\n", timestamp_str, "\n", credential_scope, "\n", _sha256_hex(canonical_request)
    )

    secret_date = _hmac_sha256(("TC3" + secret_key).encode("utf-8"), date)
    secret_service = _hmac_sha256(secret_date, SERVICE)
    secret_signing = _hmac_sha256(secret_service, _REQUEST_SCOPE)
    signature = _hmac_sha256(secret_signing, string_to_sign).hex()

    authorization = write_string(
        ALGORITHM,
        " Credential=",
        secret_id,
        "/",
        credential_scope,
        ", SignedHeaders=",
        SIGNED_HEADERS,
        ", Signature=",
        signature,
    )

    request.add_header(HEADER_AUTHORIZATION, authorization)
    request.set_header("Host", HOST)
    request.set_header("X-TC-Action", action)
    request.add_header("X-TC-Timestamp", timestamp_str)
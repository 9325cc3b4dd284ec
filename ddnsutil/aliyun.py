"""Signing of Alibaba Cloud RPC-style API requests."""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import time
from collections.abc import Iterable, Mapping, MutableMapping
from datetime import datetime, timezone
from urllib.parse import quote_plus

_SIGN_METHODS = {
    "HMAC-SHA1": hashlib.sha1,
    "HMAC-SHA256": hashlib.sha256,
    "HMAC-MD5": hashlib.md5,
}
_SPECIAL_RE = re.compile(r"%7E|[%*/&=+]")
_SPECIAL = {
    "%7E": "~",
    "%": "%25",
    "*": "%2A",
    "/": "%2F",
    "&": "%26",
    "=": "%3D",
    "+": "%20",
}
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

Values = Mapping[str, "str | Iterable[str]"]


def _value_list(value: str | Iterable[str]) -> list[str]:
    return [value] if isinstance(value, str) else list(value)


def encode_values(values: Values) -> str:
    """Form-encode the values, sorted by key, keeping each key's value order."""
    return "&".join(
        f"{quote_plus(key, safe='')}={quote_plus(value, safe='')}"
        for key in sorted(values)
        for value in _value_list(values[key])
    )


def _special_url_encode(text: str) -> str:
    return _SPECIAL_RE.sub(lambda match: _SPECIAL[match.group(0)], text)


def _data_to_sign(http_method: str, values: Values) -> str:
    return f"{http_method}&{_special_url_encode('/')}&{_special_url_encode(encode_values(values))}"


def hmac_sign(sign_method: str, http_method: str, app_key_secret: str, values: Values) -> bytes:
    """HMAC of the string to sign; unknown methods fall back to HMAC-SHA1."""
    digest = _SIGN_METHODS.get(sign_method, hashlib.sha1)
    key = (app_key_secret + "&").encode("utf-8")
    return hmac.new(key, _data_to_sign(http_method, values).encode("utf-8"), digest).digest()


def hmac_sign_to_b64(sign_method: str, http_method: str, app_key_secret: str, values: Values) -> str:
    """The signature in standard base64."""
    return base64.b64encode(hmac_sign(sign_method, http_method, app_key_secret, values)).decode("ascii")


def aliyun_signer(
    access_key_id: str, access_secret: str, params: MutableMapping[str, list[str]]
) -> MutableMapping[str, list[str]]:
    """Add the common parameters and the signature to ``params`` and return it."""
    params["SignatureMethod"] = ["HMAC-SHA1"]
    params["SignatureNonce"] = [str(time.time_ns())]
    params["AccessKeyId"] = [access_key_id]
    params["SignatureVersion"] = ["1.0"]
    params["Timestamp"] = [datetime.now(timezone.utc).strftime(_TIMESTAMP_FORMAT)]
    params["Format"] = ["JSON"]
    params["Version"] = ["2015-01-09"]
    params["Signature"] = [hmac_sign_to_b64("HMAC-SHA1", "GET", access_secret, params)]
    return params
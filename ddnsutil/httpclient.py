"""HTTP clients with fixed timeouts and helpers for reading their responses."""

from __future__ import annotations

import json
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from .messages import log_str

TIMEOUT_SECONDS = 30
MAX_BODY_BYTES = 1024000
_CHUNK_SIZE = 65536

_IPV4_ANY = ("0.0.0.0", 0)
_IPV6_ANY = ("::", 0)


class _Settings:
    insecure_skip_verify: bool = False


_settings = _Settings()


class HTTPResponseError(Exception):
    """A response with a status code of 300 or above."""

    def __init__(self, body: bytes, status_code: int) -> None:
        self.body = body
        self.status_code = status_code
        text = body.decode("utf-8", errors="replace")
        super().__init__(log_str("返回内容: %s ,返回状态码: %d", text, status_code))


class _Client(requests.Session):
    """A session applying a default timeout and the global TLS setting."""

    def __init__(self, timeout: float = TIMEOUT_SECONDS) -> None:
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, *args, **kwargs):  # type: ignore[override]
        kwargs.setdefault("timeout", self.timeout)
        if _settings.insecure_skip_verify:
            kwargs["verify"] = False
        return super().request(method, url, *args, **kwargs)


class _BoundFamilyAdapter(HTTPAdapter):
    """Binds outgoing sockets to a wildcard address, restricting the IP family."""

    def __init__(self, source_address: tuple[str, int], **kwargs: Any) -> None:
        self._source_address = source_address
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["source_address"] = self._source_address
        super().init_poolmanager(connections, maxsize, block, **pool_kwargs)


def create_http_client() -> requests.Session:
    """A client honouring proxy settings from the environment."""
    return _Client()


def create_no_proxy_http_client(network: str) -> requests.Session:
    """A client without proxy or keep-alive, on IPv6 for ``tcp6`` and IPv4 otherwise."""
    client = _Client()
    client.trust_env = False
    client.headers["Connection"] = "close"
    source = _IPV6_ANY if network == "tcp6" else _IPV4_ANY
    adapter = _BoundFamilyAdapter(source)
    client.mount("http://", adapter)
    client.mount("https://", adapter)
    return client


def set_insecure_skip_verify() -> None:
    """Stop verifying TLS certificates in every client."""
    _settings.insecure_skip_verify = True


def _read_limited(response: requests.Response) -> bytes:
    buffer = bytearray()
    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
        buffer += chunk
        if len(buffer) >= MAX_BODY_BYTES:
            break
    return bytes(buffer[:MAX_BODY_BYTES])


def get_http_response_raw(response: requests.Response) -> bytes:
    """Read at most the body limit; raise HTTPResponseError for status 300 and above."""
    try:
        body = _read_limited(response)
    finally:
        response.close()
    if response.status_code >= 300:
        raise HTTPResponseError(body, response.status_code)
    return body


def get_http_response(response: requests.Response) -> Any:
    """Decode a JSON body; an empty body gives None."""
    body = get_http_response_raw(response)
    if not body:
        return None
    return json.loads(body)
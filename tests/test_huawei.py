import hashlib
import re
from datetime import datetime, timezone

from ddnsutil.httprequest import HttpRequest
from ddnsutil.huawei import (
    Signer,
    auth_header_value,
    canonical_headers,
    canonical_query_string,
    canonical_request,
    canonical_uri,
    hex_encode_sha256_hash,
    request_payload,
    sign_string_to_sign,
    signed_headers,
    string_to_sign,
)

WHEN = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _request():
    return HttpRequest(
        "GET",
        "https://dns.example.com/v2/zones?name=example.com&type=A",
        headers={"X-Sdk-Date": "20200102T030405Z", "Content-Type": "application/json"},
    )


def test_hex_hash_of_none_equals_empty():
    assert hex_encode_sha256_hash(None) == hex_encode_sha256_hash(b"")
    assert hex_encode_sha256_hash(b"") == hashlib.sha256(b"").hexdigest()


def test_request_payload():
    assert request_payload(HttpRequest("GET", "https://example.com/")) == b""
    assert request_payload(HttpRequest("POST", "https://example.com/", body=b"{}")) == b"{}"


def test_canonical_uri_escapes_and_adds_slash():
    assert canonical_uri(HttpRequest("GET", "https://example.com/a%20b")) == "/a%20b/"
    assert canonical_uri(HttpRequest("GET", "https://example.com")) == "/"
    assert canonical_uri(HttpRequest("GET", "https://example.com/v2/zones/")) == "/v2/zones/"


def test_canonical_query_string_sorts_and_rewrites():
    request = HttpRequest("GET", "https://example.com/?b=2&a=3&a=1")
    result = canonical_query_string(request)
    assert result == request.raw_query
    pairs = result.split("&")
    assert pairs == sorted(pairs)
    assert set(pairs) == {"a=1", "a=3", "b=2"}


def test_signed_headers_sorted_lowercase():
    request = HttpRequest("GET", "https://example.com/", headers={"X-B": "1", "Content-Type": "t"})
    assert signed_headers(request) == ["content-type", "x-b"]


def test_canonical_headers_uses_request_host_and_trims():
    request = HttpRequest("GET", "https://dns.example.com:8443/")
    request.add_header("X-A", "  b ")
    request.add_header("X-A", "a")
    result = canonical_headers(request, ["host", "x-a"])
    assert result == "host:dns.example.com:8443\nx-a:a\nx-a:b\n"


def test_canonical_request_structure():
    request = HttpRequest("POST", "https://example.com/v2/zones", body=b'{"a":1}')
    headers = signed_headers(request)
    lines = canonical_request(request, headers).split("\n")
    assert lines[0] == "POST"
    assert lines[1] == canonical_uri(request)
    assert lines[-1] == hex_encode_sha256_hash(b'{"a":1}')


def test_canonical_request_prefers_content_sha_header():
    request = HttpRequest("POST", "https://example.com/", body=b"data")
    request.set_header("X-Sdk-Content-Sha256", "UNSIGNED-PAYLOAD")
    text = canonical_request(request, signed_headers(request))
    assert text.split("\n")[-1] == "UNSIGNED-PAYLOAD"


def test_string_to_sign_lines():
    lines = string_to_sign("canonical", WHEN).split("\n")
    assert lines[0] == "SDK-HMAC-SHA256"
    assert lines[1] == "20200102T030405Z"
    assert lines[2] == hex_encode_sha256_hash(b"canonical")


def test_string_to_sign_naive_time_is_utc():
    naive = datetime(2020, 1, 2, 3, 4, 5)
    assert string_to_sign("x", naive) == string_to_sign("x", WHEN)


def test_sign_string_to_sign_is_hex_and_key_dependent():
    first = sign_string_to_sign("text", b"secret")
    assert re.fullmatch(r"[0-9a-f]{64}", first)
    assert sign_string_to_sign("text", b"other") != first


def test_auth_header_value_format():
    assert (
        auth_header_value("sig", "placeholder", ["a", "b"])
        == "SDK-HMAC-SHA256 Access=placeholder, SignedHeaders=a;b, Signature=sig"
    )


def test_sign_keeps_valid_date_and_sets_authorization():
    request = _request()
    Signer(key="placeholder", secret="secret").sign(request)

    twin = _request()
    headers = signed_headers(twin)
    canonical = canonical_request(twin, headers)
    signature = sign_string_to_sign(string_to_sign(canonical, WHEN), b"secret")

    assert request.get_header("X-Sdk-Date") == "20200102T030405Z"
    assert request.get_header("Authorization") == auth_header_value(signature, "placeholder", headers)


def test_sign_replaces_invalid_date():
    request = HttpRequest("GET", "https://example.com/", headers={"X-Sdk-Date": "garbage"})
    Signer(key="placeholder", secret="secret").sign(request)
    assert re.fullmatch(r"\d{8}T\d{6}Z", request.get_header("X-Sdk-Date"))
    assert request.get_header("Authorization").startswith("SDK-HMAC-SHA256 Access=placeholder, ")


def test_sign_without_date_adds_one():
    request = HttpRequest("GET", "https://example.com/")
    Signer(key="placeholder", secret="secret").sign(request)
    date = request.get_header("X-Sdk-Date")
    assert len(date) == 16
    assert date[8] == "T"
    assert date.endswith("Z")

    when = datetime.strptime(date, "%Y%m%dT%H%M%SZ").replace(tzinfo=timezone.utc)
    twin = HttpRequest("GET", "https://example.com/", headers={"X-Sdk-Date": date})
    headers = signed_headers(twin)
    signature = sign_string_to_sign(
        string_to_sign(canonical_request(twin, headers), when), b"secret"
    )
    assert request.get_header("Authorization") == auth_header_value(signature, "placeholder", headers)
import re
from unittest.mock import patch

from ddnsutil.httprequest import HttpRequest
from ddnsutil.tencent import tencent_cloud_signer

FIXED_TIME = 1704067200.5


def _signed(payload="{}", action="DescribeRecordList", secret_key="secret"):
    request = HttpRequest("POST", "https://dnspod.tencentcloudapi.com/")
    with patch("time.time", return_value=FIXED_TIME):
        tencent_cloud_signer("identifier", secret_key, request, action, payload)
    return request


def test_timestamp_header_is_whole_seconds():
    request = _signed()
    assert request.get_header("X-TC-Timestamp") == str(int(FIXED_TIME))


def test_host_and_action_headers():
    request = _signed(action="ModifyRecord")
    assert request.get_header("Host") == "dnspod.tencentcloudapi.com"
    assert request.get_header("X-TC-Action") == "ModifyRecord"


def test_authorization_layout():
    authorization = _signed().get_header("Authorization")
    prefix = (
        "TC3-HMAC-SHA256 Credential=identifier/2024-01-01/dnspod/tc3_request, "
        "SignedHeaders=content-type;host;x-tc-action, Signature="
    )
    assert authorization.startswith(prefix)
    assert re.fullmatch(r"[0-9a-f]{64}", authorization[len(prefix):])


def test_signature_is_deterministic_for_same_time():
    first = _signed().get_header("Authorization")
    second = _signed().get_header("Authorization")
    assert first == second


def test_signature_depends_on_payload_action_and_key():
    base = _signed().get_header("Authorization")
    assert _signed(payload='{"a":1}').get_header("Authorization") != base
    assert _signed(action="ModifyRecord").get_header("Authorization") != base
    assert _signed(secret_key="token").get_header("Authorization") != base


def test_signing_twice_appends_authorization_and_timestamp():
    request = HttpRequest("POST", "https://dnspod.tencentcloudapi.com/")
    with patch("time.time", return_value=FIXED_TIME):
        tencent_cloud_signer("identifier", "secret", request, "A", "{}")
        tencent_cloud_signer("identifier", "secret", request, "A", "{}")
    assert len(request.headers["Authorization"]) == 2
    assert len(request.headers["X-Tc-Timestamp"]) == 2
    assert request.headers["Host"] == ["dnspod.tencentcloudapi.com"]
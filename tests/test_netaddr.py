import pytest

from ddnsutil.netaddr import get_request_ip_str, is_private_network


@pytest.mark.parametrize(
    "addr, expected",
    [
        ("127.0.0.1", True),
        ("127.0.0.1:9876", True),
        ("[::1]", True),
        ("[::1]:9876", True),
        ("192.168.1.18:9876", True),
        ("172.16.1.18:9876", True),
        ("10.1.1.18:9876", True),
        ("[fe80::1]:9876", True),
        ("[fd00::1]:9876", True),
        ("100.0.0.1", False),
        ("100.0.0.1:9876", False),
        ("[2409::1]", False),
        ("[2409::1]:9876", False),
        ("223.5.5.5:9876", False),
    ],
)
def test_is_private_network(addr, expected):
    assert is_private_network(addr) is expected


def test_unclosed_bracket_is_not_private():
    assert is_private_network("[::1") is False


def test_garbage_is_not_private():
    assert is_private_network("not-an-ip:80") is False


def test_get_request_ip_str():
    headers = {"X-Real-IP": "10.0.0.1", "X-Forwarded-For": "10.0.0.2"}
    assert (
        get_request_ip_str("192.168.1.1", headers)
        == "Remote: 192.168.1.1 ,Real-IP: 10.0.0.1 ,Forwarded-For: 10.0.0.2"
    )


def test_get_request_ip_str_case_insensitive_and_partial():
    assert (
        get_request_ip_str("192.168.1.1", {"x-forwarded-for": "10.0.0.2"})
        == "Remote: 192.168.1.1 ,Forwarded-For: 10.0.0.2"
    )


def test_get_request_ip_str_no_headers():
    assert get_request_ip_str("192.168.1.1", {}) == "Remote: 192.168.1.1"
from unittest import mock

import pytest
import responses

from ddnsutil.httpclient import HTTPResponseError
from ddnsutil.release import (
    Asset,
    Latest,
    Release,
    asset_match_suffixes,
    detect_latest,
    find_asset,
    find_asset_for_arch,
    find_asset_from_release,
    generate_additional_arch,
    get_latest,
    get_suffixes,
    release_from_response,
)
from ddnsutil.semver import parse

REPO = "owner/repo"
API_URL = "https://api.github.com/repos/owner/repo/releases/latest"


def _platform(system, machine):
    return (
        mock.patch("platform.system", return_value=system),
        mock.patch("platform.machine", return_value=machine),
    )


@pytest.fixture
def linux_amd64():
    system_patch, machine_patch = _platform("Linux", "x86_64")
    with system_patch, machine_patch:
        yield


@pytest.fixture
def linux_arm64():
    system_patch, machine_patch = _platform("Linux", "aarch64")
    with system_patch, machine_patch:
        yield


def test_release_from_response_round_trip():
    data = {
        "tag_name": "v6.1.0",
        "assets": [
            {"name": "a.tar.gz", "browser_download_url": "https://downloads.example.com/a.tar.gz"},
            {"name": "b.zip", "browser_download_url": "https://downloads.example.com/b.zip"},
        ],
    }
    release = release_from_response(data)
    assert release.tag_name == data["tag_name"]
    assert [(a.name, a.url) for a in release.assets] == [
        (item["name"], item["browser_download_url"]) for item in data["assets"]
    ]


def test_release_from_empty_response():
    assert release_from_response(None) == Release("", ())
    assert release_from_response({}) == Release("", ())


def test_get_suffixes(linux_arm64):
    assert get_suffixes("arm64") == ["linux_arm64.zip", "linux_arm64.tar.gz"]


def test_generate_additional_arch_amd64(linux_amd64):
    assert generate_additional_arch() == ["x86_64"]


def test_generate_additional_arch_arm():
    system_patch, machine_patch = _platform("Linux", "armv6l")
    with system_patch, machine_patch:
        assert generate_additional_arch() == ["armv6", "armv5"]


def test_generate_additional_arch_other(linux_arm64):
    assert generate_additional_arch() == []


def test_asset_match_suffixes():
    suffixes = ["linux_amd64.zip", "linux_amd64.tar.gz"]
    assert asset_match_suffixes("tool_1.0_linux_amd64.tar.gz", suffixes)
    assert not asset_match_suffixes("tool_1.0_linux_arm64.tar.gz", suffixes)
    assert not asset_match_suffixes("anything", [])


def test_find_asset_from_release_none():
    assert find_asset_from_release(None, ["x"]) is None


def test_find_asset_from_release_invalid_tag():
    release = Release("nightly", (Asset("tool_linux_amd64.zip", "u"),))
    assert find_asset_from_release(release, ["linux_amd64.zip"]) is None


def test_find_asset_from_release_returns_version():
    asset = Asset("tool_linux_amd64.zip", "https://downloads.example.com/t.zip")
    release = Release("v2.3.4", (Asset("checksums.txt", "c"), asset))
    assert find_asset_from_release(release, ["linux_amd64.zip"]) == (asset, parse("v2.3.4"))


def test_find_asset_prefers_precise_arch(linux_amd64):
    generic = Asset("ddns-go_6.0.0_linux_amd64.tar.gz", "https://downloads.example.com/g")
    precise = Asset("ddns-go_6.0.0_linux_x86_64.tar.gz", "https://downloads.example.com/p")
    release = Release("v6.0.0", (generic, precise))
    assert find_asset(release) == (precise, parse("v6.0.0"))


def test_find_asset_falls_back_to_generic(linux_amd64):
    generic = Asset("ddns-go_6.0.0_linux_amd64.zip", "https://downloads.example.com/g")
    release = Release("v6.0.0", (generic,))
    assert find_asset(release) == (generic, parse("v6.0.0"))


def test_find_asset_for_arch_no_match(linux_arm64):
    release = Release("v6.0.0", (Asset("ddns-go_6.0.0_linux_amd64.zip", "u"),))
    assert find_asset_for_arch("arm64", release) is None
    assert find_asset(release) is None


def test_get_latest():
    payload = {
        "tag_name": "v6.1.0",
        "assets": [{"name": "x.zip", "browser_download_url": "https://downloads.example.com/x.zip"}],
    }
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, API_URL, json=payload, status=200)
        release = get_latest(REPO)
    assert release == Release("v6.1.0", (Asset("x.zip", "https://downloads.example.com/x.zip"),))


def test_get_latest_error_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, API_URL, body="missing", status=404)
        with pytest.raises(HTTPResponseError) as info:
            get_latest(REPO)
    assert info.value.status_code == 404


def test_detect_latest(linux_amd64):
    url = "https://downloads.example.com/ddns-go_6.1.0_linux_x86_64.tar.gz"
    payload = {
        "tag_name": "v6.1.0",
        "assets": [{"name": "ddns-go_6.1.0_linux_x86_64.tar.gz", "browser_download_url": url}],
    }
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, API_URL, json=payload, status=200)
        latest = detect_latest(REPO)
    assert latest == Latest("ddns-go_6.1.0_linux_x86_64.tar.gz", url, parse("v6.1.0"))


def test_detect_latest_without_suitable_asset(linux_arm64):
    payload = {"tag_name": "v6.1.0", "assets": [{"name": "x_windows_amd64.zip", "browser_download_url": "u"}]}
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, API_URL, json=payload, status=200)
        assert detect_latest(REPO) is None
"""Finding the newest release asset that suits this operating system and CPU."""

from __future__ import annotations

import logging
import platform
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .httpclient import HTTPResponseError, create_http_client, get_http_response
from .messages import log
from .semver import InvalidVersionError, Version, parse

LATEST_RELEASE_URL = "https://api.github.com/repos/{repo}/releases/latest"
ARCHIVE_EXTENSIONS = (".zip", ".tar.gz")
MIN_ARM = 5
MAX_ARM = 7

_logger = logging.getLogger("ddnsutil")

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
}
_ARM_VERSION_RE = re.compile(r"armv(\d+)")


def _goos() -> str:
    return platform.system().lower()


def _goarch() -> str:
    machine = platform.machine().lower()
    if machine in _ARCH_ALIASES:
        return _ARCH_ALIASES[machine]
    if machine.startswith("arm"):
        return "arm"
    return machine


def _goarm() -> int:
    match = _ARM_VERSION_RE.match(platform.machine().lower())
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class Asset:
    """A downloadable file attached to a release."""

    name: str
    url: str


@dataclass(frozen=True)
class Release:
    """A tagged release and its assets."""

    tag_name: str
    assets: tuple[Asset, ...] = ()


@dataclass(frozen=True)
class Latest:
    """The newest asset for this platform and the version it carries."""

    name: str
    url: str
    version: Version


def release_from_response(data: Mapping[str, Any] | None) -> Release:
    """Build a Release from the JSON object of the releases API."""
    data = data or {}
    assets = tuple(
        Asset(item.get("name") or "", item.get("browser_download_url") or "")
        for item in data.get("assets") or ()
    )
    return Release(data.get("tag_name") or "", assets)


def get_latest(repo: str) -> Release:
    """Fetch the latest release of ``owner/name``."""
    client = create_http_client()
    response = client.get(LATEST_RELEASE_URL.format(repo=repo))
    try:
        data = get_http_response(response)
    except (HTTPResponseError, ValueError) as err:
        log("异常信息: %s", err)
        raise
    return release_from_response(data)


def detect_latest(repo: str) -> Latest | None:
    """The newest suitable asset of the repository, or None if there is none."""
    found = find_asset(get_latest(repo))
    if found is None:
        return None
    asset, version = found
    return Latest(asset.name, asset.url, version)


def generate_additional_arch() -> list[str]:
    """More precise architecture names to try before the generic one."""
    arch = _goarch()
    if arch == "arm":
        goarm = _goarm()
        if MIN_ARM <= goarm <= MAX_ARM:
            return [f"armv{v}" for v in range(goarm, MIN_ARM - 1, -1)]
    if arch == "amd64":
        return ["x86_64"]
    return []


def find_asset(release: Release | None) -> tuple[Asset, Version] | None:
    """The first asset matching this platform, trying precise architectures first."""
    for arch in [*generate_additional_arch(), _goarch()]:
        found = find_asset_for_arch(arch, release)
        if found is not None:
            return found
    return None


def find_asset_for_arch(arch: str, release: Release | None) -> tuple[Asset, Version] | None:
    """The asset of the release built for the given architecture."""
    found = find_asset_from_release(release, get_suffixes(arch))
    if found is None:
        _logger.info("Cannot find any release for %s/%s", _goos(), _goarch())
    return found


def find_asset_from_release(
    release: Release | None, suffixes: Iterable[str]
) -> tuple[Asset, Version] | None:
    """The first asset whose name ends with one of the suffixes, with the release version."""
    if release is None:
        _logger.info("There is no source release information")
        return None

    try:
        version = parse(release.tag_name)
    except InvalidVersionError:
        _logger.info("Cannot parse semantic version: %s", release.tag_name)
        return None

    suffixes = list(suffixes)
    for asset in release.assets:
        if asset_match_suffixes(asset.name, suffixes):
            return asset, version

    _logger.info("Can't find suitable asset in release %s", release.tag_name)
    return None


def asset_match_suffixes(name: str, suffixes: Iterable[str]) -> bool:
    """Whether the name ends with any of the suffixes."""
    return any(name.endswith(suffix) for suffix in suffixes)


def get_suffixes(arch: str) -> list[str]:
    """Candidate asset name endings for this OS and the given architecture."""
    goos = _goos()
    return [f"{goos}_{arch}{ext}" for ext in ARCHIVE_EXTENSIONS]
"""Updating the running program to the newest published release."""

from __future__ import annotations

import logging
import os
import sys

import requests

from .archive import (
    CannotDecompressFileError,
    ExecutableNotFoundInArchiveError,
    decompress_and_update,
)
from .httpclient import HTTPResponseError, create_http_client
from .release import _goarch, _goos, detect_latest
from .semver import InvalidVersionError, parse

UPDATE_REPOSITORY = "jeessy2/ddns-go"

_logger = logging.getLogger("ddnsutil")


def self_update(version: str) -> bool:
    """Replace the running executable with a newer release; return whether it did."""
    try:
        current = parse(version)
    except InvalidVersionError as err:
        _logger.info("Cannot update because: %s", err)
        return False

    try:
        latest = detect_latest(UPDATE_REPOSITORY)
    except (requests.RequestException, HTTPResponseError, ValueError) as err:
        _logger.info("Error happened when detecting latest version: %s", err)
        return False
    if latest is None:
        _logger.info("Cannot find any release for %s/%s", _goos(), _goarch())
        return False
    if current.greater_than_or_equal(latest.version):
        _logger.info("Current version (%s) is the latest", version)
        return False

    executable = sys.argv[0] if sys.argv else ""
    if not executable:
        _logger.info("Cannot find executable path: no program name")
        return False

    try:
        update_to(latest.url, latest.name, os.path.realpath(executable))
    except (OSError, CannotDecompressFileError, ExecutableNotFoundInArchiveError) as err:
        _logger.info("Error happened when updating binary: %s", err)
        return False

    _logger.info("Success update to v%s", latest.version)
    return True


def update_to(asset_url: str, asset_file_name: str, cmd_path: str) -> None:
    """Download the asset and install the executable it holds at ``cmd_path``."""
    decompress_and_update(download_asset(asset_url), asset_file_name, cmd_path)


def download_asset(url: str) -> bytes:
    """Download the asset; raise OSError on failure or a status of 300 and above."""
    client = create_http_client()
    try:
        response = client.get(url)
    except requests.RequestException as err:
        raise OSError(f"could not download release from {url}: {err}") from err
    with response:
        if response.status_code >= 300:
            raise OSError(
                f"could not download release from {url}. "
                f"Response code: {response.status_code}"
            )
        return response.content
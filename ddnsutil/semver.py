"""Parsing and comparison of semantic version numbers (major.minor.patch)."""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEMVER_PATTERN = (
    r"v?([0-9]+)(\.[0-9]+)?(\.[0-9]+)?"
    r"(-([0-9A-Za-z\-]+(\.[0-9A-Za-z\-]+)*))?"
    r"(\+([0-9A-Za-z\-]+(\.[0-9A-Za-z\-]+)*))?"
)
_VERSION_RE = re.compile(_SEMVER_PATTERN)

_UINT64_MAX = 2**64 - 1


class InvalidVersionError(ValueError):
    """Raised when a string is not a semantic version."""


def _parse_segment(text: str) -> int:
    value = int(text)
    if value > _UINT64_MAX:
        raise InvalidVersionError(f"error parsing version number: {text} is out of range")
    return value


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version reduced to its major, minor and patch numbers."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version is lower, equal or higher."""
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        return (mine > theirs) - (mine < theirs)

    def greater_than(self, other: Version) -> bool:
        return self.compare(other) > 0

    def greater_than_or_equal(self, other: Version) -> bool:
        return self.compare(other) >= 0


def parse(text: str) -> Version:
    """Parse a version such as ``v1.2.3-beta+build``; missing parts default to 0."""
    match = _VERSION_RE.fullmatch(text)
    if match is None:
        raise InvalidVersionError(f"the {text}, it's not a semantic version")

    major = _parse_segment(match.group(1))
    minor = _parse_segment(match.group(2)[1:]) if match.group(2) else 0
    patch = _parse_segment(match.group(3)[1:]) if match.group(3) else 0
    return Version(major, minor, patch)
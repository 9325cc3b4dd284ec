"""Small string helpers: concatenation, host names, line splitting, escaping, ordinals."""

from __future__ import annotations

_HEX = "0123456789ABCDEF"
_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-~."
)
_CHINESE = "zh"


def write_string(*args: str) -> str:
    """Concatenate the given strings."""
    return "".join(args)


def to_hostname(url: str) -> str:
    """Reduce a URL with an https scheme to its host name."""
    stripped = url.removeprefix("https://")
    return stripped.split("/")[0]


def split_lines(text: str) -> list[str]:
    """Split on ``\\r\\n`` if the text contains it, otherwise on ``\\n``."""
    if "\r\n" in text:
        return text.split("\r\n")
    return text.split("\n")


def should_escape(char: int | str) -> bool:
    """Whether a byte (or a one-character string) must be percent-encoded."""
    if isinstance(char, str):
        encoded = char.encode("utf-8")
        if len(encoded) != 1:
            return True
        char = encoded[0]
    return char not in _UNRESERVED


def escape(text: str) -> str:
    """Percent-encode every byte outside ``A-Z a-z 0-9 _ - ~ .``."""
    return "".join(
        f"%{_HEX[byte >> 4]}{_HEX[byte & 15]}" if should_escape(byte) else chr(byte)
        for byte in text.encode("utf-8")
    )


def ordinal(number: int, lang: str) -> str:
    """English ordinal form of a number; Chinese gets the bare number."""
    text = str(number)
    if lang == _CHINESE:
        return text

    suffix = "th"
    if number >= 0:
        last, last_two = number % 10, number % 100
        if last == 1 and last_two != 11:
            suffix = "st"
        elif last == 2 and last_two != 12:
            suffix = "nd"
        elif last == 3 and last_two != 13:
            suffix = "rd"
    return text + suffix
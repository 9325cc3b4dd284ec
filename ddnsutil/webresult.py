"""JSON results returned by the web handlers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Result:
    """A status code, a message and optional data."""

    code: int
    msg: str
    data: Any = None

    def to_json(self) -> str:
        """Encode as one line of JSON followed by a newline."""
        payload = {"Code": self.code, "Msg": self.msg, "Data": self.data}
        text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        for char, replacement in _HTML_ESCAPES.items():
            text = text.replace(char, replacement)
        return text + "\n"


def error_result(msg: str) -> Result:
    """A result reporting an internal error."""
    return Result(HTTPStatus.INTERNAL_SERVER_ERROR.value, msg)


def ok_result(msg: str, data: Any) -> Result:
    """A successful result carrying data."""
    return Result(HTTPStatus.OK.value, msg, data)
"""In-memory log sink that keeps only the most recent lines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

DEFAULT_MAX_NUM = 50

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _json(value: object) -> str:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, replacement in _HTML_ESCAPES.items():
        text = text.replace(char, replacement)
    return text


@dataclass
class MemoryLogs:
    """A writable text sink keeping at most ``max_num`` entries."""

    max_num: int = DEFAULT_MAX_NUM
    logs: list[str] = field(default_factory=list)

    def write(self, text: str) -> int:
        """Store one entry, dropping the oldest beyond the limit."""
        self.logs.append(text)
        self.flush()
        return len(text)

    def flush(self) -> None:
        """Drop the oldest entries so that at most ``max_num`` remain."""
        excess = len(self.logs) - self.max_num
        if excess > 0:
            del self.logs[:excess]

    def to_json(self) -> str:
        """The stored entries as a JSON array."""
        return _json(self.logs)

    def clear(self) -> None:
        """Forget all stored entries."""
        self.logs.clear()
"""Cache of the last seen IP address, forcing a periodic recheck."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

IP_CACHE_TIMES_ENV = "DDNS_IP_CACHE_TIMES"
DEFAULT_IP_CACHE_TIMES = 5

# Whether every run should compare with the DNS provider regardless of the cache.
force_compare_global = True

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _cache_times() -> int:
    raw = os.environ.get(IP_CACHE_TIMES_ENV, "")
    if _INT_RE.fullmatch(raw):
        return int(raw)
    return DEFAULT_IP_CACHE_TIMES


@dataclass
class IpCache:
    """The last address and how many unchanged checks remain before a forced update."""

    addr: str = ""
    times: int = 0
    times_failed_ip: int = 0

    def check(self, new_addr: str) -> bool:
        """Return True when an update should happen for this address."""
        if not new_addr:
            return True
        if self.addr != new_addr or self.times <= 1:
            self.addr = new_addr
            self.times = _cache_times() + 1
            return True
        self.addr = new_addr
        self.times -= 1
        return False
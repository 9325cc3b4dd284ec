"""Classification of client addresses and description of request origins."""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping
from typing import Any

_PRIVATE_NETWORKS = tuple(
    ipaddress.ip_network(net)
    for net in (
        "127.0.0.0/8",
        "::1/128",
        "10.0.0.0/8",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "fc00::/7",
        "169.254.0.0/16",
        "fe80::/10",
    )
)


def _strip_port(remote_addr: str) -> str | None:
    if remote_addr.startswith("["):
        end = remote_addr.rfind("]")
        return remote_addr[1:end] if end != -1 else None
    colon = remote_addr.rfind(":")
    return remote_addr[:colon] if colon != -1 else remote_addr


def is_private_network(remote_addr: str) -> bool:
    """Whether the address (optionally with a port) is loopback, private or link-local."""
    host = _strip_port(remote_addr)
    if host is None or "%" in host:
        return False
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return any(ip.version == net.version and ip in net for net in _PRIVATE_NETWORKS)


def _header(headers: Mapping[str, Any], name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            if isinstance(value, (list, tuple)):
                return value[0] if value else ""
            return value
    return ""


def get_request_ip_str(remote_addr: str, headers: Mapping[str, Any]) -> str:
    """Describe where a request came from, including proxy headers."""
    addr = "Remote: " + remote_addr
    real_ip = _header(headers, "X-Real-IP")
    if real_ip:
        addr += " ,Real-IP: " + real_ip
    forwarded = _header(headers, "X-Forwarded-For")
    if forwarded:
        addr += " ,Forwarded-For: " + forwarded
    return addr
"""Host lookups with a switchable DNS server, and waiting for network access."""

from __future__ import annotations

import ipaddress
import socket
import time
from dataclasses import dataclass, field
from urllib.parse import urlsplit

import dns.exception
import dns.resolver

from .messages import CHINESE, log
from .textutil import to_hostname

DEFAULT_BACKUP_DNS = ("1.1.1.1", "8.8.8.8", "9.9.9.9", "223.5.5.5")
CHINESE_BACKUP_DNS = ("223.5.5.5", "114.114.114.114", "119.29.29.29")
DNS_PORT = 53
RETRY_DELAY_SECONDS = 5
_DNS_ERROR_MARKER = "[::1]:53: read: connection refused"


@dataclass(frozen=True)
class _DnsServer:
    host: str
    port: int
    tcp: bool


@dataclass
class _ResolverState:
    backup_dns: list[str] = field(default_factory=lambda: list(DEFAULT_BACKUP_DNS))
    server: _DnsServer | None = None


_state = _ResolverState()


def init_backup_dns(custom_dns: str, lang: str) -> None:
    """Use the custom DNS server as backup, or servers suited to the language."""
    if custom_dns:
        _state.backup_dns = [custom_dns]
        return
    if lang == CHINESE:
        _state.backup_dns = list(CHINESE_BACKUP_DNS)


def set_dns(dns: str) -> None:
    """Resolve through the given server, e.g. ``1.1.1.1`` or ``tcp://1.1.1.1:53``."""
    if "://" not in dns:
        dns = "udp://" + dns
    parts = urlsplit(dns)
    tcp = parts.scheme.lower() == "tcp"
    port = parts.port or DNS_PORT
    _state.server = _DnsServer(parts.hostname or "", port, tcp)


def _nameserver_ip(host: str) -> str:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return socket.getaddrinfo(host, None)[0][4][0]
    return host


def _is_ip_literal(name: str) -> bool:
    try:
        ipaddress.ip_address(name)
    except ValueError:
        return False
    return True


def _system_lookup(name: str) -> list[str]:
    infos = socket.getaddrinfo(name, None)
    return list(dict.fromkeys(str(info[4][0]) for info in infos))


def _server_lookup(name: str, server: _DnsServer) -> list[str]:
    if _is_ip_literal(name):
        return [name]
    nameserver = _nameserver_ip(server.host)
    resolver = dns.resolver.Resolver(configure=False)
    resolver.port = server.port
    resolver.nameservers = [nameserver]

    addresses: list[str] = []
    last_error: dns.exception.DNSException | None = None
    for rdtype in ("A", "AAAA"):
        try:
            answer = resolver.resolve(name, rdtype, tcp=server.tcp)
        except dns.exception.DNSException as exc:
            last_error = exc
            continue
        addresses.extend(rdata.to_text() for rdata in answer)
    if not addresses:
        raise OSError(
            f"lookup {name} on {nameserver}:{server.port}: {last_error}"
        ) from last_error
    return addresses


def lookup_host(url: str) -> list[str]:
    """Resolve the host of the URL; raise OSError when it cannot be resolved."""
    name = to_hostname(url)
    server = _state.server
    if server is None:
        return _system_lookup(name)
    return _server_lookup(name, server)


def is_dns_error(error: BaseException) -> bool:
    """Whether the error comes from an unreachable local DNS server."""
    return _DNS_ERROR_MARKER in str(error)


def wait_internet(addresses: list[str]) -> None:
    """Block until one of the addresses resolves, switching to backup DNS if needed."""
    retry_times = 0
    failed = False
    while True:
        for addr in addresses:
            try:
                lookup_host(addr)
            except OSError as err:
                failed = True
                log("等待网络连接: %s", err)
                log("%s 后重试...", f"{RETRY_DELAY_SECONDS}s")
                if is_dns_error(err) or retry_times > 0:
                    backup = _state.backup_dns[retry_times % len(_state.backup_dns)]
                    log("本机DNS异常! 将默认使用 %s, 可参考文档通过 -dns 自定义 DNS 服务器", backup)
                    set_dns(backup)
                    retry_times += 1
                time.sleep(RETRY_DELAY_SECONDS)
                continue
            if failed:
                log("网络已连接")
            return
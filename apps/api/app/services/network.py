"""LAN address discovery so the sender can hand out a reachable viewer URL."""
from __future__ import annotations

import ipaddress
import logging
import socket
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

_PRIVATE_V4_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
)

# No packets are sent; connecting a UDP socket only selects the outbound interface.
_ROUTE_TARGET = ("10.255.255.255", 1)


@dataclass(slots=True)
class ServerInfo:
    host: str
    lan_ip: str


def is_private_lan_address(address: str) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    if ip.version != 4 or ip.is_loopback:
        return False
    return any(ip in network for network in _PRIVATE_V4_NETWORKS)


def pick_lan_address(candidates: Iterable[str]) -> str:
    """Return the first private IPv4 address among ``candidates``, or ``""``."""

    for candidate in candidates:
        if is_private_lan_address(candidate):
            return candidate
    return ""


def _candidate_addresses() -> list[str]:
    candidates: list[str] = []
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as udp:
            udp.connect(_ROUTE_TARGET)
            candidates.append(udp.getsockname()[0])
    except OSError as exc:
        logger.debug("UDP route lookup for LAN address failed: %s", exc)

    try:
        _, _, addresses = socket.gethostbyname_ex(socket.gethostname())
        candidates.extend(addresses)
    except OSError as exc:
        logger.debug("Hostname lookup for LAN address failed: %s", exc)
    return candidates


def get_lan_ip() -> str:
    return pick_lan_address(_candidate_addresses())


def get_server_info(host: str) -> ServerInfo:
    return ServerInfo(host=host, lan_ip=get_lan_ip())

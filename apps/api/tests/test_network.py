"""Tests for LAN address selection."""
from __future__ import annotations

import pytest

from app.services import network


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("10.0.0.7", True),
        ("172.16.4.1", True),
        ("172.31.255.254", True),
        ("172.32.0.1", False),
        ("192.168.1.20", True),
        ("127.0.0.1", False),
        ("8.8.8.8", False),
        ("fe80::1", False),
        ("not-an-ip", False),
    ],
)
def test_is_private_lan_address(address: str, expected: bool) -> None:
    assert network.is_private_lan_address(address) is expected


def test_pick_lan_address_skips_loopback_and_public() -> None:
    assert network.pick_lan_address(["127.0.1.1", "203.0.113.5", "192.168.0.12", "10.1.1.1"]) == "192.168.0.12"
    assert network.pick_lan_address(["127.0.0.1"]) == ""
    assert network.pick_lan_address([]) == ""


def test_get_server_info(monkeypatch) -> None:
    monkeypatch.setattr(network, "_candidate_addresses", lambda: ["127.0.0.1", "10.0.0.3"])

    info = network.get_server_info("share.local:8080")

    assert info.host == "share.local:8080"
    assert info.lan_ip == "10.0.0.3"

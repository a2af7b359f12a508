"""pytest configuration for hostports tests."""

from __future__ import annotations

import json
from collections import namedtuple

import psutil
import pytest

# Same field layout as the entries psutil.net_if_addrs() returns.
_FakeAddr = namedtuple("_FakeAddr", ["family", "address", "netmask", "broadcast", "ptp"])


@pytest.fixture
def snapshot():
    """Build registry snapshot bytes from a ``services`` mapping."""

    def _build(services, **extra) -> bytes:
        return json.dumps({"services": services, **extra}).encode()

    return _build


@pytest.fixture
def resolver_for():
    """Return a fake address resolver that yields the given IPs."""

    def _make(*ips: str):
        return lambda: set(ips)

    return _make


@pytest.fixture
def fake_interfaces(monkeypatch):
    """Replace ``psutil.net_if_addrs`` with ``{iface: [(family, address), ...]}``."""

    def _install(interfaces: dict) -> None:
        table = {
            name: [_FakeAddr(family, address, None, None, None) for family, address in addrs]
            for name, addrs in interfaces.items()
        }
        monkeypatch.setattr(psutil, "net_if_addrs", lambda: table)

    return _install

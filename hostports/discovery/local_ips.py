"""Local address resolution: which IPs are bound to this host right now.

Enumerates every network interface via :func:`psutil.net_if_addrs` and
collects the string form of each IPv4/IPv6 address.  Nothing is cached:
every call queries the OS again so membership tests always reflect the
current interface state.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Callable, Iterable

import psutil

from hostports.errors import InterfaceEnumerationError

logger = logging.getLogger(__name__)

# Anything that returns the current host's addresses; injected into the decoder.
AddressResolver = Callable[[], Iterable[str]]

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def resolve_local_addresses() -> frozenset[str]:
    """Return every IP address bound to a local interface.

    Raises:
        InterfaceEnumerationError: if the interfaces (or the addresses of any
            one interface) cannot be listed.  No partial result is returned.
    """
    try:
        interfaces = psutil.net_if_addrs()
    except (OSError, psutil.Error) as exc:
        raise InterfaceEnumerationError(f"cannot list network interfaces: {exc}") from exc

    addresses: set[str] = set()
    for name, addrs in interfaces.items():
        for addr in addrs:
            if addr.family not in _IP_FAMILIES:
                continue
            ip = _normalise(addr.address)
            if ip is None:
                raise InterfaceEnumerationError(
                    f"unparseable address {addr.address!r} on interface {name}"
                )
            addresses.add(ip)

    logger.debug("resolved %d local address(es) on %d interface(s)", len(addresses), len(interfaces))
    return frozenset(addresses)


def _normalise(raw: str) -> str | None:
    # Link-local IPv6 comes back as "fe80::1%eth0"; the zone is not part of the IP.
    bare = raw.split("%", 1)[0]
    try:
        return str(ipaddress.ip_address(bare))
    except ValueError:
        return None

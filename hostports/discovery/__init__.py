"""hostports.discovery: registry snapshot ↔ local port map.

Exports:
    ServiceIdentity          (name, namespace) of a registry service
    Endpoint                 host/port pair used to build snapshots
    RegistryDecoder          snapshot bytes → ``{port: ServiceIdentity}``
    decode_registry          one-shot wrapper around RegistryDecoder
    encode_minimal_registry  endpoints → minimal snapshot dict
    extract_port             port from a service's first health check
    resolve_local_addresses  IPs bound to this host
"""

from __future__ import annotations

from hostports.discovery.local_ips import AddressResolver, resolve_local_addresses
from hostports.discovery.ports import NO_PORT, extract_port
from hostports.discovery.registry import (
    Endpoint,
    RegistryDecoder,
    RegistrySnapshot,
    ServiceIdentity,
    decode_registry,
    encode_minimal_registry,
)

__all__ = [
    "AddressResolver",
    "Endpoint",
    "NO_PORT",
    "RegistryDecoder",
    "RegistrySnapshot",
    "ServiceIdentity",
    "decode_registry",
    "encode_minimal_registry",
    "extract_port",
    "resolve_local_addresses",
]

"""Registry snapshot decoding and encoding.

A registry snapshot is the JSON document a service-discovery agent publishes::

    {"services": {"<name>.<namespace>.<...>": {"host": "10.0.0.5",
                                                "port": 8080,
                                                "checks": [{"uri": "/http/foo/8080/status"}]}}}

:class:`RegistryDecoder` turns it into ``{port: ServiceIdentity}`` for the
services that live on this host; :func:`encode_minimal_registry` goes the
other way and builds a snapshot from known endpoints.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from hostports.discovery.local_ips import AddressResolver, resolve_local_addresses
from hostports.discovery.ports import NO_PORT, extract_port, health_check_uri
from hostports.errors import MalformedRegistryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceIdentity:
    """The (name, namespace) pair encoded in a dotted registry key."""

    name: str
    namespace: str

    @classmethod
    def from_key(cls, raw: str) -> ServiceIdentity:
        """Split ``"<name>.<namespace>.<...>"``; raises ``ValueError`` on fewer than two segments."""
        parts = raw.split(".")
        if len(parts) < 2:
            raise ValueError(f"service key {raw!r} has no namespace segment")
        return cls(name=parts[0], namespace=parts[1])


@dataclass(frozen=True)
class Endpoint:
    host: str
    port: str


class RegistrySnapshot(BaseModel):
    """Top-level shape of a snapshot; entries stay loosely typed."""

    services: dict[str, dict[str, Any] | None] | None = None


def parse_snapshot(raw: bytes | str) -> RegistrySnapshot:
    """Validate *raw* JSON as a :class:`RegistrySnapshot`.

    Invalid UTF-8 in *raw* bytes is replaced with U+FFFD.

    Raises:
        MalformedRegistryError: wrapping the JSON or pydantic diagnostic.
    """
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise MalformedRegistryError(f"invalid registry snapshot: {exc}") from exc
    try:
        return RegistrySnapshot.model_validate(data)
    except ValidationError as exc:
        raise MalformedRegistryError(f"invalid registry snapshot: {exc}") from exc


class RegistryDecoder:
    """Resolve a registry snapshot into the ports served on this host.

    Args:
        resolver: Callable returning the host's current IP addresses.  Defaults
                  to :func:`resolve_local_addresses`; tests inject a fake.
    """

    def __init__(self, resolver: AddressResolver = resolve_local_addresses) -> None:
        self._resolver = resolver

    def decode(self, raw: bytes | str) -> dict[int, ServiceIdentity]:
        """Return ``{port: ServiceIdentity}`` for local services in *raw*.

        Entries for other hosts, entries without a usable health-check port
        and malformed entries are skipped.  When two entries claim the same
        port the one later in the document wins.

        Raises:
            InterfaceEnumerationError: local addresses could not be listed.
            MalformedRegistryError:    *raw* is not a valid snapshot.
        """
        local = frozenset(self._resolver())
        snapshot = parse_snapshot(raw)

        results: dict[int, ServiceIdentity] = {}
        for key, entry in (snapshot.services or {}).items():
            if entry is None:
                logger.warning("skipping %s: entry is null", key)
                continue

            host = entry.get("host")
            if not isinstance(host, str):
                logger.warning("skipping %s: host is missing or not a string", key)
                continue
            host = host.strip()
            if host not in local:
                logger.debug("skipping %s: host %s is not local", key, host)
                continue

            try:
                identity = ServiceIdentity.from_key(key)
            except ValueError as exc:
                logger.warning("skipping %s: %s", key, exc)
                continue

            port = extract_port(entry)
            if port == NO_PORT:
                logger.debug("skipping %s: no usable health-check port", key)
                continue

            previous = results.get(port)
            if previous is not None and previous != identity:
                logger.info("port %d claimed by %s replaces %s", port, key, previous)
            results[port] = identity

        logger.debug("decoded %d local service port(s)", len(results))
        return results


def decode_registry(
    raw: bytes | str,
    resolver: AddressResolver | None = None,
) -> dict[int, ServiceIdentity]:
    """Shorthand for ``RegistryDecoder(resolver).decode(raw)``."""
    decoder = RegistryDecoder(resolver) if resolver is not None else RegistryDecoder()
    return decoder.decode(raw)


def encode_minimal_registry(services: Mapping[str, Endpoint]) -> dict[str, dict[str, dict[str, Any]]]:
    """Build the smallest snapshot :class:`RegistryDecoder` understands.

    Each service gets its endpoint's host/port and exactly one check whose URI
    is ``/http/<service>/<port>/status``.
    """
    entries: dict[str, dict[str, Any]] = {}
    for service, endpoint in services.items():
        entries[service] = {
            "host": endpoint.host,
            "port": endpoint.port,
            "checks": [{"uri": health_check_uri(service, endpoint.port)}],
        }
    return {"services": entries}

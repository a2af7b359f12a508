"""Exceptions raised by hostports."""

from __future__ import annotations


class HostPortsError(Exception):
    """Base error for structural failures while resolving host ports."""


class InterfaceEnumerationError(HostPortsError):
    """Raised when the local network interfaces or their addresses cannot be listed."""


class MalformedRegistryError(HostPortsError):
    """Raised when a registry snapshot is not valid JSON of the expected shape."""

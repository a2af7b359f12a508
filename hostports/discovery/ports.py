"""Port extraction from a service's health-check URI.

Registry entries carry their port of record inside the first health check::

    "checks": [{"uri": "/http/<service>/<port>/status"}]

The grammar is positional: split on ``/``, segment 1 is the protocol (must
contain ``http``), segment 3 is the port.  It is deliberately not a general
URI parser; malformed URIs simply yield :data:`NO_PORT`.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

NO_PORT = -1

_HTTP = re.compile(r"http")
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def health_check_uri(service: str, port: Any) -> str:
    """Build the health-check URI that :func:`extract_port` reads back."""
    return f"/http/{service}/{port}/status"


def extract_port(entry: Mapping[str, Any]) -> int:
    """Return the port declared by *entry*'s first health check.

    Returns :data:`NO_PORT` (``-1``) when there is no usable check: missing or
    empty ``checks``, a first check that is not an object, a missing/empty
    ``uri``, fewer than four URI segments, a non-http protocol, or a port
    segment that is not a base-10 integer.
    """
    checks = entry.get("checks")
    if not isinstance(checks, Sequence) or isinstance(checks, (str, bytes)) or not checks:
        return NO_PORT

    check = checks[0]
    if not isinstance(check, Mapping):
        return NO_PORT

    uri = check.get("uri")
    if not isinstance(uri, str) or not uri:
        return NO_PORT

    segments = uri.split("/")
    if len(segments) < 4:
        return NO_PORT

    protocol = segments[1].strip()
    if not _HTTP.search(protocol):
        return NO_PORT

    return _parse_int(segments[3])


def _parse_int(text: str) -> int:
    # int() alone would also accept whitespace, "_" separators and non-ASCII digits.
    if not _DECIMAL.fullmatch(text):
        return NO_PORT
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return NO_PORT
    return value

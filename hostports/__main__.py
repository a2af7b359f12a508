"""hostports command line.

Usage::

    python -m hostports decode [PATH|-]             # port map of local services
    python -m hostports encode NAME=HOST:PORT ...   # minimal registry snapshot
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from hostports.config import HostPortsConfig
from hostports.discovery import Endpoint, decode_registry, encode_minimal_registry
from hostports.errors import HostPortsError

logger = logging.getLogger("hostports")

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _endpoint_arg(value: str) -> tuple[str, Endpoint]:
    name, sep, address = value.partition("=")
    if address.startswith("["):
        # IPv6 literal: [host]:port
        host, bracket, rest = address[1:].partition("]")
        colon, port = rest[:1], rest[1:]
        ok = bool(bracket) and colon == ":"
    else:
        host, colon, port = address.rpartition(":")
        ok = bool(colon) and ":" not in host
    if (not ok or not sep or not name or not host or not port
            or ":" in port or any(c in host for c in "[]")):
        raise argparse.ArgumentTypeError(f"expected NAME=HOST:PORT or NAME=[HOST]:PORT, got {value!r}")
    return name, Endpoint(host=host, port=port)


def _build_parser(config: HostPortsConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m hostports",
        description="Map a service registry snapshot onto this host's ports",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=None,
        help=f"Logging verbosity (default: HOSTPORTS_LOG_LEVEL or {config.log_level})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser("decode", help="Print {port: service} for services on this host")
    decode.add_argument(
        "path",
        nargs="?",
        default=str(config.registry_path),
        help=f"Registry snapshot file, '-' for stdin (default: {config.registry_path})",
    )

    encode = sub.add_parser("encode", help="Print a minimal registry snapshot")
    encode.add_argument(
        "endpoints",
        nargs="+",
        type=_endpoint_arg,
        metavar="NAME=HOST:PORT",
    )
    return parser


def _read(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    config = HostPortsConfig.from_env()
    parser = _build_parser(config)
    args = parser.parse_args(argv)

    level = args.log_level or config.log_level
    if level not in _LOG_LEVELS:
        parser.error(f"unknown log level {level!r}")
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    if args.command == "encode":
        print(json.dumps(encode_minimal_registry(dict(args.endpoints)), indent=2))
        return 0

    try:
        ports = decode_registry(_read(args.path))
    except OSError as exc:
        print(f"error: cannot read {args.path}: {exc}", file=sys.stderr)
        return 1
    except HostPortsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logger.info("%d local service port(s) in %s", len(ports), args.path)
    out = {
        str(port): {"name": ident.name, "namespace": ident.namespace}
        for port, ident in sorted(ports.items())
    }
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

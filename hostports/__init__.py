"""hostports: map a service registry snapshot onto this host's TCP ports.

Quickstart::

    from hostports.discovery import decode_registry

    with open("/etc/nerve/nerve.conf.json", "rb") as f:
        ports = decode_registry(f.read())   # {8080: ServiceIdentity("foo", "prod")}
"""

__version__ = "1.0.0"

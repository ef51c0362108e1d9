# lightsync/webdav/server_type.py
"""
Best-effort detection of the remote WebDAV implementation from response headers.

The result only annotates a successful connection test; request semantics
never depend on it.
"""
from enum import Enum
from typing import Mapping, Optional


class ServerType(str, Enum):
    NEXTCLOUD = "nextcloud"
    OWNCLOUD = "owncloud"
    APACHE = "apache"
    NGINX = "nginx"
    GENERIC = "generic"

    def __str__(self) -> str:
        return self.value


# Checked in order, first substring match wins
SERVER_HEADER_TOKENS = (
    ServerType.NEXTCLOUD,
    ServerType.OWNCLOUD,
    ServerType.APACHE,
    ServerType.NGINX,
)
POWERED_BY_TOKENS = (
    ServerType.NEXTCLOUD,
    ServerType.OWNCLOUD,
)


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # httpx.Headers is case-insensitive already; plain dicts are not
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
    return value


def detect_server_type(headers: Mapping[str, str]) -> ServerType:
    """
    Classify the server from its headers.

    Precedence: `Server` header tokens, then `X-Powered-By`, then the
    presence of `X-OC-Version`; otherwise generic.
    """
    server = _header(headers, "server")
    if server:
        lowered = server.lower()
        for server_type in SERVER_HEADER_TOKENS:
            if server_type.value in lowered:
                return server_type

    powered_by = _header(headers, "x-powered-by")
    if powered_by:
        lowered = powered_by.lower()
        for server_type in POWERED_BY_TOKENS:
            if server_type.value in lowered:
                return server_type

    if _header(headers, "x-oc-version") is not None:
        return ServerType.OWNCLOUD

    return ServerType.GENERIC

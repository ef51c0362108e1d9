# lightsync/webdav/errors.py
"""
Error taxonomy and HTTP status classification for the WebDAV client.

Every public client operation either returns its value or raises exactly one
`WebDAVError` subclass. The status classifier is a pure lookup over the
status code so it can be exercised without any network I/O.
"""
from enum import Enum
from typing import Dict, Optional

import httpx


class ErrorKind(str, Enum):
    """Kind tag carried by every WebDAVError."""
    CONFIG = "config"
    TRANSPORT = "transport"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    PROTOCOL = "protocol"
    LOCAL_IO = "local_io"


class TransportReason(str, Enum):
    """Network-layer failure sub-kinds."""
    TIMEOUT = "timeout"
    CONNECT = "connect"
    TLS = "tls"
    IO = "io"


class WebDAVError(Exception):
    """
    Base class for all client failures.

    Attributes:
        kind: Taxonomy kind
        detail: Human-readable description (never includes credentials)
    """

    kind: ErrorKind = ErrorKind.PROTOCOL
    retryable: bool = False

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class ConfigError(WebDAVError):
    """Invalid server profile or credential, raised before any network I/O."""
    kind = ErrorKind.CONFIG


class TransportError(WebDAVError):
    """Network-layer failure: timeout, connect, TLS or generic I/O."""
    kind = ErrorKind.TRANSPORT
    retryable = True

    def __init__(self, detail: str, reason: TransportReason = TransportReason.IO):
        super().__init__(detail)
        self.reason = reason


class AuthFailure(WebDAVError):
    """HTTP 401/403. Not retryable without new credentials."""
    kind = ErrorKind.AUTH

    def __init__(self, detail: str, status_code: int):
        super().__init__(detail)
        self.status_code = status_code


class NotFoundError(WebDAVError):
    """Remote resource (HTTP 404) or stored credential is absent."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.status_code = status_code


class ProtocolError(WebDAVError):
    """Unexpected status code or a response body of the wrong shape."""
    kind = ErrorKind.PROTOCOL

    def __init__(self, detail: str, status_code: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(detail)
        self.status_code = status_code
        self.reason = reason


class LocalIOError(WebDAVError):
    """Local file read (upload) or write (download) failure."""
    kind = ErrorKind.LOCAL_IO

    def __init__(self, detail: str, path: Optional[str] = None):
        super().__init__(detail)
        self.path = path


# Reason annotations keyed by status code
CLIENT_ERROR_REASONS: Dict[int, str] = {
    400: "malformed request",
    405: "method not allowed on this resource (unsupported method or resource already exists)",
    409: "conflict, parent collection missing or resource locked",
    412: "precondition failed",
    413: "payload too large",
    423: "resource is locked",
    424: "failed dependency",
}

SERVER_ERROR_REASONS: Dict[int, str] = {
    500: "internal server error",
    502: "bad gateway",
    503: "service unavailable",
    504: "gateway timeout",
    507: "insufficient storage on server",
}

GENERIC_CLIENT_REASON = "client error"
GENERIC_SERVER_REASON = "server error"


def _phrase(status_code: int) -> str:
    return httpx.codes.get_reason_phrase(status_code) or "Unknown"


def classify_status(status_code: int) -> Optional[WebDAVError]:
    """
    Map an HTTP status code to an error, or None when the request succeeded.

    Args:
        status_code: HTTP status code of the response

    Returns:
        None for 2xx (including 207 Multi-Status), otherwise the error to raise
    """
    if 200 <= status_code < 300:
        return None
    if status_code == 401:
        return AuthFailure(
            "Authentication failed: Invalid username or password. "
            "Check the credentials configured for this server.",
            status_code=401,
        )
    if status_code == 403:
        return AuthFailure(
            "Access forbidden: User does not have permission for this resource",
            status_code=403,
        )
    if status_code == 404:
        return NotFoundError("Resource not found", status_code=404)
    if 400 <= status_code < 500:
        reason = CLIENT_ERROR_REASONS.get(status_code, GENERIC_CLIENT_REASON)
        return ProtocolError(
            f"Client error: {status_code} {_phrase(status_code)} ({reason})",
            status_code=status_code,
            reason=reason,
        )
    if 500 <= status_code < 600:
        reason = SERVER_ERROR_REASONS.get(status_code, GENERIC_SERVER_REASON)
        return ProtocolError(
            f"Server error: {status_code} {_phrase(status_code)} ({reason})",
            status_code=status_code,
            reason=reason,
        )
    phrase = _phrase(status_code)
    return ProtocolError(
        f"Unexpected status: {status_code} {phrase}",
        status_code=status_code,
        reason=phrase,
    )


def raise_for_status(response: httpx.Response) -> None:
    """Raise the classified error for `response`, if any."""
    error = classify_status(response.status_code)
    if error is not None:
        raise error

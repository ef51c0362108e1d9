# lightsync/webdav/transport.py
"""
HTTP transport for the WebDAV client.

Wraps a connection-reusing `httpx.AsyncClient`:
- Centralizes timeouts, default headers (Basic auth, User-Agent) and pool limits.
- Enforces one wall-clock bound over the whole request/response cycle.
- Maps httpx/ssl failures onto TransportError sub-kinds before they reach the client.
"""
import asyncio
import ssl
from typing import Dict, Optional

import httpx
import structlog

from lightsync.config import settings
from lightsync.webdav.errors import TransportError, TransportReason
from lightsync.webdav.request_builder import WebDAVRequest

logger = structlog.get_logger()


def build_async_client(
    timeout: int,
    *,
    extra_headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the pooled `httpx.AsyncClient` used for every request of one client.

    Args:
        timeout: Seconds applied to connect, read, write and pool acquisition
        extra_headers: Default headers sent with every request
        transport: Optional transport override (e.g. `httpx.MockTransport`)
    """
    headers: Dict[str, str] = {"User-Agent": settings.WEBDAV_USER_AGENT}
    if extra_headers:
        headers.update(extra_headers)
    kwargs = {}
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers=headers,
        follow_redirects=settings.WEBDAV_FOLLOW_REDIRECTS,
        verify=settings.WEBDAV_VERIFY_SSL,
        limits=httpx.Limits(
            max_connections=settings.WEBDAV_MAX_CONNECTIONS,
            max_keepalive_connections=settings.WEBDAV_MAX_CONNECTIONS,
        ),
        **kwargs,
    )


def _is_tls_failure(exc: BaseException) -> bool:
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def map_transport_error(exc: BaseException, timeout: int) -> TransportError:
    """Translate a network-layer exception into a TransportError."""
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return TransportError(
            f"Connection timeout after {timeout} seconds",
            reason=TransportReason.TIMEOUT,
        )
    if _is_tls_failure(exc):
        return TransportError(
            f"TLS handshake or certificate verification failed: {exc}",
            reason=TransportReason.TLS,
        )
    if isinstance(exc, httpx.ConnectError):
        return TransportError(
            f"Failed to connect to server: {exc}",
            reason=TransportReason.CONNECT,
        )
    return TransportError(f"Network error: {exc}", reason=TransportReason.IO)


async def send(client: httpx.AsyncClient, request: WebDAVRequest, timeout: int) -> httpx.Response:
    """
    Send `request` and read the full response body within `timeout` seconds.

    Raises:
        TransportError: On timeout, connect, TLS or other network failure
    """
    try:
        response = await asyncio.wait_for(
            client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
            ),
            timeout=timeout,
        )
    except (httpx.TransportError, asyncio.TimeoutError, ssl.SSLError) as e:
        error = map_transport_error(e, timeout)
        logger.error(
            "webdav_transport_failed",
            method=request.method,
            url=request.url,
            reason=error.reason.value,
            error=str(e),
        )
        raise error from e

    logger.debug(
        "webdav_response_received",
        method=request.method,
        url=request.url,
        status=response.status_code,
    )
    return response

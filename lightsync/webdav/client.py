# lightsync/webdav/client.py
"""
WebDAV client façade.

Responsibilities:
- Validate the ServerProfile and secret before any network I/O
- Build one pooled httpx.AsyncClient carrying the Basic auth header
- Expose: test_connection, list, upload, download, delete, mkdir

Notes:
- A client is short-lived: create one per session (one connection test, one
  sync pass) and close it when done. It holds no state shared between calls
  other than the connection pool.
- There is no retry loop here. TransportError is marked retryable; callers
  decide whether to back off and try again.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional, Union

import httpx
import structlog

from lightsync.webdav import request_builder
from lightsync.webdav.errors import ConfigError, LocalIOError, raise_for_status
from lightsync.webdav.models import FileEntry
from lightsync.webdav.multistatus import parse_multistatus
from lightsync.webdav.profile import ServerProfile
from lightsync.webdav.request_builder import WebDAVRequest
from lightsync.webdav.server_type import ServerType, detect_server_type
from lightsync.webdav.transport import build_async_client, send

logger = structlog.get_logger()

PathLike = Union[str, Path]


class WebDAVClient:
    """
    Client bound to exactly one server profile and credential.

    Example:
        async with WebDAVClient(profile, secret) as client:
            server_type = await client.test_connection()
            entries = await client.list("/documents")
    """

    def __init__(
        self,
        profile: ServerProfile,
        secret: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            profile: Server profile; validated here
            secret: Password for `profile.username`
            transport: Optional httpx transport override (tests, proxies)

        Raises:
            ConfigError: If the profile is invalid or the secret is empty
        """
        try:
            profile.validate()
        except ConfigError as e:
            raise ConfigError(f"Invalid server config: {e.detail}") from e

        if secret is None or not secret.strip():
            raise ConfigError("Password cannot be empty")

        self._profile = profile
        self._url = profile.url
        self._base_path = profile.base_path
        self._timeout = profile.timeout
        self._http = build_async_client(
            profile.timeout,
            extra_headers={
                "Authorization": request_builder.basic_auth_header(profile.username, secret)
            },
            transport=transport,
        )

        if profile.use_tls != profile.url.lower().startswith("https://"):
            logger.warning(
                "webdav_tls_flag_mismatch",
                url=profile.url,
                use_tls=profile.use_tls,
            )

        logger.info(
            "webdav_client_initialized",
            url=self._url,
            username=profile.username,
            timeout=self._timeout,
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def username(self) -> str:
        return self._profile.username

    @property
    def timeout(self) -> int:
        return self._timeout

    @property
    def profile(self) -> ServerProfile:
        return self._profile

    async def _execute(self, request: WebDAVRequest) -> httpx.Response:
        logger.debug("webdav_request_sent", method=request.method, url=request.url)
        response = await send(self._http, request, self._timeout)
        try:
            raise_for_status(response)
        except Exception as e:
            logger.error(
                "webdav_request_failed",
                method=request.method,
                url=request.url,
                status=response.status_code,
                error=str(e),
            )
            raise
        return response

    async def test_connection(self) -> ServerType:
        """
        Probe the endpoint with PROPFIND Depth 0.

        Returns:
            Detected server implementation

        Raises:
            AuthFailure, NotFoundError, ProtocolError, TransportError
        """
        response = await self._execute(request_builder.build_probe(self._url))
        server_type = detect_server_type(response.headers)
        logger.info(
            "webdav_connection_ok",
            url=self._url,
            status=response.status_code,
            server_type=server_type.value,
        )
        return server_type

    async def list(self, path: str = "/") -> List[FileEntry]:
        """
        List the immediate children of a collection.

        Args:
            path: Collection path relative to the endpoint URL

        Returns:
            FileEntry per child; the collection itself is not included
        """
        response = await self._execute(request_builder.build_list(self._url, path))
        entries = parse_multistatus(
            response.content, path, self._base_path, status_code=response.status_code
        )
        logger.info("webdav_list_completed", path=path, count=len(entries))
        return entries

    async def upload(self, local_path: PathLike, remote_path: str) -> None:
        """
        Upload a local file with PUT. The file is read fully into memory.

        Raises:
            LocalIOError: If the local file cannot be read
        """
        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(None, Path(local_path).read_bytes)
        except OSError as e:
            logger.error("webdav_upload_read_failed", local_path=str(local_path), error=str(e))
            raise LocalIOError(f"Failed to read local file {local_path}: {e}", path=str(local_path)) from e

        await self._execute(request_builder.build_upload(self._url, remote_path, content))
        logger.info("webdav_upload_completed", remote_path=remote_path, size=len(content))

    async def download(self, remote_path: str, local_path: PathLike) -> None:
        """
        Download a remote file with GET and write it to `local_path`.

        Raises:
            LocalIOError: If the local file cannot be written
        """
        response = await self._execute(request_builder.build_download(self._url, remote_path))
        content = response.content

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, Path(local_path).write_bytes, content)
        except OSError as e:
            logger.error("webdav_download_write_failed", local_path=str(local_path), error=str(e))
            raise LocalIOError(f"Failed to write local file {local_path}: {e}", path=str(local_path)) from e

        logger.info("webdav_download_completed", remote_path=remote_path, size=len(content))

    async def delete(self, path: str) -> None:
        """Delete a remote file or collection."""
        await self._execute(request_builder.build_delete(self._url, path))
        logger.info("webdav_delete_completed", path=path)

    async def mkdir(self, path: str) -> None:
        """
        Create a collection with MKCOL.

        A 405 (typically: already exists) is raised as ProtocolError.
        """
        await self._execute(request_builder.build_mkcol(self._url, path))
        logger.info("webdav_mkdir_completed", path=path)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> "WebDAVClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"WebDAVClient(url={self._url!r}, username={self.username!r}, timeout={self._timeout})"

    def __str__(self) -> str:
        return f"WebDAV Client for {self._url}"

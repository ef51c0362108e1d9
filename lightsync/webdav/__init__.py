"""
WebDAV protocol client.

Authenticates with HTTP Basic, probes server identity, lists collections
from multi-status responses and transfers files:
- WebDAVClient: test_connection, list, upload, download, delete, mkdir
- ServerProfile: validated endpoint configuration
- WebDAVError and subclasses: the failure taxonomy
"""

from lightsync.webdav.client import WebDAVClient
from lightsync.webdav.connection import apply_test_result, check_server_connection
from lightsync.webdav.credentials import CredentialProvider, InMemoryCredentialProvider
from lightsync.webdav.errors import (
    AuthFailure,
    ConfigError,
    ErrorKind,
    LocalIOError,
    NotFoundError,
    ProtocolError,
    TransportError,
    TransportReason,
    WebDAVError,
)
from lightsync.webdav.models import ConnectionTestResult, FileEntry, ServerInfo
from lightsync.webdav.profile import ServerProfile
from lightsync.webdav.server_type import ServerType

__all__ = [
    "WebDAVClient",
    "ServerProfile",
    "FileEntry",
    "ServerType",
    "ServerInfo",
    "ConnectionTestResult",
    "CredentialProvider",
    "InMemoryCredentialProvider",
    "check_server_connection",
    "apply_test_result",
    "WebDAVError",
    "ErrorKind",
    "ConfigError",
    "TransportError",
    "TransportReason",
    "AuthFailure",
    "NotFoundError",
    "ProtocolError",
    "LocalIOError",
]

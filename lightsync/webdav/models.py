# lightsync/webdav/models.py
"""
Result types returned by the WebDAV client and the connection test service.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from lightsync.webdav.server_type import ServerType


@dataclass(frozen=True)
class FileEntry:
    """A file or directory returned by a listing."""
    path: str
    name: str
    is_directory: bool
    size: int = 0
    modified: Optional[datetime] = None
    content_type: Optional[str] = None
    etag: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "isDirectory": self.is_directory,
            "size": self.size,
            "modified": int(self.modified.timestamp()) if self.modified else None,
        }


@dataclass
class ServerInfo:
    """Server details gathered during a connection test."""
    server_type: ServerType
    url: str
    available_space: Optional[int] = None


@dataclass
class ConnectionTestResult:
    """Outcome of a connection test."""
    success: bool
    message: str
    tested_at: datetime
    server_info: Optional[ServerInfo] = None
    error_kind: Optional[str] = None
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)

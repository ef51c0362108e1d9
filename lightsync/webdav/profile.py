# lightsync/webdav/profile.py
"""
Server profile: the validated, immutable record describing one WebDAV endpoint.

Profiles are built by the caller from persisted configuration and validated
before any client is constructed, so an invalid profile never reaches the
network.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from lightsync.config import settings
from lightsync.webdav.errors import ConfigError

MIN_TIMEOUT_SECONDS = 1
MAX_TIMEOUT_SECONDS = 300


@dataclass(frozen=True)
class ServerProfile:
    """Connection parameters for a single WebDAV server."""
    url: str
    username: str
    timeout: int = 30
    use_tls: bool = True
    id: Optional[str] = None
    name: Optional[str] = None

    def validate_url(self) -> None:
        if not self.url or not self.url.strip():
            raise ConfigError("URL cannot be empty")

        try:
            parts = urlsplit(self.url)
        except ValueError as e:
            raise ConfigError(f"Invalid URL format: {e}") from e

        if parts.scheme not in ("http", "https"):
            raise ConfigError(
                f"URL must use http or https protocol, found: {parts.scheme or 'none'}"
            )
        if not parts.hostname:
            raise ConfigError("URL must contain a valid host")

    def validate_username(self) -> None:
        if not self.username or not self.username.strip():
            raise ConfigError("Username cannot be empty")

    def validate_timeout(self) -> None:
        # bool is an int subclass; reject it explicitly
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int):
            raise ConfigError(f"Timeout must be an integer number of seconds, got: {self.timeout!r}")
        if self.timeout < MIN_TIMEOUT_SECONDS or self.timeout > MAX_TIMEOUT_SECONDS:
            raise ConfigError(
                f"Timeout must be between {MIN_TIMEOUT_SECONDS} and {MAX_TIMEOUT_SECONDS} "
                f"seconds, got: {self.timeout}"
            )

    def validate_name(self) -> None:
        if self.name is not None and not self.name.strip():
            raise ConfigError("Server name cannot be empty")

    def validate(self) -> "ServerProfile":
        """
        Run every check, raising on the first failure.

        Returns:
            The profile itself, so construction can be chained

        Raises:
            ConfigError: Describing the first invalid field
        """
        self.validate_name()
        self.validate_url()
        self.validate_username()
        self.validate_timeout()
        return self

    @property
    def base_path(self) -> str:
        """Path component of the endpoint URL without a trailing slash."""
        return urlsplit(self.url).path.rstrip("/")

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "ServerProfile":
        """
        Build a profile from a persisted server record.

        Accepts both camelCase (`useHttps`) and snake_case (`use_https`,
        `use_tls`) keys. A missing timeout falls back to
        `settings.WEBDAV_DEFAULT_TIMEOUT`. The result is not validated.
        """
        use_tls = record.get("use_tls", record.get("use_https", record.get("useHttps")))
        if use_tls is None:
            use_tls = str(record.get("url", "")).lower().startswith("https://")
        return cls(
            url=record.get("url", ""),
            username=record.get("username", ""),
            timeout=record.get("timeout", settings.WEBDAV_DEFAULT_TIMEOUT),
            use_tls=bool(use_tls),
            id=record.get("id"),
            name=record.get("name"),
        )

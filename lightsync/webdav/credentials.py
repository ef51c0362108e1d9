# lightsync/webdav/credentials.py
"""
Credential provider contract.

The application stores server passwords outside of the client (system keyring
or similar). The client only borrows a secret at construction time. This
module defines the interface the rest of the package relies on and an
in-memory implementation used by scripts and tests.
"""
from typing import Dict, Protocol

from lightsync.webdav.errors import ConfigError, NotFoundError


class CredentialProvider(Protocol):
    """Secret storage keyed by server id."""

    def get(self, server_id: str) -> str:
        ...

    def put(self, server_id: str, secret: str) -> None:
        ...

    def delete(self, server_id: str) -> None:
        ...


def _check_server_id(server_id: str) -> None:
    if not server_id or not server_id.strip():
        raise ConfigError("Server ID cannot be empty")


class InMemoryCredentialProvider:
    """Process-local credential store. Nothing is persisted."""

    def __init__(self, secrets: Dict[str, str] | None = None):
        self._secrets: Dict[str, str] = {}
        for server_id, secret in (secrets or {}).items():
            self.put(server_id, secret)

    def get(self, server_id: str) -> str:
        _check_server_id(server_id)
        try:
            return self._secrets[server_id]
        except KeyError:
            raise NotFoundError(f"Password not found for server: {server_id}") from None

    def put(self, server_id: str, secret: str) -> None:
        _check_server_id(server_id)
        if not secret:
            raise ConfigError("Password cannot be empty")
        self._secrets[server_id] = secret

    def delete(self, server_id: str) -> None:
        _check_server_id(server_id)
        if self._secrets.pop(server_id, None) is None:
            raise NotFoundError(f"Password not found for server: {server_id}")

    def __contains__(self, server_id: str) -> bool:
        return server_id in self._secrets

    def __repr__(self) -> str:
        return f"InMemoryCredentialProvider(servers={sorted(self._secrets)})"

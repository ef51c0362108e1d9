# tests/test_webdav_connection.py
"""
Tests for the connection test service and credential provider.
"""
from dataclasses import replace
from datetime import datetime, timezone

import httpx
import pytest

from lightsync.webdav.connection import apply_test_result, check_server_connection
from lightsync.webdav.credentials import InMemoryCredentialProvider
from lightsync.webdav.errors import ConfigError, NotFoundError
from lightsync.webdav.models import ConnectionTestResult, ServerInfo
from lightsync.webdav.server_type import ServerType


class TestCredentialProvider:

    def test_round_trip(self):
        provider = InMemoryCredentialProvider()
        provider.put("srv", "pw")
        assert provider.get("srv") == "pw"
        provider.delete("srv")
        assert "srv" not in provider

    def test_missing(self):
        provider = InMemoryCredentialProvider()
        with pytest.raises(NotFoundError, match="Password not found for server: srv"):
            provider.get("srv")
        with pytest.raises(NotFoundError):
            provider.delete("srv")

    @pytest.mark.parametrize("server_id", ["", "   "])
    def test_blank_server_id(self, server_id):
        provider = InMemoryCredentialProvider()
        with pytest.raises(ConfigError, match="Server ID cannot be empty"):
            provider.put(server_id, "pw")
        with pytest.raises(ConfigError):
            provider.get(server_id)

    def test_empty_secret(self):
        with pytest.raises(ConfigError, match="Password cannot be empty"):
            InMemoryCredentialProvider({"srv": ""})

    def test_repr_hides_secrets(self):
        provider = InMemoryCredentialProvider({"srv": "hunter2"})
        assert "hunter2" not in repr(provider)


class TestCheckServerConnection:

    @pytest.mark.asyncio
    async def test_success(self, profile, recording_handler):
        handler = recording_handler(default=httpx.Response(207, headers={"Server": "nginx/1.25"}))
        credentials = InMemoryCredentialProvider({profile.id: "pw"})

        result = await check_server_connection(profile, credentials, transport=httpx.MockTransport(handler))

        assert result.success is True
        assert result.message == "Successfully connected to nginx server"
        assert result.server_info.server_type is ServerType.NGINX
        assert result.error_kind is None
        assert result.latency_ms >= 0

    @pytest.mark.asyncio
    async def test_auth_failure_captured(self, profile, recording_handler):
        handler = recording_handler(default=httpx.Response(401))
        credentials = InMemoryCredentialProvider({profile.id: "pw"})

        result = await check_server_connection(profile, credentials, transport=httpx.MockTransport(handler))

        assert result.success is False
        assert result.error_kind == "auth"
        assert "Authentication failed" in result.message
        assert result.details["retryable"] is False

    @pytest.mark.asyncio
    async def test_transport_failure_captured(self, profile):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        credentials = InMemoryCredentialProvider({profile.id: "pw"})
        result = await check_server_connection(profile, credentials, transport=httpx.MockTransport(handler))

        assert result.success is False
        assert result.error_kind == "transport"
        assert result.details["retryable"] is True

    @pytest.mark.asyncio
    async def test_missing_password_raises(self, profile, handler, transport):
        with pytest.raises(NotFoundError):
            await check_server_connection(profile, InMemoryCredentialProvider(), transport=transport)
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_profile_without_id(self, profile, transport):
        with pytest.raises(ConfigError, match="no id"):
            await check_server_connection(replace(profile, id=None), InMemoryCredentialProvider(), transport=transport)

    @pytest.mark.asyncio
    async def test_invalid_profile_raises(self, profile, handler, transport):
        credentials = InMemoryCredentialProvider({profile.id: "pw"})
        with pytest.raises(ConfigError, match="Invalid server config"):
            await check_server_connection(replace(profile, timeout=0), credentials, transport=transport)
        assert handler.requests == []


class TestApplyTestResult:

    def _record(self):
        return {
            "id": "server-1",
            "name": "Test Server",
            "server_type": "generic",
            "last_test_status": "unknown",
            "last_test_error": None,
        }

    def test_success_updates_server_type(self):
        tested_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        result = ConnectionTestResult(
            success=True,
            message="Successfully connected to nextcloud server",
            tested_at=tested_at,
            server_info=ServerInfo(server_type=ServerType.NEXTCLOUD, url="https://h/dav"),
        )
        record = self._record()
        updated = apply_test_result(record, result)

        assert updated["last_test_status"] == "success"
        assert updated["last_test_error"] is None
        assert updated["server_type"] == "nextcloud"
        assert updated["last_test_at"] == int(tested_at.timestamp())
        assert record["server_type"] == "generic"

    def test_failure_keeps_server_type(self):
        result = ConnectionTestResult(
            success=False,
            message="Connection timeout after 30 seconds",
            tested_at=datetime.now(timezone.utc),
            error_kind="transport",
        )
        updated = apply_test_result(self._record(), result)
        assert updated["last_test_status"] == "failed"
        assert updated["last_test_error"] == "Connection timeout after 30 seconds"
        assert updated["server_type"] == "generic"

# lightsync/webdav/connection.py
"""
Connection test service.

Loads the secret for a server through the credential provider, builds a
short-lived client, probes the server and reports the outcome in a form the
application can persist on the server record.
"""
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from lightsync.monitoring.context import set_request_context
from lightsync.monitoring.logger import log
from lightsync.webdav.client import WebDAVClient
from lightsync.webdav.credentials import CredentialProvider
from lightsync.webdav.errors import ConfigError, WebDAVError
from lightsync.webdav.models import ConnectionTestResult, ServerInfo
from lightsync.webdav.profile import ServerProfile


async def check_server_connection(
    profile: ServerProfile,
    credentials: CredentialProvider,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ConnectionTestResult:
    """
    Test connectivity to the server described by `profile`.

    Credential lookup and profile validation failures are raised (they are
    not connection outcomes). Failures on the wire are captured in the
    returned result.

    Raises:
        ConfigError: If the profile has no id or is invalid, or the secret is empty
        NotFoundError: If no secret is stored for the server
    """
    if not profile.id:
        raise ConfigError("Server profile has no id; cannot look up credentials")

    set_request_context(server_id=profile.id, operation="test_connection")
    log("INFO", "Starting WebDAV connection test", module="connection", url=profile.url)

    secret = credentials.get(profile.id)
    client = WebDAVClient(profile, secret, transport=transport)
    tested_at = datetime.now(timezone.utc)
    started = time.perf_counter()
    try:
        server_type = await client.test_connection()
    except WebDAVError as e:
        latency_ms = (time.perf_counter() - started) * 1000
        log("WARNING", f"WebDAV connection test failed: {e}", module="connection", error_kind=e.kind.value)
        return ConnectionTestResult(
            success=False,
            message=str(e),
            tested_at=tested_at,
            error_kind=e.kind.value,
            latency_ms=latency_ms,
            details={"retryable": e.retryable},
        )
    finally:
        await client.aclose()

    latency_ms = (time.perf_counter() - started) * 1000
    log("INFO", f"WebDAV connection test succeeded ({server_type.value})", module="connection", latency_ms=round(latency_ms, 1))
    return ConnectionTestResult(
        success=True,
        message=f"Successfully connected to {server_type.value} server",
        tested_at=tested_at,
        server_info=ServerInfo(server_type=server_type, url=profile.url),
        latency_ms=latency_ms,
    )


def apply_test_result(record: Dict[str, Any], result: ConnectionTestResult) -> Dict[str, Any]:
    """
    Return a copy of a persisted server record updated with a test outcome.

    On success the detected server type replaces the stored one; on failure
    the previous server type is kept.
    """
    updated = dict(record)
    updated["last_test_at"] = int(result.tested_at.timestamp())
    updated["last_test_status"] = "success" if result.success else "failed"
    updated["last_test_error"] = None if result.success else result.message
    if result.success and result.server_info is not None:
        updated["server_type"] = result.server_info.server_type.value
    updated["updated_at"] = int(result.tested_at.timestamp())
    return updated

"""Small one-off script to exercise a real WebDAV server end to end.

Usage (from repo root):
  export WEBDAV_TEST_URL=https://cloud.example.com/remote.php/dav/files/me
  export WEBDAV_TEST_USERNAME=me
  export LIGHTSYNC_WEBDAV_PASSWORD=...
  PYTHONPATH=. .venv/bin/python scripts/webdav_test.py

This script will NOT print your password. It probes the server, creates a
scratch folder, uploads a small text file into it, downloads it back,
verifies the contents and removes the folder again.
"""
from __future__ import annotations

import asyncio
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from lightsync.config import settings
from lightsync.webdav import InMemoryCredentialProvider, ServerProfile, WebDAVClient, check_server_connection


async def main() -> None:
    print("WebDAV test starting...")
    url = os.environ["WEBDAV_TEST_URL"]
    profile = ServerProfile(
        id="webdav-test",
        name="WebDAV test",
        url=url,
        username=os.environ["WEBDAV_TEST_USERNAME"],
        timeout=settings.WEBDAV_DEFAULT_TIMEOUT,
        use_tls=url.lower().startswith("https://"),
    )
    # Do not print secrets
    credentials = InMemoryCredentialProvider({profile.id: os.environ["LIGHTSYNC_WEBDAV_PASSWORD"]})

    result = await check_server_connection(profile, credentials)
    print(result.message)
    if not result.success:
        return

    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    folder = f"lightsync_test_{ts}"
    content = f"webdav test {ts}\n".encode("utf-8")

    async with WebDAVClient(profile, credentials.get(profile.id)) as client:
        await client.mkdir(folder)
        print(f"Created {folder}")
        with tempfile.TemporaryDirectory() as tmp:
            local_path = Path(tmp) / "upload.txt"
            local_path.write_bytes(content)
            try:
                await client.upload(local_path, f"{folder}/upload.txt")
                print("Upload succeeded")

                entries = await client.list(folder)
                print(f"Listed {len(entries)} items in {folder}")

                dl_path = Path(tmp) / "download.txt"
                await client.download(f"{folder}/upload.txt", dl_path)
                read = dl_path.read_bytes()
                if read == content:
                    print("Round-trip content verified - OK")
                else:
                    print("Content mismatch: expected", len(content), "bytes, got", len(read), "bytes")
            finally:
                await client.delete(f"{folder}/")
                print(f"Removed {folder}")


if __name__ == "__main__":
    asyncio.run(main())

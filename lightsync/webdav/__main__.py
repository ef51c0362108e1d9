"""WebDAV client CLI (testing only).

Usage:
  LIGHTSYNC_WEBDAV_PASSWORD=... python -m lightsync.webdav --url https://host/dav --username me list /
"""
from __future__ import annotations

import asyncio
import getpass
import os

from lightsync.webdav.client import WebDAVClient
from lightsync.webdav.errors import WebDAVError
from lightsync.webdav.profile import ServerProfile
from lightsync.config import settings


async def main_cli(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="WebDAV client CLI (testing only)")
    parser.add_argument("--url", required=True)
    parser.add_argument("--username", required=True)
    parser.add_argument("--timeout", type=int, default=settings.WEBDAV_DEFAULT_TIMEOUT)
    parser.add_argument("action", choices=["test", "list", "upload", "download", "delete", "mkdir"])
    parser.add_argument("remote_path", nargs="?", default="/")
    parser.add_argument("local_path", nargs="?", default=None)
    args = parser.parse_args(argv)

    # Do not accept the password on the command line
    password = os.environ.get("LIGHTSYNC_WEBDAV_PASSWORD") or getpass.getpass("Password: ")
    profile = ServerProfile(
        url=args.url,
        username=args.username,
        timeout=args.timeout,
        use_tls=args.url.lower().startswith("https://"),
    )

    try:
        async with WebDAVClient(profile, password) as client:
            if args.action == "test":
                server_type = await client.test_connection()
                print(f"Connected: {server_type.value}")
            elif args.action == "list":
                for entry in await client.list(args.remote_path):
                    kind = "d" if entry.is_directory else "-"
                    print(f"{kind} {entry.size:>12} {entry.path}")
            elif args.action in ("upload", "download"):
                if not args.local_path:
                    raise SystemExit(f"{args.action} requires local_path")
                if args.action == "upload":
                    await client.upload(args.local_path, args.remote_path)
                else:
                    await client.download(args.remote_path, args.local_path)
                print(f"{args.action.capitalize()} completed")
            elif args.action == "delete":
                await client.delete(args.remote_path)
                print("Deleted")
            elif args.action == "mkdir":
                await client.mkdir(args.remote_path)
                print("Created")
    except WebDAVError as e:
        print(f"[{e.kind.value}] {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main_cli()))

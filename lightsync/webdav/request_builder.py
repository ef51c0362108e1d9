# lightsync/webdav/request_builder.py
"""
Builds the method, target URL, headers and body for each WebDAV operation.
"""
import base64
from dataclasses import dataclass, field
from typing import Dict, Optional

PROPFIND = "PROPFIND"
MKCOL = "MKCOL"

XML_CONTENT_TYPE = "application/xml; charset=utf-8"

PROBE_BODY = """<?xml version="1.0" encoding="utf-8" ?>
<D:propfind xmlns:D="DAV:">
  <D:prop>
    <D:resourcetype/>
    <D:getcontentlength/>
  </D:prop>
</D:propfind>"""

LIST_BODY = """<?xml version="1.0" encoding="utf-8" ?>
<D:propfind xmlns:D="DAV:">
  <D:prop>
    <D:resourcetype/>
    <D:getcontentlength/>
    <D:getlastmodified/>
    <D:displayname/>
    <D:getcontenttype/>
    <D:getetag/>
  </D:prop>
</D:propfind>"""


@dataclass(frozen=True)
class WebDAVRequest:
    """A fully built request ready for the transport."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None


def join_url(base_url: str, path: str) -> str:
    """
    Join a base URL and a relative path with exactly one slash.

    Trims one leading slash from `path` and one trailing slash from
    `base_url`, so "/documents", "documents" and a base with or without a
    trailing slash all produce the same URL.
    """
    if path.startswith("/"):
        path = path[1:]
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    return f"{base_url}/{path}"


def basic_auth_header(username: str, secret: str) -> str:
    token = base64.b64encode(f"{username}:{secret}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def build_probe(base_url: str) -> WebDAVRequest:
    """PROPFIND Depth 0 on the endpoint root."""
    return WebDAVRequest(
        method=PROPFIND,
        url=base_url,
        headers={"Depth": "0", "Content-Type": XML_CONTENT_TYPE},
        content=PROBE_BODY.encode("utf-8"),
    )


def build_list(base_url: str, path: str) -> WebDAVRequest:
    """PROPFIND Depth 1: the collection and its immediate children."""
    return WebDAVRequest(
        method=PROPFIND,
        url=join_url(base_url, path),
        headers={"Depth": "1", "Content-Type": XML_CONTENT_TYPE},
        content=LIST_BODY.encode("utf-8"),
    )


def build_upload(base_url: str, path: str, content: bytes) -> WebDAVRequest:
    return WebDAVRequest(method="PUT", url=join_url(base_url, path), content=content)


def build_download(base_url: str, path: str) -> WebDAVRequest:
    return WebDAVRequest(method="GET", url=join_url(base_url, path))


def build_delete(base_url: str, path: str) -> WebDAVRequest:
    return WebDAVRequest(method="DELETE", url=join_url(base_url, path))


def build_mkcol(base_url: str, path: str) -> WebDAVRequest:
    return WebDAVRequest(method=MKCOL, url=join_url(base_url, path))

# lightsync/webdav/multistatus.py
"""
Parser for `207 Multi-Status` bodies returned by PROPFIND Depth 1.

Elements are matched by local name in any namespace, so `D:`, `d:`, `lp1:`
or default-namespace documents all parse the same way.
"""
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import List, Optional
from urllib.parse import unquote, urlsplit

import structlog

from lightsync.webdav.errors import ProtocolError
from lightsync.webdav.models import FileEntry

logger = structlog.get_logger()

MULTI_STATUS = 207


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _ok_props(response: ET.Element) -> List[ET.Element]:
    """`prop` elements of the propstats whose status is 200 (or unstated)."""
    props = []
    for propstat in response.findall("{*}propstat"):
        status = propstat.find("{*}status")
        if status is not None and status.text and " 200 " not in f"{status.text.strip()} ":
            continue
        prop = propstat.find("{*}prop")
        if prop is not None:
            props.append(prop)
    return props


def _prop(props: List[ET.Element], name: str) -> Optional[ET.Element]:
    for prop in props:
        found = prop.find(f"{{*}}{name}")
        if found is not None:
            return found
    return None


def _prop_text(props: List[ET.Element], name: str) -> Optional[str]:
    return _element_text(_prop(props, name))


def _element_text(found: Optional[ET.Element]) -> Optional[str]:
    if found is None or found.text is None:
        return None
    text = found.text.strip()
    return text or None


def normalize_path(path: str) -> str:
    """Collapse a remote path to `/a/b` form (root is `/`)."""
    stripped = path.strip("/")
    return f"/{stripped}" if stripped else "/"


def href_to_path(href: str, base_path: str = "") -> str:
    """
    Turn an href into a path relative to the endpoint base path.

    Absolute URLs are reduced to their path, percent-escapes are decoded and
    the endpoint's own path prefix (e.g. `/remote.php/dav/files/user`) is
    removed.
    """
    path = unquote(urlsplit(href).path if "://" in href else href)
    path = normalize_path(path)
    prefix = normalize_path(unquote(base_path))
    if prefix != "/":
        if path == prefix:
            return "/"
        if path.startswith(prefix + "/"):
            path = path[len(prefix):]
    return path


def parse_http_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 1123 `getlastmodified` value into an aware UTC datetime."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_size(value: Optional[str]) -> int:
    if value is None:
        return 0
    try:
        size = int(value)
    except ValueError:
        return 0
    return size if size >= 0 else 0


def parse_multistatus(
    body: str | bytes,
    queried_path: str,
    base_path: str = "",
    status_code: int = MULTI_STATUS,
) -> List[FileEntry]:
    """
    Extract the children listed in a multi-status body.

    Properties are read only from propstats reporting 200 (or no status);
    a 404 propstat listing unsupported properties never masks real values.

    Args:
        body: Raw XML response body
        queried_path: Path passed to the listing, relative to the endpoint
        base_path: Path component of the endpoint URL
        status_code: HTTP status the body arrived with, carried by parse errors

    Returns:
        One FileEntry per child; the queried collection itself is excluded

    Raises:
        ProtocolError: If the body is not well-formed multistatus XML or a
            response element has no href
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        logger.error("webdav_multistatus_malformed", error=str(e), status=status_code)
        raise ProtocolError(
            f"Malformed multi-status response: {e}", status_code=status_code
        ) from e

    if _local_name(root.tag) != "multistatus":
        raise ProtocolError(
            f"Unexpected response document: expected multistatus, got {_local_name(root.tag)}",
            status_code=status_code,
        )

    target = normalize_path(queried_path)
    entries: List[FileEntry] = []

    for response in root.findall("{*}response"):
        href = _element_text(response.find("{*}href"))
        if href is None:
            raise ProtocolError(
                "Multi-status response entry is missing its href",
                status_code=status_code,
            )

        path = href_to_path(href, base_path)
        if path == target:
            continue

        props = _ok_props(response)
        resource_type = _prop(props, "resourcetype")
        is_directory = resource_type is not None and resource_type.find("{*}collection") is not None

        entries.append(
            FileEntry(
                path=path,
                name=path.rsplit("/", 1)[-1],
                is_directory=is_directory,
                size=0 if is_directory else _parse_size(_prop_text(props, "getcontentlength")),
                modified=parse_http_date(_prop_text(props, "getlastmodified")),
                content_type=None if is_directory else _prop_text(props, "getcontenttype"),
                etag=_prop_text(props, "getetag"),
            )
        )

    logger.debug("webdav_multistatus_parsed", path=target, count=len(entries))
    return entries

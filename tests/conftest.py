import httpx
import pytest

from lightsync.webdav.profile import ServerProfile


DOCUMENTS_LISTING = b"""<?xml version="1.0" encoding="utf-8"?>
<D:multistatus xmlns:D="DAV:">
  <D:response>
    <D:href>/documents/</D:href>
    <D:propstat>
      <D:prop>
        <D:resourcetype><D:collection/></D:resourcetype>
      </D:prop>
      <D:status>HTTP/1.1 200 OK</D:status>
    </D:propstat>
  </D:response>
  <D:response>
    <D:href>/documents/report.pdf</D:href>
    <D:propstat>
      <D:prop>
        <D:resourcetype/>
        <D:getcontentlength>1024</D:getcontentlength>
        <D:getlastmodified>Wed, 01 Jan 2025 12:00:00 GMT</D:getlastmodified>
        <D:getcontenttype>application/pdf</D:getcontenttype>
        <D:getetag>"abc123"</D:getetag>
      </D:prop>
      <D:status>HTTP/1.1 200 OK</D:status>
    </D:propstat>
  </D:response>
  <D:response>
    <D:href>/documents/photos/</D:href>
    <D:propstat>
      <D:prop>
        <D:resourcetype><D:collection/></D:resourcetype>
      </D:prop>
      <D:status>HTTP/1.1 200 OK</D:status>
    </D:propstat>
  </D:response>
</D:multistatus>"""


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays canned responses.

    `routes` maps "METHOD /path" (or just "METHOD") to an httpx.Response or a
    callable taking the request and returning one.
    """

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default if default is not None else httpx.Response(200)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for key in (f"{request.method} {request.url.path}", request.method):
            if key in self.routes:
                resp = self.routes[key]
                return resp(request) if callable(resp) else self._fresh(resp)
        return self._fresh(self.default)

    @staticmethod
    def _fresh(resp: httpx.Response) -> httpx.Response:
        # A Response object can only be sent once; hand out copies
        return httpx.Response(resp.status_code, headers=resp.headers, content=resp.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def profile():
    return ServerProfile(
        id="server-1",
        name="Test Server",
        url="https://example.com/webdav",
        username="testuser",
        timeout=30,
        use_tls=True,
    )


@pytest.fixture
def documents_listing():
    return DOCUMENTS_LISTING


@pytest.fixture
def recording_handler():
    """Factory for RecordingHandler instances."""
    return RecordingHandler


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def transport(handler):
    return httpx.MockTransport(handler)

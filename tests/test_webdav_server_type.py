# tests/test_webdav_server_type.py
import httpx
import pytest

from lightsync.webdav.server_type import ServerType, detect_server_type


@pytest.mark.parametrize(
    "headers,expected",
    [
        ({"Server": "Apache/2.4 Nextcloud"}, ServerType.NEXTCLOUD),
        ({"Server": "ownCloud"}, ServerType.OWNCLOUD),
        ({"Server": "Apache/2.4.41 (Ubuntu)"}, ServerType.APACHE),
        ({"Server": "nginx/1.18.0"}, ServerType.NGINX),
        ({"Server": "Microsoft-IIS/10.0", "X-Powered-By": "Nextcloud"}, ServerType.NEXTCLOUD),
        ({"X-Powered-By": "PHP ownCloud"}, ServerType.OWNCLOUD),
        ({"X-OC-Version": "10.0.1"}, ServerType.OWNCLOUD),
        ({"Server": "lighttpd"}, ServerType.GENERIC),
        ({}, ServerType.GENERIC),
    ],
)
def test_detect_server_type(headers, expected):
    assert detect_server_type(headers) is expected


def test_server_header_wins_over_powered_by():
    headers = {"Server": "nginx", "X-Powered-By": "Nextcloud"}
    assert detect_server_type(headers) is ServerType.NGINX


def test_case_insensitive_headers():
    assert detect_server_type({"server": "NEXTCLOUD"}) is ServerType.NEXTCLOUD
    assert detect_server_type(httpx.Headers({"SERVER": "Nginx"})) is ServerType.NGINX


def test_value_serializes_as_string():
    assert str(ServerType.NEXTCLOUD) == "nextcloud"

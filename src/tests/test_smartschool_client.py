from __future__ import annotations

import pytest
import requests
from conftest import BASE_URL, FakeAdapter

from smartschool import SmartschoolClient
from smartschool.errors import AuthenticationError
from smartschool.mydoc.client import MyDocClient
from smartschool.session import Session
from smartschool.upload.client import UploadClient

LOGIN_URL = f"{BASE_URL}/login"
LOGIN_PAGE = '<input type="hidden" name="login_form[_token]"  value="tok">'


def _serve_login(adapter: FakeAdapter) -> None:
    adapter.add("GET", LOGIN_URL, body=LOGIN_PAGE, set_cookies=("PHPSESSID=a; path=/",))
    adapter.add("POST", LOGIN_URL, status=302, set_cookies=("PHPSESSID=b; path=/",))


def test_wraps_session(session: Session) -> None:
    client = SmartschoolClient(session)
    assert client.session is session
    assert client.url == BASE_URL
    assert isinstance(client.mydoc, MyDocClient)
    assert isinstance(client.upload, UploadClient)


def test_login(adapter: FakeAdapter, http: requests.Session) -> None:
    _serve_login(adapter)

    client = SmartschoolClient.login(BASE_URL, "jdoe", "s3cret", http=http)

    assert client.url == BASE_URL
    assert client.session.session_id == "b"


def test_from_config__reads_environment(
    adapter: FakeAdapter, http: requests.Session, monkeypatch: pytest.MonkeyPatch
) -> None:
    _serve_login(adapter)
    monkeypatch.setenv("SMARTSCHOOL_URL", BASE_URL)
    monkeypatch.setenv("SMARTSCHOOL_USERNAME", "jdoe")
    monkeypatch.setenv("SMARTSCHOOL_PASSWORD", "s3cret")

    client = SmartschoolClient.from_config(http=http)

    assert client.url == BASE_URL


def test_login__bad_credentials(adapter: FakeAdapter, http: requests.Session) -> None:
    adapter.add("GET", LOGIN_URL, body=LOGIN_PAGE)
    adapter.add("POST", LOGIN_URL, status=200, body=LOGIN_PAGE)

    with pytest.raises(AuthenticationError):
        SmartschoolClient.login(BASE_URL, "jdoe", "wrong", http=http)


def test_upload_round_trip_names_are_exported() -> None:
    import smartschool
    from smartschool.mydoc.models import FolderId
    from smartschool.upload.models import UploadDirectory, UploadFile

    assert smartschool.FolderId is FolderId
    assert smartschool.UploadDirectory is UploadDirectory
    assert smartschool.UploadFile is UploadFile
    assert {"FolderId", "UploadDirectory", "UploadFile"} <= set(smartschool.__all__)


def test_sessions_are_independent(adapter: FakeAdapter) -> None:
    """Two accounts in one process keep separate cookie jars."""
    _serve_login(adapter)
    first_http, second_http = requests.Session(), requests.Session()
    for h in (first_http, second_http):
        h.mount("https://", adapter)

    first = SmartschoolClient.login(BASE_URL, "a", "pw", http=first_http)
    first_http.cookies.set("PHPSESSID", "changed", domain="myschool.smartschool.be", path="/")
    second = SmartschoolClient.login(BASE_URL, "b", "pw", http=second_http)

    assert first.session.session_id == "changed"
    assert second.session.session_id == "b"

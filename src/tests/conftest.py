from __future__ import annotations

import io
import json as jsonlib
import os
from email.message import Message
from http.client import HTTPMessage
from types import SimpleNamespace
from typing import Any, Iterator

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.cookies import extract_cookies_to_jar
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from smartschool.session import Session

BASE_URL = "https://myschool.smartschool.be"

FILE_ID = "0b1e8f4c-3f4a-4b8e-9a43-6b2b6f3c1a11"
REVISION_ID = "5d7c2a9e-8f31-4c55-b1a2-7e6f9d0c4b22"
FOLDER_ID = "9a3e7d21-54b6-4f0f-8c6d-2e1b3a4c5d33"
PARENT_FOLDER_ID = "c4d5e6f7-1a2b-4c3d-9e8f-0a1b2c3d4e44"


class _RawBody(io.BytesIO):
    """Stands in for urllib3's response: a body plus the parsed headers.

    ``requests`` reads ``Set-Cookie`` headers through
    ``raw._original_response.msg``; providing it lets the real cookie
    handling run.
    """

    def __init__(self, body: bytes, set_cookies: tuple[str, ...]) -> None:
        super().__init__(body)
        msg: Message = HTTPMessage()
        for cookie in set_cookies:
            msg["Set-Cookie"] = cookie
        self._original_response = SimpleNamespace(msg=msg)


class FakeAdapter(BaseAdapter):
    """Transport adapter answering from a table of canned replies.

    Unregistered URLs answer 404, like the server does for unknown ids.
    Every prepared request is recorded in :attr:`requests`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.replies: dict[tuple[str, str], dict[str, Any] | Exception] = {}
        self.requests: list[requests.PreparedRequest] = []

    def add(
        self,
        method: str,
        url: str,
        *,
        status: int = 200,
        body: bytes | str = b"",
        json: Any = None,
        set_cookies: tuple[str, ...] = (),
        headers: dict[str, str] | None = None,
    ) -> None:
        headers = dict(headers or {})
        if json is not None:
            body = jsonlib.dumps(json)
            headers.setdefault("Content-Type", "application/json")
        if isinstance(body, str):
            body = body.encode("utf-8")
            headers.setdefault("Content-Type", "text/html; charset=utf-8")
        self.replies[(method, url)] = {
            "status": status,
            "body": body,
            "set_cookies": set_cookies,
            "headers": headers,
        }

    def fail(self, method: str, url: str, exc: Exception) -> None:
        self.replies[(method, url)] = exc

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def send(
        self,
        request: requests.PreparedRequest,
        stream: bool = False,
        timeout: Any = None,
        verify: Any = True,
        cert: Any = None,
        proxies: Any = None,
    ) -> requests.Response:
        self.requests.append(request)
        reply = self.replies.get((request.method, request.url))
        if isinstance(reply, Exception):
            raise reply
        if reply is None:
            reply = {"status": 404, "body": b"", "set_cookies": (), "headers": {}}

        raw = _RawBody(reply["body"], reply["set_cookies"])
        response = requests.Response()
        response.status_code = reply["status"]
        response.reason = "OK" if reply["status"] < 400 else "Error"
        response.headers = CaseInsensitiveDict(reply["headers"])
        response.encoding = get_encoding_from_headers(response.headers)
        response.raw = raw
        response.url = request.url
        response.request = request
        extract_cookies_to_jar(response.cookies, request, raw)
        return response

    def close(self) -> None:
        pass


@pytest.fixture(autouse=True)
def clear_smartschool_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove SMARTSCHOOL_* vars to prevent cross-test leakage."""
    for key in [k for k in os.environ if k.upper().startswith("SMARTSCHOOL_")]:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture()
def http(adapter: FakeAdapter) -> requests.Session:
    """A real requests.Session whose traffic goes to ``adapter``."""
    client = requests.Session()
    client.mount("https://", adapter)
    client.mount("http://", adapter)
    return client


@pytest.fixture()
def session(http: requests.Session) -> Session:
    return Session(url=BASE_URL, http=http)


@pytest.fixture()
def revision_payload() -> dict[str, Any]:
    return {
        "id": REVISION_ID,
        "fileId": FILE_ID,
        "label": "notes.txt",
        "fileSize": 1234,
        "mimeType": "text/plain",
        "dateCreated": "2019-06-19T17:31:08+02:00",
        "location": "1_2_3_" + REVISION_ID,
    }


@pytest.fixture()
def file_payload(revision_payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": FILE_ID,
        "name": "notes.txt",
        "parentId": "",
        "state": "active",
        "isFavourite": False,
        "currentRevision": revision_payload,
        "currentRevisionId": REVISION_ID,
        "dateChanged": "2019-06-19T17:31:08+02:00",
        "dateCreated": "2019-06-18T09:00:00+02:00",
        "dateRecentAction": "2019-06-19T17:31:08+02:00",
        "dateStateChanged": "2019-06-18T09:00:00+02:00",
    }


@pytest.fixture()
def folder_payload() -> dict[str, Any]:
    return {
        "id": FOLDER_ID,
        "name": "Homework",
        "parentId": PARENT_FOLDER_ID,
        "state": "active",
        "isFavourite": True,
        "color": "green",
        "hasSubFolders": False,
        "dateChanged": "2019-06-19T17:31:08+02:00",
        "dateCreated": "2019-06-18T09:00:00+02:00",
        "dateStateChanged": "2019-06-18T09:00:00+02:00",
    }


@pytest.fixture()
def history_payload() -> dict[str, Any]:
    return {
        "date": "2019-06-19T17:31:08+02:00",
        "text": "File was downloaded",
        "isDownloadEvent": True,
        "isSpecialEvent": False,
        "user": {
            "userIdentifier": "1_2_3",
            "name": "Jane Doe",
            "userPictureHash": "abc123",
        },
    }

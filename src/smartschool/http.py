"""Request helpers shared by every operation.

Each helper performs exactly one HTTP round trip. Failures are classified
into the package's error types and raised immediately; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from functools import lru_cache
from typing import Any, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from smartschool.errors import DecodeError, HttpStatusError, TransportError
from smartschool.session import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")

DOWNLOAD_CHUNK_SIZE = 64 * 1024


def request(
    http: requests.Session,
    method: str,
    url: str,
    *,
    timeout: float | None = None,
    **kwargs: Any,
) -> requests.Response:
    """Send one request with redirects disabled.

    Raises:
        TransportError: If ``requests`` could not produce a response.
    """
    logger.debug("%s %s", method, url)
    try:
        return http.request(
            method, url, allow_redirects=False, timeout=timeout, **kwargs
        )
    except requests.RequestException as exc:
        raise TransportError(f"{method} {url} failed: {exc}") from exc


def is_error_status(status_code: int) -> bool:
    return 400 <= status_code < 600


def send(session: Session, method: str, path: str, **kwargs: Any) -> requests.Response:
    """Send an authenticated request to ``session.url + path``.

    Raises:
        TransportError: If no response was received.
        HttpStatusError: If the server answered with a 4xx or 5xx status.
    """
    url = f"{session.url}{path}"
    response = request(session.http, method, url, timeout=session.timeout, **kwargs)
    if is_error_status(response.status_code):
        logger.debug("%s %s answered %s", method, url, response.status_code)
        response.close()
        raise HttpStatusError(response.status_code, url)
    return response


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def decode(response: requests.Response, type_: type[T] | Any) -> T:
    """Validate a JSON response body against ``type_``.

    Raises:
        DecodeError: If the body is not JSON or does not match ``type_``.
    """
    try:
        return _adapter(type_).validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected response body from {response.url}: {exc}"
        ) from exc


def get_json(session: Session, path: str, type_: type[T] | Any) -> T:
    return decode(send(session, "GET", path), type_)


def post_json(
    session: Session,
    path: str,
    type_: type[T] | Any,
    payload: dict[str, Any] | None = None,
) -> T:
    """POST ``payload`` (if any) as JSON and decode the JSON answer."""
    if payload is None:
        response = send(session, "POST", path)
    else:
        response = send(session, "POST", path, json=payload)
    return decode(response, type_)


def post(session: Session, path: str) -> None:
    send(session, "POST", path).close()


def delete(session: Session, path: str) -> None:
    send(session, "DELETE", path).close()


def iter_chunks(
    response: requests.Response, chunk_size: int = DOWNLOAD_CHUNK_SIZE
) -> Iterator[bytes]:
    """Yield the body of a streamed response, closing it when exhausted."""
    try:
        for chunk in response.iter_content(chunk_size=chunk_size):
            if chunk:
                yield chunk
    except requests.RequestException as exc:
        raise TransportError(f"Reading {response.url} failed: {exc}") from exc
    finally:
        response.close()


def get_stream(session: Session, path: str) -> Iterator[bytes]:
    """Start a streamed GET and return an iterator over the body.

    The status is checked before this returns; transport errors while reading
    surface from the iterator.
    """
    response = send(session, "GET", path, stream=True)
    return iter_chunks(response)

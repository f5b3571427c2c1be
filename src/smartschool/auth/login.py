from __future__ import annotations

import logging

import requests

from smartschool.errors import AuthenticationError, DecodeError
from smartschool.http import is_error_status, request
from smartschool.session import SESSION_COOKIE, Session, build_http_client

from .config import ClientConfig
from .token import LoginToken, extract_login_token
from .urls import login_url

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials or expired login token"


def fetch_login_token(
    http: requests.Session, url: str, timeout: float | None = None
) -> LoginToken:
    """GET the login page and pull the login token out of it.

    The session cookie the page sets stays in ``http``'s cookie jar and is
    sent back with the credentials.

    Raises:
        TransportError: If the page could not be fetched.
        AuthenticationError: If the page errored or carries no token.
        DecodeError: If the page is not UTF-8 text.
    """
    response = request(http, "GET", login_url(url), timeout=timeout)
    if is_error_status(response.status_code):
        logger.error("Login page answered HTTP %s", response.status_code)
        raise AuthenticationError(
            f"Login page answered HTTP {response.status_code}"
        )

    if SESSION_COOKIE not in response.cookies:
        logger.debug("Login page did not set %s", SESSION_COOKIE)

    try:
        body = response.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError("Login page was not UTF-8-encoded") from exc

    return extract_login_token(body)


def post_credentials(
    http: requests.Session,
    url: str,
    username: str,
    password: str,
    token: LoginToken,
    timeout: float | None = None,
) -> None:
    """POST the credentials and check that a new session cookie was issued.

    Rejected credentials and an expired token cannot be told apart from the
    response, so both raise the same error.

    Raises:
        TransportError: If the form could not be posted.
        AuthenticationError: If no session cookie came back.
    """
    response = request(
        http,
        "POST",
        login_url(url),
        timeout=timeout,
        data=token.form_fields(username, password),
    )
    if is_error_status(response.status_code) or SESSION_COOKIE not in response.cookies:
        logger.error("Login rejected; status:%s", response.status_code)
        raise AuthenticationError(INVALID_CREDENTIALS)


def login(
    url: str,
    username: str,
    password: str,
    *,
    config: ClientConfig | None = None,
    http: requests.Session | None = None,
) -> Session:
    """Log in to a Smartschool instance and return an authenticated session.

    Args:
        url: Base URL of the instance, e.g. "https://myschool.smartschool.be".
            Kept verbatim in the returned session.
        username: Account user name.
        password: Account password.
        config: Transport settings (timeout, user agent, TLS verification).
            Its own url and credentials are ignored here.
        http: Pre-built HTTP client to use instead of one built from ``config``.

    Returns:
        A session bound to ``url``.

    Raises:
        AuthenticationError: If the handshake did not produce a session.
        TransportError: If the instance could not be reached.
        DecodeError: If the login page could not be read as text.
    """
    timeout = config.timeout if config else None
    if http is None:
        http = build_http_client(config)

    token = fetch_login_token(http, url, timeout=timeout)
    post_credentials(http, url, username, password, token, timeout=timeout)

    logger.info("Logged in to %s", url)
    return Session(url=url, http=http, timeout=timeout)


def login_with_config(
    config: ClientConfig | None = None, *, http: requests.Session | None = None
) -> Session:
    """Log in with the url and credentials held by ``config``.

    Args:
        config: Client configuration. If ``None``, it is read from the environment.
        http: Optional pre-built HTTP client.

    Raises:
        ValueError: If the configuration lacks the url or the credentials.
    """
    cfg = config or ClientConfig()
    url, username, password = cfg.require_credentials()
    return login(url, username, password, config=cfg, http=http)

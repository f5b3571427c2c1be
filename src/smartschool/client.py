from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from smartschool.auth.config import ClientConfig
from smartschool.auth.login import login, login_with_config

from .mydoc.client import MyDocClient
from .session import Session
from .upload.client import UploadClient

logger = logging.getLogger(__name__)


@dataclass
class SmartschoolClient:
    """Client for one logged-in Smartschool account.

    This client owns the session and exposes sub-clients for the virtual
    file system and for upload staging. All of them share the session's
    cookie jar.
    """

    _session: Session
    _mydoc: MyDocClient
    _upload: UploadClient

    def __init__(self, session: Session) -> None:
        """Wrap an already authenticated session.

        Args:
            session: A session returned by :func:`smartschool.auth.login.login`.
        """
        self._session = session
        self._mydoc = MyDocClient(session)
        self._upload = UploadClient(session)

    @classmethod
    def login(
        cls,
        url: str,
        username: str,
        password: str,
        *,
        config: ClientConfig | None = None,
        http: requests.Session | None = None,
    ) -> SmartschoolClient:
        """Log in and return a client for the account.

        See :func:`smartschool.auth.login.login` for the arguments and errors.
        """
        return cls(login(url, username, password, config=config, http=http))

    @classmethod
    def from_config(
        cls,
        config: ClientConfig | None = None,
        *,
        http: requests.Session | None = None,
    ) -> SmartschoolClient:
        """Log in with url and credentials from ``config`` or the environment."""
        return cls(login_with_config(config, http=http))

    @property
    def session(self) -> Session:
        return self._session

    @property
    def url(self) -> str:
        """Base URL of the instance, exactly as given at login."""
        return self._session.url

    @property
    def mydoc(self) -> MyDocClient:
        """Return the "My Documents" client for this account."""
        return self._mydoc

    @property
    def upload(self) -> UploadClient:
        """Return the upload staging client for this account."""
        return self._upload

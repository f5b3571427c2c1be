from __future__ import annotations

from dataclasses import dataclass

import requests

from smartschool.auth.config import ClientConfig

SESSION_COOKIE = "PHPSESSID"


@dataclass(frozen=True)
class Session:
    """Authenticated handle on one Smartschool instance.

    Holds the base URL exactly as it was passed to the login, and the HTTP
    client whose cookie jar carries the session cookie. Every session owns
    its own client, so several logged-in users can share a process.
    """

    url: str
    http: requests.Session
    timeout: float | None = None

    @property
    def session_id(self) -> str | None:
        """Return the current ``PHPSESSID`` value, if the jar holds one."""
        return self.http.cookies.get(SESSION_COOKIE)


def build_http_client(config: ClientConfig | None = None) -> requests.Session:
    """Build a cookie-persisting HTTP client from the transport settings.

    Redirects are not followed; every request in this package passes
    ``allow_redirects=False`` because ``requests`` has no per-session switch.

    Args:
        config: Client configuration. If ``None``, defaults are used.
    """
    cfg = config or ClientConfig()
    http = requests.Session()
    http.verify = cfg.verify
    if cfg.user_agent:
        http.headers["User-Agent"] = cfg.user_agent
    return http

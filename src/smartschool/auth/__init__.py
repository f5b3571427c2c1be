"""Authentication helpers for a Smartschool instance.

Public API:
- ClientConfig (settings)
- LoginToken, extract_login_token() (login page scraping)
- ensure_absolute_url(), login_url() (URL helpers)

The handshake itself lives in :mod:`smartschool.auth.login`.
"""

from .config import ClientConfig
from .token import LoginToken, extract_login_token
from .urls import ensure_absolute_url, login_url

__all__ = [
    "ClientConfig",
    "LoginToken",
    "extract_login_token",
    "ensure_absolute_url",
    "login_url",
]

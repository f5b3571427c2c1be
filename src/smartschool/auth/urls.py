from typing import Final
from urllib.parse import urlparse

LOGIN_PATH: Final[str] = "/login"
MYDOC_API_PATH: Final[str] = "/mydoc/api/v1"
UPLOAD_API_PATH: Final[str] = "/upload/api/v1"
LEGACY_UPLOAD_PATH: Final[str] = "/Upload/Upload/Index"


def ensure_absolute_url(url: str) -> str:
    """Return ``url`` unchanged after checking it has a scheme and a host.

    Args:
        url: Base URL of a Smartschool instance (e.g., "https://myschool.smartschool.be").

    Returns:
        The same string, never normalized.

    Raises:
        ValueError: If ``url`` is not absolute or lacks a host.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("url must be an absolute URL")
    return url


def login_url(base_url: str) -> str:
    return f"{base_url}{LOGIN_PATH}"

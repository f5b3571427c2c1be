from __future__ import annotations


class SmartschoolError(Exception):
    """Base class for every error raised by this package."""


class TransportError(SmartschoolError):
    """Raised when the HTTP stack fails to produce a response.

    DNS failures, TLS errors, connection resets and timeouts all end up here;
    the original ``requests`` exception is chained as ``__cause__``.
    """


class AuthenticationError(SmartschoolError):
    """Raised when the login handshake does not yield a session.

    The login page not carrying a token and the server rejecting the posted
    credentials are reported through this single type.
    """


class HttpStatusError(SmartschoolError):
    """Raised when the server answers an operation with a 4xx or 5xx status."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class DecodeError(SmartschoolError, ValueError):
    """Raised when a response body is not the text or JSON shape expected."""

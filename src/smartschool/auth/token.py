"""Login token extraction from the server-rendered login page.

The login form's hidden inputs happen to be the only elements on the page
rendered with two spaces before their ``value`` attribute. Matching on that
quirk replaces a real HTML parser. If logging in starts failing with a
missing token, this is the function to revisit.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from smartschool.errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_VALUE_PATTERN = re.compile(r'  value="([^"]+)"')
NAME_PATTERN = re.compile(r'(?<![\w-])name="([^"]*)"')

USERNAME_FIELD = "login_form[_username]"
PASSWORD_FIELD = "login_form[_password]"
TOKEN_FIELD = "login_form[_token]"
GENERATION_TIME_FIELD = "login_form[_generationTime]"


@dataclass(frozen=True)
class LoginToken:
    """Hidden form values scraped from one login page, valid for one POST."""

    token: str
    generation_time: str | None = None

    def form_fields(self, username: str, password: str) -> dict[str, str]:
        """Build the form body posted back to the login page."""
        fields = {
            USERNAME_FIELD: username,
            PASSWORD_FIELD: password,
            TOKEN_FIELD: self.token,
        }
        if self.generation_time is not None:
            fields[GENERATION_TIME_FIELD] = self.generation_time
        return fields


def _enclosing_name(body: str, position: int) -> str | None:
    """Return the ``name`` attribute of the tag surrounding ``position``."""
    start = body.rfind("<", 0, position)
    end = body.find(">", position)
    if start == -1:
        return None
    tag = body[start : end if end != -1 else len(body)]
    match = NAME_PATTERN.search(tag)
    return match.group(1) if match else None


def extract_login_token(body: str) -> LoginToken:
    """Extract the login token from the login page HTML.

    Two page layouts are known: one with a single double-spaced ``value``
    attribute (the token), and one with two of them (a generation timestamp
    and the token). In the latter the enclosing inputs' names decide which is
    which, falling back to document order (timestamp first).

    Args:
        body: The login page, decoded as text.

    Returns:
        The token, plus the generation time when the page carries one.

    Raises:
        AuthenticationError: If the page has no token or an unknown layout.
    """
    matches = list(TOKEN_VALUE_PATTERN.finditer(body))

    if not matches:
        # A wrong URL, an unsupported scheme and changed markup all look alike here.
        logger.error("Login page did not contain a token")
        raise AuthenticationError("Server response did not contain a login token")

    if len(matches) == 1:
        return LoginToken(token=matches[0].group(1))

    if len(matches) > 2:
        logger.error("Unrecognised login page layout; candidates:%d", len(matches))
        raise AuthenticationError("Unrecognised login page layout")

    token: str | None = None
    generation_time: str | None = None
    for match in matches:
        name = _enclosing_name(body, match.start()) or ""
        if "_generationTime" in name:
            generation_time = match.group(1)
        elif "_token" in name:
            token = match.group(1)

    if token is None or generation_time is None:
        logger.warning("Hidden inputs are not named as expected; using document order")
        generation_time, token = matches[0].group(1), matches[1].group(1)

    return LoginToken(token=token, generation_time=generation_time)

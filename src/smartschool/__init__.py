"""Client library for the Smartschool platform's internal web API.

Example::

    from smartschool import SmartschoolClient

    client = SmartschoolClient.login(
        "https://myschool.smartschool.be", "username", "password"
    )
    for file in client.mydoc.get_recent_files():
        print(file.name)
"""

from .auth.config import ClientConfig
from .auth.login import login, login_with_config
from .client import SmartschoolClient
from .errors import (
    AuthenticationError,
    DecodeError,
    HttpStatusError,
    SmartschoolError,
    TransportError,
)
from .mydoc.models import FolderId
from .session import Session
from .upload.models import UploadDirectory, UploadFile

__all__ = [
    "AuthenticationError",
    "ClientConfig",
    "DecodeError",
    "FolderId",
    "HttpStatusError",
    "Session",
    "SmartschoolClient",
    "SmartschoolError",
    "TransportError",
    "UploadDirectory",
    "UploadFile",
    "login",
    "login_with_config",
]

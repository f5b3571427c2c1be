from __future__ import annotations

import mimetypes
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, ConfigDict, Field

UPLOAD_DIRECTORY_BYTES = 15


@dataclass(frozen=True)
class UploadDirectory:
    """Handle on a staging area for uploaded bytes.

    Any non-empty string works; the server hands out 30 random hexadecimal
    characters but does not require directories to come from it.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("upload directory must be a non-empty string")

    @classmethod
    def random(cls) -> UploadDirectory:
        """Make a fresh directory name without asking the server."""
        return cls(secrets.token_hex(UPLOAD_DIRECTORY_BYTES))

    def __str__(self) -> str:
        return self.value


class UploadDirectoryResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    upload_dir: str = Field(alias="uploadDir", min_length=1)


@dataclass(frozen=True)
class UploadFile:
    """A named payload ready to be sent to an upload directory.

    The server may alter the name: anything up to a ``/`` or ``\\`` is
    dropped and other illegal characters become ``_``. Names containing ``:``
    or starting or ending with ``.`` are refused.
    """

    name: str
    content: bytes | BinaryIO
    mime_type: str | None = None

    @classmethod
    def from_bytes(cls, data: bytes, name: str, mime_type: str | None = None) -> UploadFile:
        return cls(name, data, mime_type or _guess_type(name))

    @classmethod
    def from_text(
        cls,
        text: str,
        name: str,
        encoding: str = "utf-8",
        mime_type: str | None = None,
    ) -> UploadFile:
        return cls(name, text.encode(encoding), mime_type or _guess_type(name))

    @classmethod
    def from_reader(
        cls, reader: BinaryIO, name: str, mime_type: str | None = None
    ) -> UploadFile:
        """Wrap an open binary stream; it is read when the upload is sent."""
        return cls(name, reader, mime_type or _guess_type(name))

    @classmethod
    def from_path(
        cls, path: str | Path, name: str | None = None, mime_type: str | None = None
    ) -> UploadFile:
        """Read a local file; its own name is used unless ``name`` is given."""
        path = Path(path)
        name = name or path.name
        return cls(name, path.read_bytes(), mime_type or _guess_type(name))

    def multipart(self) -> tuple[str, bytes | BinaryIO, str]:
        """Return the ``(filename, content, content_type)`` tuple requests expects."""
        return (self.name, self.content, self.mime_type or "application/octet-stream")


def _guess_type(name: str) -> str | None:
    return mimetypes.guess_type(name)[0]

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, NewType
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

from smartschool.errors import DecodeError

FileId = NewType("FileId", UUID)
RevisionId = NewType("RevisionId", UUID)
CustomFolderId = NewType("CustomFolderId", UUID)


class State(str, Enum):
    """Lifecycle state of a file or folder."""

    ACTIVE = "active"
    TRASHED = "trashed"
    DELETED = "deleted"


class FolderColor(str, Enum):
    """Colors a folder can be displayed in."""

    AQUA = "aqua"
    BLACK = "black"
    BLUE = "blue"
    BROWN = "brown"
    GREEN = "green"
    ORANGE = "orange"
    PINK = "pink"
    PURPLE = "purple"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"


DEFAULT_FOLDER_COLOR = FolderColor.YELLOW


@dataclass(frozen=True)
class FolderId:
    """Reference to a folder: a real one, or one of three pseudo-folders.

    ``ROOT``, ``FAVORITES`` and ``TRASHED`` are sentinels with server-side
    meaning (``FAVORITES`` only holds references). Anything else wraps the
    folder's UUID. ``str()`` gives the wire form and :meth:`parse` reverses it.
    """

    kind: str
    uuid: UUID | None = None

    CUSTOM: ClassVar[str] = "custom"
    ROOT: ClassVar[FolderId]
    FAVORITES: ClassVar[FolderId]
    TRASHED: ClassVar[FolderId]

    def __post_init__(self) -> None:
        if self.kind not in ("", "favourites", "trashed", self.CUSTOM):
            raise ValueError(f"unknown folder kind {self.kind!r}")
        if (self.kind == self.CUSTOM) != (self.uuid is not None):
            raise ValueError("only custom folder ids carry a uuid")

    @classmethod
    def custom(cls, uuid: UUID) -> FolderId:
        return cls(cls.CUSTOM, uuid)

    @classmethod
    def of(cls, value: FolderId | UUID) -> FolderId:
        """Accept either a folder id or a bare folder UUID."""
        if isinstance(value, FolderId):
            return value
        if isinstance(value, UUID):
            return cls.custom(value)
        raise TypeError(f"expected FolderId or UUID, got {type(value).__name__}")

    @classmethod
    def parse(cls, text: str) -> FolderId:
        """Decode the wire form of a folder id.

        Raises:
            DecodeError: If ``text`` is neither a sentinel nor a UUID.
        """
        for sentinel in (cls.ROOT, cls.FAVORITES, cls.TRASHED):
            if text == sentinel.kind:
                return sentinel
        try:
            return cls.custom(UUID(text))
        except ValueError as exc:
            raise DecodeError(
                f"{text!r} is not '', 'favourites', 'trashed' or a valid uuid"
            ) from exc

    @property
    def is_custom(self) -> bool:
        return self.kind == self.CUSTOM

    def __str__(self) -> str:
        return str(self.uuid) if self.uuid is not None else self.kind

    @classmethod
    def _validate(cls, value: Any) -> FolderId:
        if isinstance(value, (FolderId, UUID)):
            return cls.of(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"cannot build a folder id from {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: Any
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


# Sentinel kinds double as their wire form.
FolderId.ROOT = FolderId("")
FolderId.FAVORITES = FolderId("favourites")
FolderId.TRASHED = FolderId("trashed")


@dataclass(frozen=True)
class Template:
    """What a new file is created from."""

    kind: str
    reference: str | None = None

    EXCEL: ClassVar[Template]
    POWERPOINT: ClassVar[Template]
    WORD: ClassVar[Template]

    @classmethod
    def custom(cls, reference: str) -> Template:
        """A user-defined template, identified by its server reference."""
        return cls("template", reference)

    def payload(self) -> dict[str, str]:
        fields = {"templateType": self.kind}
        if self.reference is not None:
            fields["templateReference"] = self.reference
        return fields


Template.EXCEL = Template("excel")
Template.POWERPOINT = Template("powerpoint")
Template.WORD = Template("word")


class _Snapshot(BaseModel):
    """Read-only view of a server object; unknown fields are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Revision(_Snapshot):
    """One stored version of a file."""

    # The server also sends a `location` field, "{school}_{user}_{account}_{revision}".
    id: RevisionId
    file_id: FileId
    file_name: str = Field(alias="label")
    file_size: int
    file_type: str = Field(alias="mimeType")
    date: datetime = Field(alias="dateCreated")


class File(_Snapshot):
    id: FileId
    name: str
    parent_id: FolderId
    state: State
    is_favorite: bool = Field(alias="isFavourite")
    current_revision: Revision
    current_revision_id: RevisionId
    date_changed: datetime
    date_created: datetime
    date_recent_action: datetime
    date_state_changed: datetime


class Folder(_Snapshot):
    id: CustomFolderId
    name: str
    parent_id: FolderId
    state: State
    is_favorite: bool = Field(alias="isFavourite")
    color: FolderColor
    has_subfolders: bool = Field(alias="hasSubFolders")
    date_changed: datetime
    date_created: datetime
    date_state_changed: datetime

    @property
    def folder_id(self) -> FolderId:
        """This folder as a destination for moves, copies and listings."""
        return FolderId.custom(self.id)


class HistoryEntryUser(_Snapshot):
    id: str = Field(alias="userIdentifier")
    name: str
    picture_hash: str = Field(alias="userPictureHash")


class HistoryEntry(_Snapshot):
    """One line of a file's or folder's activity log."""

    date: datetime
    text: str
    is_download_event: bool
    is_special_event: bool
    user: HistoryEntryUser


class FolderContents(_Snapshot):
    files: list[File]
    folders: list[Folder]


class UploadResult(_Snapshot):
    """Answer to attaching an upload directory to a folder.

    ``files`` is keyed by file id on the wire; the keys are not trusted and
    :meth:`uploaded_files` keeps only the values. The server also sends an
    ``exceptions`` field that has only ever been seen empty.
    """

    files: dict[str, File]

    def uploaded_files(self) -> list[File]:
        return list(self.files.values())

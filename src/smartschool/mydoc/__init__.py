"""The "My Documents" virtual file system.

Public API:
- MyDocClient (operations)
- File, Folder, FolderContents, Revision, HistoryEntry, HistoryEntryUser (snapshots)
- FolderId, FolderColor, State, Template (parameters)
- FileId, RevisionId, CustomFolderId (identifier types)
"""

from .client import MyDocClient
from .models import (
    CustomFolderId,
    File,
    FileId,
    Folder,
    FolderColor,
    FolderContents,
    FolderId,
    HistoryEntry,
    HistoryEntryUser,
    Revision,
    RevisionId,
    State,
    Template,
)

__all__ = [
    "MyDocClient",
    "CustomFolderId",
    "File",
    "FileId",
    "Folder",
    "FolderColor",
    "FolderContents",
    "FolderId",
    "HistoryEntry",
    "HistoryEntryUser",
    "Revision",
    "RevisionId",
    "State",
    "Template",
]

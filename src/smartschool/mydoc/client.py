from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from uuid import UUID

from smartschool import http
from smartschool.auth.urls import MYDOC_API_PATH
from smartschool.session import Session
from smartschool.upload.models import UploadDirectory

from .models import (
    DEFAULT_FOLDER_COLOR,
    CustomFolderId,
    File,
    FileId,
    Folder,
    FolderColor,
    FolderContents,
    FolderId,
    HistoryEntry,
    Revision,
    RevisionId,
    Template,
    UploadResult,
)

logger = logging.getLogger(__name__)

FILES_PATH = f"{MYDOC_API_PATH}/files"
FOLDERS_PATH = f"{MYDOC_API_PATH}/folders"
LISTING_PATH = f"{MYDOC_API_PATH}/directory-listing"


def _parent(destination: FolderId | UUID) -> dict[str, Any]:
    return {"parentId": str(FolderId.of(destination))}


class MyDocClient:
    """Operations on the per-user virtual file system ("My Documents").

    Every method is one HTTP request. Errors are raised as they come:

    - :class:`~smartschool.errors.HttpStatusError` when the server answers
      4xx/5xx, e.g. for an id that does not exist or a destination such as
      ``FolderId.FAVORITES`` that cannot own items;
    - :class:`~smartschool.errors.DecodeError` when the answer has an
      unexpected shape;
    - :class:`~smartschool.errors.TransportError` when there is no answer.

    Destination parameters accept a :class:`FolderId` or a bare folder UUID.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # Listing

    def get_folder_contents(
        self, folder: FolderId | UUID = FolderId.ROOT
    ) -> FolderContents:
        """List the files and folders directly inside ``folder``."""
        folder = FolderId.of(folder)
        path = LISTING_PATH if folder == FolderId.ROOT else f"{LISTING_PATH}/{folder}"
        return http.get_json(self._session, path, FolderContents)

    def get_recent_files(self) -> list[File]:
        """List recently modified files."""
        return http.get_json(self._session, f"{FILES_PATH}/recent", list[File])

    def get_file(self, id: FileId) -> File:
        return http.get_json(self._session, f"{FILES_PATH}/{id}", File)

    def get_folder(self, id: CustomFolderId) -> Folder:
        return http.get_json(self._session, f"{FOLDERS_PATH}/{id}", Folder)

    def get_folder_parents(self, id: CustomFolderId) -> list[CustomFolderId]:
        """Return the chain of ancestors of a folder (its breadcrumb)."""
        return http.get_json(
            self._session, f"{FOLDERS_PATH}/{id}/parents", list[CustomFolderId]
        )

    # Creation

    def create_folder(
        self,
        parent: FolderId | UUID,
        name: str,
        color: FolderColor = DEFAULT_FOLDER_COLOR,
    ) -> Folder:
        """Create a folder and return it.

        Fails if the parent does not exist or is a pseudo-folder other than
        the root, or if ``name`` contains an illegal character.
        """
        payload = {"color": color.value, "name": name, **_parent(parent)}
        # The trailing slash is part of the endpoint.
        return http.post_json(self._session, f"{FOLDERS_PATH}/", Folder, payload)

    def create_file_from_template(
        self, parent: FolderId | UUID, name: str, template: Template
    ) -> File:
        """Create a file from a template and return it.

        The template's extension is appended to ``name`` unless ``name``
        already ends with it ("foo.xlsx" stays "foo.xlsx").
        """
        payload = {
            "fileName": name,
            "targetFolderId": str(FolderId.of(parent)),
            **template.payload(),
        }
        return http.post_json(
            self._session, f"{FILES_PATH}/createfromtemplate", File, payload
        )

    def upload(
        self, parent: FolderId | UUID, upload_dir: UploadDirectory
    ) -> list[File]:
        """Attach everything staged in ``upload_dir`` to ``parent``.

        Returns:
            The files created, one per uploaded file.
        """
        payload = {**_parent(parent), "uploadDir": str(upload_dir)}
        result = http.post_json(
            self._session, f"{FILES_PATH}/upload", UploadResult, payload
        )
        files = result.uploaded_files()
        logger.info("Attached %d uploaded file(s) to folder %r", len(files), str(parent))
        return files

    # Copy, move, rename

    def copy_file(self, id: FileId, destination: FolderId | UUID) -> File:
        """Copy a file into ``destination`` and return the copy."""
        return http.post_json(
            self._session, f"{FILES_PATH}/{id}/copy", File, _parent(destination)
        )

    def copy_folder(self, id: CustomFolderId, destination: FolderId | UUID) -> Folder:
        """Copy a folder and its contents into ``destination`` and return the copy."""
        return http.post_json(
            self._session, f"{FOLDERS_PATH}/{id}/copy", Folder, _parent(destination)
        )

    def move_file(self, id: FileId, destination: FolderId | UUID) -> File:
        return http.post_json(
            self._session, f"{FILES_PATH}/{id}/move", File, _parent(destination)
        )

    def move_folder(self, id: CustomFolderId, destination: FolderId | UUID) -> Folder:
        return http.post_json(
            self._session, f"{FOLDERS_PATH}/{id}/move", Folder, _parent(destination)
        )

    def rename_file(self, id: FileId, new_name: str) -> File:
        """Rename a file and return it.

        The server refuses names containing ``/ : * ? " \\ < > |``, names
        starting or ending with ``.``, and the file's current name.
        """
        return http.post_json(
            self._session, f"{FILES_PATH}/{id}/rename", File, {"newName": new_name}
        )

    def rename_folder(self, id: CustomFolderId, new_name: str) -> Folder:
        """Rename a folder and return it; same name rules as :meth:`rename_file`."""
        return http.post_json(
            self._session, f"{FOLDERS_PATH}/{id}/rename", Folder, {"newName": new_name}
        )

    def change_folder_color(self, id: CustomFolderId, new_color: FolderColor) -> Folder:
        return http.post_json(
            self._session,
            f"{FOLDERS_PATH}/{id}/change-color",
            Folder,
            {"newColor": new_color.value},
        )

    # Favorites

    def mark_file_as_favorite(self, id: FileId) -> File:
        return http.post_json(self._session, f"{FILES_PATH}/{id}/mark-as-favourite", File)

    def unmark_file_as_favorite(self, id: FileId) -> File:
        return http.post_json(
            self._session, f"{FILES_PATH}/{id}/unmark-as-favourite", File
        )

    def mark_folder_as_favorite(self, id: CustomFolderId) -> Folder:
        return http.post_json(
            self._session, f"{FOLDERS_PATH}/{id}/mark-as-favourite", Folder
        )

    def unmark_folder_as_favorite(self, id: CustomFolderId) -> Folder:
        return http.post_json(
            self._session, f"{FOLDERS_PATH}/{id}/unmark-as-favourite", Folder
        )

    # Trash, restore, delete

    def trash_file(self, id: FileId) -> None:
        """Move a file to the trash. Use :meth:`delete_file` to remove it for good."""
        http.post(self._session, f"{FILES_PATH}/{id}/trash")

    def trash_folder(self, id: CustomFolderId) -> None:
        http.post(self._session, f"{FOLDERS_PATH}/{id}/trash")

    def restore_file(self, id: FileId, destination: FolderId | UUID) -> File:
        """Restore a trashed file into an active folder.

        Restoring into a trashed folder deletes the file permanently, even
        though the returned file names that folder as its parent.
        """
        return http.post_json(
            self._session, f"{FILES_PATH}/{id}/restore", File, _parent(destination)
        )

    def restore_folder(self, id: CustomFolderId, destination: FolderId | UUID) -> Folder:
        """Restore a trashed folder into an active folder.

        The server also accepts active folders here: restoring one into
        another active folder moves it like :meth:`move_folder`, restoring
        it into itself deletes it permanently, and restoring any folder into
        a trashed folder deletes it permanently.
        """
        return http.post_json(
            self._session, f"{FOLDERS_PATH}/{id}/restore", Folder, _parent(destination)
        )

    def delete_file(self, id: FileId) -> None:
        """Delete a file permanently. Use :meth:`trash_file` to keep it restorable."""
        http.delete(self._session, f"{FILES_PATH}/{id}")

    def delete_folder(self, id: CustomFolderId) -> None:
        http.delete(self._session, f"{FOLDERS_PATH}/{id}")

    # History and revisions

    def get_file_history(self, id: FileId) -> list[HistoryEntry]:
        return http.get_json(
            self._session, f"{FILES_PATH}/{id}/history", list[HistoryEntry]
        )

    def get_folder_history(self, id: CustomFolderId) -> list[HistoryEntry]:
        return http.get_json(
            self._session, f"{FOLDERS_PATH}/{id}/history", list[HistoryEntry]
        )

    def get_file_revisions(self, id: FileId) -> list[Revision]:
        return http.get_json(
            self._session, f"{FILES_PATH}/{id}/revisions", list[Revision]
        )

    def restore_revision(self, file_id: FileId, revision_id: RevisionId) -> Revision:
        """Make an older revision current again and return the new revision."""
        return http.post_json(
            self._session,
            f"{FILES_PATH}/{file_id}/revisions/{revision_id}/restore",
            Revision,
        )

    # Downloads

    def download_file(self, id: FileId) -> Iterator[bytes]:
        """Stream the current revision of a file as byte chunks."""
        return http.get_stream(self._session, f"{FILES_PATH}/{id}/download")

    def download_revision(
        self, file_id: FileId, revision_id: RevisionId
    ) -> Iterator[bytes]:
        """Stream one specific revision of a file as byte chunks."""
        return http.get_stream(
            self._session, f"{FILES_PATH}/{file_id}/revisions/{revision_id}/download"
        )

    def save_file(self, id: FileId, destination_file_path: str | Path) -> Path:
        """Download a file to a local path.

        Args:
            id: The file to download.
            destination_file_path: The local path where the file will be saved.

        Returns:
            The path written.
        """
        destination = Path(destination_file_path)
        chunks = self.download_file(id)
        with open(destination, "wb") as local_file:
            for chunk in chunks:
                local_file.write(chunk)

        logger.info("Downloaded: %s", destination)
        return destination

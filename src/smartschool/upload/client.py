from __future__ import annotations

import logging

from smartschool import http
from smartschool.auth.urls import LEGACY_UPLOAD_PATH, UPLOAD_API_PATH
from smartschool.session import Session

from .models import UploadDirectory, UploadDirectoryResponse, UploadFile

logger = logging.getLogger(__name__)


class UploadClient:
    """Stages raw bytes on the server before they are attached anywhere."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_upload_directory(self) -> UploadDirectory:
        """Ask the server for a new, empty upload directory."""
        response = http.get_json(
            self._session,
            f"{UPLOAD_API_PATH}/get-upload-directory",
            UploadDirectoryResponse,
        )
        return UploadDirectory(response.upload_dir)

    def upload_file(self, upload_dir: UploadDirectory, file: UploadFile) -> None:
        """Send one file into ``upload_dir``.

        Nothing is visible in the virtual file system until the directory is
        attached to a folder with :meth:`MyDocClient.upload`.

        Raises:
            HttpStatusError: If the server refused the file (e.g. an illegal name).
        """
        http.send(
            self._session,
            "POST",
            LEGACY_UPLOAD_PATH,
            data={"uploadDir": str(upload_dir)},
            files={"file": file.multipart()},
        ).close()
        logger.info("Uploaded %s to upload directory %s", file.name, upload_dir)

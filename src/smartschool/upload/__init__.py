from .client import UploadClient
from .models import UploadDirectory, UploadFile

__all__ = ["UploadClient", "UploadDirectory", "UploadFile"]

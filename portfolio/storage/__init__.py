import os

from .dropbox_storage import DropboxStorage, DropboxStorageError
from .filesystem_storage import FileSystemStorage
from .photo_storage import PhotoStorage, object_key_from_url
from .s3_storage import S3Storage, S3StorageError


def get_storage_backend() -> PhotoStorage:
    """
    Factory for storage backend based on STORAGE_BACKEND env var.
    Defaults to S3Storage.

    Supported values (case-insensitive):
      - 's3'
      - 'filesystem'
      - 'dropbox'
    """
    backend = os.getenv("STORAGE_BACKEND", "s3").lower()
    if backend in ("s3", ""):  # default
        return S3Storage()
    if backend == "filesystem":
        return FileSystemStorage()
    if backend == "dropbox":
        return DropboxStorage()
    error_message = f"Unknown storage backend: {backend}"
    raise ValueError(error_message)


__all__ = [
    "DropboxStorage",
    "DropboxStorageError",
    "FileSystemStorage",
    "PhotoStorage",
    "S3Storage",
    "S3StorageError",
    "get_storage_backend",
    "object_key_from_url",
]

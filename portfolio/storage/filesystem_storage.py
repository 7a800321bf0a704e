import os
from pathlib import Path

from .photo_storage import PhotoStorage


class FileSystemStorage(PhotoStorage):
    """
    Photo storage using the local filesystem.
    """
    def __init__(self, base_path: str = "") -> None:
        self.base_path = Path(base_path or os.getenv("STORAGE_ROOT", "."))

    def delete_photo(self, object_key: str) -> None:
        file_path = (self.base_path / object_key).resolve()
        if not file_path.is_relative_to(self.base_path.resolve()):
            error_message = f"Object key escapes storage root: {object_key}"
            raise ValueError(error_message)
        file_path.unlink()

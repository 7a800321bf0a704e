from abc import ABC, abstractmethod
from urllib.parse import urlparse


def object_key_from_url(url: str) -> str:
    """
    Derive the storage key of a photo from its public URL.
    The key is the URL path without its leading slash.
    """
    return urlparse(url).path[1:]


class PhotoStorage(ABC):
    """
    Interface for photo storage backends.
    """

    @abstractmethod
    def delete_photo(self, object_key: str) -> None:
        """
        Remove the stored image at object_key.
        Raises a backend-specific error if the store rejects the request.
        """
        error_message = "delete_photo not implemented"
        raise NotImplementedError(error_message)

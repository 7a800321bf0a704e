import os

import requests

from .photo_storage import PhotoStorage


class DropboxStorageError(Exception):
    """Custom exception for DropboxStorage errors."""

class DropboxStorage(PhotoStorage):
    """
    Photo storage using Dropbox HTTP API.
    """
    _DROPBOX_TOKEN_URL = "https://api.dropbox.com/oauth2/token"
    _DROPBOX_DELETE_URL = "https://api.dropboxapi.com/2/files/delete_v2"
    _SUCCESS_CODE = 200
    _TIMEOUT = 10  # seconds

    def __init__(self, base_path: str = "") -> None:
        self.token: str | None = None
        self.app_key = os.getenv("DROPBOX_APP_KEY")
        self.app_secret = os.getenv("DROPBOX_APP_SECRET")
        self.refresh_token = os.getenv("DROPBOX_REFRESH_TOKEN")
        root_env = os.getenv("DROPBOX_ROOT_PATH", "")
        if not base_path:
            base_path = root_env
        if base_path and not base_path.startswith("/"):
            base_path = "/" + base_path
        self.base_path = base_path.rstrip("/")

    def _refresh_token(self) -> None:
        try:
            resp = requests.post(
                self._DROPBOX_TOKEN_URL,
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": self.refresh_token,
                    "client_id": self.app_key,
                    "client_secret": self.app_secret,
                },
                timeout=self._TIMEOUT,
            )
        except requests.RequestException as exc:
            error_message = f"Failed to obtain Dropbox access token: {exc}"
            raise DropboxStorageError(error_message) from exc
        if resp.status_code != self._SUCCESS_CODE:
            error_message = (
                f"Failed to obtain Dropbox access token: {resp.status_code} "
                f"{resp.text}"
            )
            raise DropboxStorageError(error_message)
        self.token = resp.json().get("access_token")
        if not self.token:
            error_message = "Failed to obtain Dropbox access token"
            raise DropboxStorageError(error_message)

    def _ensure_token(self) -> None:
        if self.token:
            return
        if not all([self.app_key, self.app_secret, self.refresh_token]):
            error_message = "Dropbox OAuth credentials are not set"
            raise DropboxStorageError(error_message)
        self._refresh_token()

    def delete_photo(self, object_key: str) -> None:
        self._ensure_token()
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        data = {"path": f"{self.base_path}/{object_key.lstrip('/')}"}
        try:
            resp = requests.post(
                self._DROPBOX_DELETE_URL,
                headers=headers,
                json=data,
                timeout=self._TIMEOUT,
            )
        except requests.RequestException as exc:
            error_message = f"Dropbox API request failed: {exc}"
            raise DropboxStorageError(error_message) from exc
        if resp.status_code != self._SUCCESS_CODE:
            error_message = f"Dropbox API error: {resp.status_code} {resp.text}"
            raise DropboxStorageError(error_message)

import os
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .photo_storage import PhotoStorage


class S3StorageError(Exception):
    """Custom exception for S3Storage errors."""


class S3Storage(PhotoStorage):
    """
    Photo storage on an S3-compatible object store (Cloudflare R2, AWS S3, MinIO).
    """

    def __init__(self, client: Any = None) -> None:  # noqa: ANN401
        # Configuration via env variables
        self.bucket = os.getenv("S3_BUCKET")
        self._client = client

    @property
    def client(self) -> Any:  # noqa: ANN401
        if self._client is None:
            client_kwargs = {
                "endpoint_url": os.getenv("S3_ENDPOINT"),
                "aws_access_key_id": os.getenv("S3_ACCESS_KEY"),
                "aws_secret_access_key": os.getenv("S3_SECRET_KEY"),
                "region_name": os.getenv("S3_REGION"),
            }
            self._client = boto3.client(
                "s3", **{k: v for k, v in client_kwargs.items() if v}
            )
        return self._client

    def delete_photo(self, object_key: str) -> None:
        if not self.bucket:
            error_message = "S3_BUCKET is not set"
            raise S3StorageError(error_message)
        try:
            self.client.delete_object(Bucket=self.bucket, Key=object_key)
        except (BotoCoreError, ClientError) as exc:
            error_message = f"S3 delete failed for {object_key}: {exc}"
            raise S3StorageError(error_message) from exc

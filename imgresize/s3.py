"""
AWS S3 access — fetch original images by key.

The boto3 client is created once per process (see handler.py) and shared by
every invocation; nothing here builds a client per request.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from imgresize.exceptions import OriginImageNotFound, OriginImageTooLarge, StorageError

if TYPE_CHECKING:
    from imgresize.config import Settings

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


def create_s3_client(settings: Settings) -> Any:
    return boto3.client("s3", region_name=settings.aws_region)


def _is_not_found(exc: ClientError) -> bool:
    status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    code = exc.response.get("Error", {}).get("Code", "")
    return status == 404 or code in _NOT_FOUND_CODES


class S3ImageStore:
    """Reads original images from a single bucket."""

    def __init__(self, client: Any, bucket: str, max_bytes: int) -> None:
        self._client = client
        self._bucket = bucket
        self._max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: Settings, client: Any | None = None) -> S3ImageStore:
        return cls(
            client=client if client is not None else create_s3_client(settings),
            bucket=settings.s3_bucket_images,
            max_bytes=settings.max_origin_bytes,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def fetch(self, key: str) -> bytes:
        """Return the whole object body.

        Raises OriginImageNotFound when S3 answers 404, OriginImageTooLarge
        when the object is above the size ceiling and StorageError otherwise.
        """
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if _is_not_found(exc):
                raise OriginImageNotFound() from exc
            logger.error("S3 get_object failed for key %s: %s", key, exc)
            raise StorageError() from exc
        except BotoCoreError as exc:
            logger.error("S3 get_object failed for key %s: %s", key, exc)
            raise StorageError() from exc

        body = response.get("Body")
        if body is None:
            raise OriginImageNotFound()

        content_length = response.get("ContentLength")
        if content_length is not None and content_length > self._max_bytes:
            body.close()
            logger.warning("Original image too large (%d bytes): %s", content_length, key)
            raise OriginImageTooLarge(self._max_bytes)

        try:
            data = body.read(self._max_bytes + 1)
        except BotoCoreError as exc:
            logger.error("S3 body read failed for key %s: %s", key, exc)
            raise StorageError() from exc
        finally:
            body.close()

        # ContentLength is optional; never buffer more than one byte past the ceiling.
        if len(data) > self._max_bytes:
            logger.warning("Original image too large (%d bytes): %s", len(data), key)
            raise OriginImageTooLarge(self._max_bytes)
        return data

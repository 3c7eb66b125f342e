"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Iterator, Mapping, Sequence
import os
from typing import Any, Protocol

import boto3

from image_attachments.utils.constants import (
    ENV_ATTACHMENT_S3_BUCKET_NAME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    S3_DELETE_BATCH_SIZE,
)


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
    ) -> Any: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...

    def delete_objects(
        self,
        *,
        Bucket: str,
        Delete: Mapping[str, Any],
    ) -> Mapping[str, Any]: ...

    def get_paginator(self, operation_name: str) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (storage-facing)."""

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None: ...

    def delete_object(self, *, key: str) -> None: ...

    def list_keys(self, *, prefix: str) -> Iterator[str]: ...

    def delete_objects(self, *, keys: Sequence[str]) -> list[str]: ...

    def object_url(self, *, key: str) -> str: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self) -> None:
        """Create S3 client from environment configuration."""
        bucket_name = os.getenv(ENV_ATTACHMENT_S3_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_ATTACHMENT_S3_BUCKET_NAME} environment variable is not set")

        self._bucket = bucket_name
        self._endpoint_url = os.getenv(ENV_AWS_ENDPOINT_URL)
        self._region = os.getenv(ENV_AWS_REGION)
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=self._endpoint_url,
            region_name=self._region,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self._bucket,
            Key=key,
        )

    def list_keys(self, *, prefix: str) -> Iterator[str]:
        """Yield every object key below a prefix.
        Raises boto3 exceptions - caught by domain implementation.
        """
        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                yield obj["Key"]

    def delete_objects(self, *, keys: Sequence[str]) -> list[str]:
        """Delete objects in batches and return the keys S3 refused to delete.
        Raises boto3 exceptions - caught by domain implementation.
        """
        failed: list[str] = []

        for start in range(0, len(keys), S3_DELETE_BATCH_SIZE):
            batch = keys[start : start + S3_DELETE_BATCH_SIZE]
            response = self._client.delete_objects(
                Bucket=self._bucket,
                Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
            )
            failed.extend(error["Key"] for error in response.get("Errors", []))

        return failed

    def object_url(self, *, key: str) -> str:
        """Return the unsigned URL of an object."""
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{key}"

        if self._region:
            return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

        return f"https://{self._bucket}.s3.amazonaws.com/{key}"

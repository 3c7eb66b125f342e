"""
Pytest configuration and fixtures for image attachment tests.
Provides AWS mocking, S3 and DynamoDB fixtures with proper cleanup,
and in-memory collaborators for the attachment services.
"""

import io
import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

from image_attachments.models.attachment import AttachmentSpec
from image_attachments.repositories.image_processor import ImageProcessor
from image_attachments.repositories.storage_repository import AttachmentStorage
from image_attachments.services.lifecycle import AttachmentLifecycleManager
from image_attachments.services.registry import StyleRegistry

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("ATTACHMENT_S3_BUCKET_NAME", "test-attachments")
os.environ.setdefault("ATTACHMENT_RECORD_TABLE_NAME", "test-records")
os.environ.pop("AWS_ENDPOINT_URL", None)


# ============================================================================
# In-memory collaborators
# ============================================================================


class SpyStorage(AttachmentStorage):
    """Dict-backed storage recording every call."""

    def __init__(self, base_url: str = "https://cdn.test") -> None:
        self.base_url = base_url
        self.files: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_put: Callable[[str], bool] = lambda path: False
        self.fail_delete: Callable[[str], bool] = lambda path: False

    def put(self, path: str, content: bytes) -> bool:
        self.calls.append(("put", path))
        if self.fail_put(path):
            return False
        self.files[path] = content
        return True

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def delete(self, path: str) -> bool:
        self.calls.append(("delete", path))
        if self.fail_delete(path):
            return False
        self.files.pop(path, None)
        return True

    def delete_directory(self, path: str) -> bool:
        self.calls.append(("delete_directory", path))
        for key in [key for key in self.files if key.startswith(path)]:
            del self.files[key]
        return True


class FakeImageProcessor(ImageProcessor):
    """Tags content with the target width instead of decoding it."""

    def __init__(self) -> None:
        self.calls: list[int] = []

    def resize(
        self,
        content: bytes,
        target_width: int,
        *,
        preserve_aspect: bool = True,
        no_upscale: bool = True,
    ) -> bytes:
        self.calls.append(target_width)
        return f"w{target_width}:".encode() + content


class InMemoryRecord:
    """Owning record keeping its attributes in a dict."""

    def __init__(
        self,
        record_id: int,
        registry: StyleRegistry,
        attributes: dict[str, str | None] | None = None,
    ) -> None:
        self._id = record_id
        self._registry = registry
        self.attributes: dict[str, str | None] = dict(attributes or {})
        self.save_result = True
        self.save_calls = 0
        self.saved_snapshots: list[dict[str, str | None]] = []

    @property
    def id(self) -> int:
        return self._id

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str | None) -> None:
        self.attributes[name] = value

    def save(self) -> bool:
        self.save_calls += 1
        if self.save_result:
            self.saved_snapshots.append(dict(self.attributes))
        return self.save_result

    def attachment_spec(self, name: str) -> AttachmentSpec:
        return self._registry.get(name)


# ============================================================================
# Attachment fixtures
# ============================================================================


@pytest.fixture
def attachment_config() -> dict[str, dict[str, Any]]:
    return {
        "avatar": {
            "path": "uploads/user/avatar",
            "styles": {"small": 100, "medium": 500, "large": 1000},
            "defaults": {"small": ".png", "medium": ".png"},
        },
        "cover": {
            "path": "uploads/user/cover",
            "styles": {"wide": 1200},
        },
    }


@pytest.fixture
def registry(attachment_config) -> StyleRegistry:
    return StyleRegistry.from_config(attachment_config)


@pytest.fixture
def record(registry) -> InMemoryRecord:
    return InMemoryRecord(1, registry)


@pytest.fixture
def make_record(registry) -> Callable[..., InMemoryRecord]:
    """
    Helper to build an in-memory record.

    Usage:
        record = make_record(42, avatar="abc.png")
    """

    def _make(record_id: int, **attributes: str | None) -> InMemoryRecord:
        return InMemoryRecord(record_id, registry, attributes)

    return _make


@pytest.fixture
def spy_storage() -> SpyStorage:
    return SpyStorage()


@pytest.fixture
def fake_processor() -> FakeImageProcessor:
    return FakeImageProcessor()


@pytest.fixture
def manager(spy_storage, fake_processor) -> AttachmentLifecycleManager:
    return AttachmentLifecycleManager(spy_storage, fake_processor)


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """
    Helper to encode a solid-color image.

    Usage:
        png = make_image(800, 600, "PNG")
    """

    def _make(width: int, height: int, image_format: str = "PNG", mode: str = "RGB") -> bytes:
        buffer = io.BytesIO()
        Image.new(mode, (width, height), color="red" if mode != "P" else 1).save(
            buffer, format=image_format
        )
        return buffer.getvalue()

    return _make


# ============================================================================
# AWS fixtures
# ============================================================================


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    bucket_name = os.getenv("ATTACHMENT_S3_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    yield s3_client

    _cleanup_s3_objects(s3_client, bucket_name)


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("uploads/avatar/000/000/001/small/a.png", b"data")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        bucket_name = os.getenv("ATTACHMENT_S3_BUCKET_NAME")
        return s3_bucket.put_object(
            Bucket=bucket_name, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """Helper to read an object body from S3."""

    def _get(key: str) -> bytes:
        bucket_name = os.getenv("ATTACHMENT_S3_BUCKET_NAME")
        response: dict[str, Any] = s3_bucket.get_object(Bucket=bucket_name, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_list_keys(s3_bucket) -> Callable[[str], list[str]]:
    """Helper to list every key below a prefix."""

    def _list(prefix: str = "") -> list[str]:
        bucket_name = os.getenv("ATTACHMENT_S3_BUCKET_NAME")
        keys: list[str] = []
        paginator = s3_bucket.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name, Prefix=prefix):
            keys.extend(obj["Key"] for obj in page.get("Contents", []))
        return sorted(keys)

    return _list


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_resource):
    """Create the owning record table for testing."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("ATTACHMENT_RECORD_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "record_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "record_id", "AttributeType": "N"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def dynamodb_get_item(dynamodb_table) -> Callable[[int], dict[str, Any] | None]:
    """Helper to read an item by record id."""

    def _get(record_id: int) -> dict[str, Any] | None:
        response: dict[str, Any] = dynamodb_table.get_item(Key={"record_id": record_id})
        item: dict[str, Any] | None = response.get("Item")
        return item

    return _get

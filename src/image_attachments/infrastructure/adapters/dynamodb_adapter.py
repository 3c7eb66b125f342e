"""Thin DynamoDB adapter wrapping boto3 table operations."""

import os
from typing import Any, Protocol, cast

import boto3

from image_attachments.utils.constants import (
    ENV_ATTACHMENT_RECORD_TABLE_NAME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
)


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Minimal DynamoDB adapter protocol (record-facing)."""

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]: ...

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 DynamoDB resource
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self) -> None:
        """Initialize DynamoDB table from environment."""
        table_name = os.getenv(ENV_ATTACHMENT_RECORD_TABLE_NAME)
        if not table_name:
            raise RuntimeError(
                f"{ENV_ATTACHMENT_RECORD_TABLE_NAME} environment variable is not set"
            )

        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

        self.table: DynamoDBTable = cast(
            DynamoDBTable,
            dynamodb.Table(table_name),
        )

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace an item.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.put_item(Item=item)

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        """Retrieve item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.get_item(Key=key)

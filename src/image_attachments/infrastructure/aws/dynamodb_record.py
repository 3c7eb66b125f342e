"""DynamoDB-backed owning record."""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from image_attachments.infrastructure.adapters.dynamodb_adapter import (
    DynamoDBAdapter,
    DynamoDBAdapterProtocol,
)
from image_attachments.models.attachment import AttachmentSpec
from image_attachments.models.errors import RecordPersistenceError
from image_attachments.services.registry import StyleRegistry
from image_attachments.utils.time import utc_now_iso

logger = Logger(UTC=True)

KEY_ATTRIBUTE = "record_id"
UPDATED_AT_ATTRIBUTE = "updated_at"


class DynamoDBRecord:
    """Owning record stored as a single DynamoDB item.

    Attachment filenames live in item attributes named after the attachment.
    A cleared attachment is stored as an absent attribute.
    """

    def __init__(
        self,
        record_id: int,
        registry: StyleRegistry,
        attributes: dict[str, Any] | None = None,
        adapter: DynamoDBAdapterProtocol | None = None,
    ) -> None:
        if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id < 0:
            raise ValueError(f"Record id must be a non-negative integer, got {record_id!r}")

        self._id = record_id
        self._registry = registry
        self._attributes: dict[str, Any] = dict(attributes or {})
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    @classmethod
    def load(
        cls,
        record_id: int,
        registry: StyleRegistry,
        adapter: DynamoDBAdapterProtocol | None = None,
    ) -> "DynamoDBRecord | None":
        """Fetch a record by id.

        Returns:
            The record, or None if no item exists

        Raises:
            RecordPersistenceError: If the fetch fails
        """
        db = adapter or DynamoDBAdapter()

        try:
            response = db.get_item(key={KEY_ATTRIBUTE: record_id})
        except (ClientError, BotoCoreError) as exc:
            logger.exception("Failed to load record", extra={"record_id": record_id})
            raise RecordPersistenceError(
                message="Unable to load record",
                details={"record_id": record_id},
            ) from exc

        item = response.get("Item")
        if not item:
            return None

        attributes = {k: v for k, v in item.items() if k != KEY_ATTRIBUTE}
        return cls(record_id, registry, attributes=attributes, adapter=db)

    @property
    def id(self) -> int:
        return self._id

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    def get_attribute(self, name: str) -> str | None:
        value = self._attributes.get(name)
        return value if isinstance(value, str) and value else None

    def set_attribute(self, name: str, value: str | None) -> None:
        if value is None:
            self._attributes.pop(name, None)
        else:
            self._attributes[name] = value

    def attachment_spec(self, name: str) -> AttachmentSpec:
        return self._registry.get(name)

    def save(self) -> bool:
        """Write the whole item; returns False if DynamoDB rejects it."""
        self._attributes[UPDATED_AT_ATTRIBUTE] = utc_now_iso()
        item = {**self._attributes, KEY_ATTRIBUTE: self._id}

        try:
            self._db.put_item(item=item)
        except (ClientError, BotoCoreError):
            logger.exception("Failed to save record", extra={"record_id": self._id})
            return False

        logger.debug("Record saved", extra={"record_id": self._id})
        return True

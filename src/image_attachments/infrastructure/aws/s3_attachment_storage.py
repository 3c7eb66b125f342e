"""S3-backed implementation of AttachmentStorage."""

import mimetypes

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from image_attachments.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from image_attachments.repositories.storage_repository import AttachmentStorage
from image_attachments.utils.constants import PATH_SEPARATOR

logger = Logger(UTC=True)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class S3AttachmentStorage(AttachmentStorage):
    """Attachment storage backed by Amazon S3.

    Object keys equal the relative attachment paths. S3 has no real
    directories, so deleting a directory deletes every key below the prefix.
    Failures are logged and reported as False.
    """

    def __init__(
        self,
        adapter: S3AdapterProtocol | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()
        self._public_base_url = public_base_url.rstrip(PATH_SEPARATOR) if public_base_url else None

    def put(self, path: str, content: bytes) -> bool:
        key = self._key(path)

        logger.debug("Uploading attachment file", extra={"key": key, "size": len(content)})

        try:
            self._s3.put_object(key=key, body=content, content_type=self._content_type(key))
        except (ClientError, BotoCoreError):
            logger.exception("S3 upload failed", extra={"key": key})
            return False

        logger.debug("Attachment file uploaded", extra={"key": key})
        return True

    def url(self, path: str) -> str:
        key = self._key(path)
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        return self._s3.object_url(key=key)

    def delete(self, path: str) -> bool:
        key = self._key(path)

        try:
            self._s3.delete_object(key=key)
        except (ClientError, BotoCoreError):
            logger.exception("S3 deletion failed", extra={"key": key})
            return False

        logger.debug("Attachment file deleted", extra={"key": key})
        return True

    def delete_directory(self, path: str) -> bool:
        prefix = self._key(path).rstrip(PATH_SEPARATOR) + PATH_SEPARATOR

        try:
            keys = list(self._s3.list_keys(prefix=prefix))
            failed = self._s3.delete_objects(keys=keys) if keys else []
        except (ClientError, BotoCoreError):
            logger.exception("S3 prefix deletion failed", extra={"prefix": prefix})
            return False

        if failed:
            logger.warning(
                "Some objects could not be deleted",
                extra={"prefix": prefix, "failed_keys": failed},
            )
            return False

        logger.info("Attachment folder deleted", extra={"prefix": prefix, "count": len(keys)})
        return True

    @staticmethod
    def _key(path: str) -> str:
        return path.lstrip(PATH_SEPARATOR)

    @staticmethod
    def _content_type(key: str) -> str:
        content_type, _ = mimetypes.guess_type(key)
        return content_type or DEFAULT_CONTENT_TYPE

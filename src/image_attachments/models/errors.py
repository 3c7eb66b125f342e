"""Custom exception classes for image attachments."""

from typing import Any

from image_attachments.utils.constants import (
    ERROR_CODE_ATTACHMENT_NOT_CONFIGURED,
    ERROR_CODE_IMAGE_PROCESSING_FAILED,
    ERROR_CODE_INVALID_MIME_TYPE,
    ERROR_CODE_RECORD_PERSISTENCE_FAILED,
    ERROR_CODE_STORAGE,
)


class AttachmentError(Exception):
    """
    Base exception for all attachment errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class InvalidMimeTypeError(AttachmentError):
    """Raised when a MIME type outside the image allow-list is supplied."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INVALID_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(AttachmentError):
    """Raised when an attachment is unknown or its configuration is invalid."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_ATTACHMENT_NOT_CONFIGURED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ImageProcessingError(AttachmentError):
    """Raised when image content cannot be decoded or resized."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_IMAGE_PROCESSING_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StorageError(AttachmentError):
    """Raised when a storage backend cannot be used at all."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RecordPersistenceError(AttachmentError):
    """Raised when an owning record cannot be loaded or saved."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RECORD_PERSISTENCE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )

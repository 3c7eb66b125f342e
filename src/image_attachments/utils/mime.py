"""MIME type validation and extension helpers."""

from image_attachments.models.errors import InvalidMimeTypeError
from image_attachments.utils.constants import ALLOWED_MIME_TYPES


def is_valid_image_type(mime_type: str) -> bool:
    """Check whether a MIME type is one of the supported image types."""
    return mime_type in ALLOWED_MIME_TYPES


def ensure_valid_image_type(mime_type: str) -> None:
    """Raise InvalidMimeTypeError unless the MIME type is allowed."""
    if not is_valid_image_type(mime_type):
        raise InvalidMimeTypeError(
            message=f"Invalid image type: {mime_type}",
            details={
                "mime_type": mime_type,
                "allowed": list(ALLOWED_MIME_TYPES),
            },
        )


def extract_file_extension(mime_type: str) -> str:
    """Return the subtype of a MIME type, e.g. 'image/png' -> 'png'."""
    _, separator, subtype = mime_type.partition("/")
    if not separator or not subtype:
        raise InvalidMimeTypeError(
            message=f"Invalid image type: {mime_type}",
            details={"mime_type": mime_type},
        )
    return subtype

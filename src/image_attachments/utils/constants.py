"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_INVALID_MIME_TYPE = "INVALID_MIME_TYPE"
ERROR_CODE_INVALID_ATTACHMENT_CONFIG = "INVALID_ATTACHMENT_CONFIG"

# Configuration Errors
ERROR_CODE_ATTACHMENT_NOT_CONFIGURED = "ATTACHMENT_NOT_CONFIGURED"

# Processing Errors
ERROR_CODE_IMAGE_PROCESSING_FAILED = "IMAGE_PROCESSING_FAILED"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"

# Record Errors
ERROR_CODE_RECORD_PERSISTENCE_FAILED = "RECORD_PERSISTENCE_FAILED"


# ============================================================================
# Upload Constraints
# ============================================================================

# Case-sensitive; "image/jpg" is accepted alongside the registered "image/jpeg".
ALLOWED_MIME_TYPES: Final[tuple[str, ...]] = (
    "image/gif",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/tiff",
    "image/webp",
    "image/bmp",
)


# ============================================================================
# Storage Layout
# ============================================================================

PATH_SEPARATOR: Final[str] = "/"
ORIGINAL_STYLE: Final[str] = "original"
DEFAULTS_FOLDER: Final[str] = "defaults"

PARTITION_MIN_DIGITS: Final[int] = 9
PARTITION_GROUP_SIZE: Final[int] = 3

S3_DELETE_BATCH_SIZE: Final[int] = 1000


# ============================================================================
# Image Processing
# ============================================================================

DEFAULT_JPEG_QUALITY: Final[int] = 85
FALLBACK_IMAGE_FORMAT: Final[str] = "PNG"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_ATTACHMENT_S3_BUCKET_NAME = "ATTACHMENT_S3_BUCKET_NAME"
ENV_ATTACHMENT_RECORD_TABLE_NAME = "ATTACHMENT_RECORD_TABLE_NAME"

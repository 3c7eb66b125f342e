"""Image attachment management package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Resized image variants attached to owning records, stored under "
    "partitioned paths on local disk or S3"
)

__all__ = ["models", "repositories", "services", "infrastructure", "utils"]

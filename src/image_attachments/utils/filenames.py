"""Filename generation for stored attachments."""

import uuid


def generate_filename(extension: str) -> str:
    """Generate a unique, content-independent filename.

    Example:
        3f2b9c0e8d4a4b6f9a1e2c7d5b8f0a1c.png
    """
    return f"{uuid.uuid4().hex}.{extension}"

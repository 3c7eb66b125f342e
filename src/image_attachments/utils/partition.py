"""Identifier partitioning for bounded directory fan-out."""

from image_attachments.utils.constants import (
    PARTITION_GROUP_SIZE,
    PARTITION_MIN_DIGITS,
    PATH_SEPARATOR,
)


def partition_id(record_id: int) -> str:
    """Split a record id into nested 3-digit folders.

    The id is zero-padded to 9 digits, and longer ids are padded to the
    next multiple of 3 digits, so every group has exactly 3 digits:

        1          -> 000/000/001
        123456789  -> 123/456/789
        1234567890 -> 001/234/567/890

    Trees written by a plain 3-character split store long ids under a
    trailing short group (123/456/789/0) and need moving to this layout.

    Raises:
        ValueError: If the id is not a non-negative integer
    """
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise ValueError(f"Record id must be an integer, got {record_id!r}")

    if record_id < 0:
        raise ValueError(f"Record id must be non-negative, got {record_id}")

    digits = str(record_id)
    width = max(
        PARTITION_MIN_DIGITS,
        -(-len(digits) // PARTITION_GROUP_SIZE) * PARTITION_GROUP_SIZE,
    )
    padded = digits.zfill(width)

    return PATH_SEPARATOR.join(
        padded[i : i + PARTITION_GROUP_SIZE]
        for i in range(0, len(padded), PARTITION_GROUP_SIZE)
    )

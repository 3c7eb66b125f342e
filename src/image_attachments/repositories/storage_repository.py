"""Abstract contract for attachment file storage."""

from abc import ABC, abstractmethod


class AttachmentStorage(ABC):
    """Contract for storing, addressing and removing attachment files.

    Implementations could be local disk, S3, GCS, etc.
    Services depend on this interface, not the implementation.
    All paths are relative and '/'-separated.
    """

    @abstractmethod
    def put(self, path: str, content: bytes) -> bool:
        """Store content at a path, replacing any existing file.

        Args:
            path: Relative file path including filename
            content: Binary file content

        Returns:
            True if the file was stored, False otherwise
        """

    @abstractmethod
    def url(self, path: str) -> str:
        """Return the public URL of a path.

        Args:
            path: Relative file path including filename

        Returns:
            Absolute URL; the file does not need to exist
        """

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete a single file.

        Args:
            path: Relative file path including filename

        Returns:
            True if the file was deleted, False otherwise
        """

    @abstractmethod
    def delete_directory(self, path: str) -> bool:
        """Recursively delete a directory and everything below it.

        Args:
            path: Relative directory path

        Returns:
            True if nothing remains below the path, False otherwise
        """

"""Local filesystem implementation of AttachmentStorage."""

from pathlib import Path
import shutil

from aws_lambda_powertools import Logger

from image_attachments.models.errors import StorageError
from image_attachments.repositories.storage_repository import AttachmentStorage
from image_attachments.utils.constants import PATH_SEPARATOR

logger = Logger(UTC=True)


class LocalDiskStorage(AttachmentStorage):
    """Public disk storage: files below a root folder served from a base URL."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self._root = Path(root).resolve()
        if self._root.exists() and not self._root.is_dir():
            raise StorageError(
                message="Storage root is not a directory",
                details={"root": str(self._root)},
            )
        self._base_url = base_url.rstrip(PATH_SEPARATOR)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve_path(self, path: str) -> Path:
        relative = path.strip().lstrip(PATH_SEPARATOR)
        resolved = (self._root / relative).resolve()
        if resolved == self._root or not resolved.is_relative_to(self._root):
            raise ValueError(f"Invalid storage path: {path}")
        return resolved

    def put(self, path: str, content: bytes) -> bool:
        target = self._resolve_path(path)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError:
            logger.exception("Failed to write attachment file", extra={"path": path})
            return False

        return True

    def url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip(PATH_SEPARATOR)}"

    def delete(self, path: str) -> bool:
        target = self._resolve_path(path)

        try:
            target.unlink()
        except FileNotFoundError:
            logger.debug("Attachment file already missing", extra={"path": path})
            return True
        except OSError:
            logger.exception("Failed to delete attachment file", extra={"path": path})
            return False

        return True

    def delete_directory(self, path: str) -> bool:
        target = self._resolve_path(path)

        if not target.exists():
            return True

        try:
            shutil.rmtree(target)
        except OSError:
            logger.exception("Failed to delete attachment folder", extra={"path": path})
            return False

        return True

"""Business logic for the image attachment lifecycle.

This module coordinates validation, resizing, storage and record persistence
when an attachment is updated or removed, and cleans up files that are no
longer referenced.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from aws_lambda_powertools import Logger

from image_attachments.models.attachment import AttachmentUpdateResult, StyleOutcome
from image_attachments.models.errors import InvalidMimeTypeError, RecordPersistenceError
from image_attachments.repositories.image_processor import ImageProcessor
from image_attachments.repositories.record import OwningRecord
from image_attachments.repositories.storage_repository import AttachmentStorage
from image_attachments.services.paths import image_attachment_base_folder, path_for_style
from image_attachments.services.resolver import AttachmentResolver
from image_attachments.utils.constants import ORIGINAL_STYLE
from image_attachments.utils.filenames import generate_filename
from image_attachments.utils.mime import ensure_valid_image_type, extract_file_extension

logger = Logger(UTC=True)

LockKey = tuple[str, int, str]


class AttachmentLifecycleManager:
    """Application service responsible for attachment updates and removals.

    This service orchestrates:
    - MIME type validation
    - Resizing of every configured style
    - Storing styles and the original under a fresh filename
    - Persisting the owning record
    - Removing files of the previous filename

    Updates and removals of the same attachment on the same record are
    serialized within this manager.
    """

    def __init__(
        self,
        storage: AttachmentStorage,
        image_processor: ImageProcessor,
    ) -> None:
        """Initialize the manager with its storage and image processing collaborators."""
        self.storage = storage
        self.image_processor = image_processor
        self.resolver = AttachmentResolver(storage)

        # Each entry holds the lock and the number of callers using it.
        self._locks: dict[LockKey, tuple[threading.Lock, int]] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _locked(self, record: OwningRecord, name: str) -> Iterator[None]:
        key = (type(record).__qualname__, record.id, name)
        with self._locks_guard:
            lock, holders = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, holders + 1)

        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                lock, holders = self._locks[key]
                if holders == 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, holders - 1)

    def get_image_attachment_styles(self, record: OwningRecord, name: str) -> dict[str, int]:
        return self.resolver.get_image_attachment_styles(record, name)

    def get_image_attachment_paths(self, record: OwningRecord, name: str) -> dict[str, str]:
        return self.resolver.get_image_attachment_paths(record, name)

    def update_image_attachment(
        self,
        record: OwningRecord,
        name: str,
        content: bytes,
        mime_type: str,
    ) -> AttachmentUpdateResult:
        """Store a new image for an attachment and replace the previous one.

        The update flow is:
        1. Validate the MIME type and attachment name
        2. Resize the content for every style
        3. Store every style and the original under a new filename
        4. Point the record at the new filename and persist it
        5. Remove the files of the previous filename (best effort)

        Nothing is deleted and the record is left untouched unless every new
        file was stored and the record was persisted.

        Args:
            record: Owning record of the attachment
            name: Attachment name
            content: Raw uploaded image bytes
            mime_type: MIME type of the upload (e.g. 'image/png')

        Returns:
            Structured result with one outcome per style plus the original

        Raises:
            InvalidMimeTypeError: If the MIME type is not an allowed image type
            ConfigurationError: If the attachment is not configured
            ImageProcessingError: If the content cannot be resized

        Any other exception raised by the record's save is re-raised after the
        attribute is restored and the new files are discarded.
        """
        # Step 1: Validate before any I/O
        try:
            ensure_valid_image_type(mime_type)
        except InvalidMimeTypeError:
            logger.warning(
                "Rejected attachment update",
                extra={"attachment": name, "record_id": record.id, "mime_type": mime_type},
            )
            raise

        styles = self.get_image_attachment_styles(record, name)
        extension = extract_file_extension(mime_type)

        with self._locked(record, name):
            filename = generate_filename(extension)
            previous_filename = record.get_attribute(name) or None

            logger.debug(
                "Starting attachment update",
                extra={
                    "attachment": name,
                    "record_id": record.id,
                    "new_filename": filename,
                    "previous_filename": previous_filename,
                },
            )

            # Step 2: Resize every style up front so bad content fails without I/O
            variants: dict[str, bytes] = {
                style: self.image_processor.resize(content, width)
                for style, width in styles.items()
            }
            variants[ORIGINAL_STYLE] = content

            # Step 3: Store the new files
            outcomes: list[StyleOutcome] = []
            for style, data in variants.items():
                path = path_for_style(record, style, name) + filename
                outcomes.append(
                    StyleOutcome(style=style, path=path, written=self._store(path, data))
                )

            result = AttachmentUpdateResult(
                attachment=name,
                filename=filename,
                previous_filename=previous_filename,
                saved=False,
                outcomes=outcomes,
            )

            if not all(outcome.written for outcome in outcomes):
                logger.error(
                    "Attachment update aborted after failed writes",
                    extra={
                        "attachment": name,
                        "record_id": record.id,
                        "failed": [o.style for o in outcomes if not o.written],
                    },
                )
                self._discard(outcomes)
                return result

            # Step 4: Commit the new filename
            record.set_attribute(name, filename)
            try:
                saved = self._save(record, name)
            except Exception:
                record.set_attribute(name, previous_filename)
                self._discard(outcomes)
                raise

            if not saved:
                record.set_attribute(name, previous_filename)
                self._discard(outcomes)
                return result

            result.saved = True

            # Step 5: Remove the previous files
            if previous_filename:
                for outcome in result.outcomes:
                    outcome.previous_removed = self._remove(
                        path_for_style(record, outcome.style, name) + previous_filename
                    )

        if result.orphaned_paths:
            logger.warning(
                "Attachment updated with orphaned files",
                extra={"record_id": record.id, "orphaned": result.orphaned_paths},
            )

        logger.info(
            "Attachment updated",
            extra={"record_id": record.id, **result.summary()},
        )
        return result

    def remove_image_attachment(self, record: OwningRecord, name: str) -> bool:
        """Remove an attachment from the record and delete its files.

        The record is persisted without the attachment before any file is
        deleted, so a failed delete leaves orphaned files but never a
        reference to missing files.

        Args:
            record: Owning record of the attachment
            name: Attachment name

        Returns:
            Result of deleting the attachment's folder; False if the record
            could not be persisted

        Raises:
            ConfigurationError: If the attachment is not configured
        """
        base_folder = image_attachment_base_folder(record, name)

        with self._locked(record, name):
            previous_filename = record.get_attribute(name)

            record.set_attribute(name, None)
            try:
                saved = self._save(record, name)
            except Exception:
                record.set_attribute(name, previous_filename)
                raise

            if not saved:
                record.set_attribute(name, previous_filename)
                return False

            try:
                deleted = bool(self.storage.delete_directory(base_folder))
            except Exception:
                logger.exception(
                    "Unexpected error deleting attachment folder",
                    extra={"attachment": name, "record_id": record.id, "path": base_folder},
                )
                deleted = False

        if deleted:
            logger.info(
                "Attachment removed",
                extra={"attachment": name, "record_id": record.id, "path": base_folder},
            )
        else:
            logger.warning(
                "Attachment removed but its folder could not be deleted",
                extra={"attachment": name, "record_id": record.id, "path": base_folder},
            )

        return deleted

    def _store(self, path: str, content: bytes) -> bool:
        try:
            return bool(self.storage.put(path, content))
        except Exception:
            logger.exception("Unexpected error storing attachment file", extra={"path": path})
            return False

    def _remove(self, path: str) -> bool:
        try:
            removed = bool(self.storage.delete(path))
        except Exception:
            logger.exception("Unexpected error deleting attachment file", extra={"path": path})
            return False

        if not removed:
            logger.warning("Failed to delete previous attachment file", extra={"path": path})
        return removed

    def _discard(self, outcomes: list[StyleOutcome]) -> None:
        """Best-effort removal of new files that will never be referenced."""
        for outcome in outcomes:
            if outcome.written:
                self._remove(outcome.path)

    def _save(self, record: OwningRecord, name: str) -> bool:
        try:
            saved = bool(record.save())
        except RecordPersistenceError:
            logger.exception(
                "Failed to persist owning record",
                extra={"attachment": name, "record_id": record.id},
            )
            return False

        if not saved:
            logger.error(
                "Owning record was not saved",
                extra={"attachment": name, "record_id": record.id},
            )
        return saved

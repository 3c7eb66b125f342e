"""Public URL resolution for attachment styles."""

from aws_lambda_powertools import Logger

from image_attachments.repositories.record import OwningRecord
from image_attachments.repositories.storage_repository import AttachmentStorage
from image_attachments.services.paths import default_path, path_for_style

logger = Logger(UTC=True)


class AttachmentResolver:
    """Computes style URLs from the stored filename or the configured defaults."""

    def __init__(self, storage: AttachmentStorage) -> None:
        self.storage = storage

    def get_image_attachment_styles(self, record: OwningRecord, name: str) -> dict[str, int]:
        """Return all configured style names and widths of an attachment.

        Raises:
            ConfigurationError: If the attachment is not configured
        """
        return dict(record.attachment_spec(name).styles)

    def get_image_attachment_paths(self, record: OwningRecord, name: str) -> dict[str, str]:
        """Return the URL of every style of an attachment.

        Example:
            {
                "small": "https://cdn.example.com/uploads/avatar/000/000/001/small/ab12.jpg",
                "medium": "https://cdn.example.com/uploads/avatar/000/000/001/medium/ab12.jpg",
            }

        Falls back to the configured defaults when no file is stored.

        Raises:
            ConfigurationError: If the attachment is not configured
        """
        filename = record.get_attribute(name)
        if not filename:
            return self.get_default_image_attachment(record, name)

        return {
            style: self.storage.url(path_for_style(record, style, name) + filename)
            for style in record.attachment_spec(name).styles
        }

    def get_default_image_attachment(self, record: OwningRecord, name: str) -> dict[str, str]:
        """Return fallback URLs for the styles that configure a default.

        Styles without a default are omitted; no defaults at all yields {}.
        """
        spec = record.attachment_spec(name)

        paths: dict[str, str] = {}
        for style in spec.styles:
            path = default_path(spec, style)
            if path is not None:
                paths[style] = self.storage.url(path)

        logger.debug(
            "Resolved default attachment paths",
            extra={"attachment": name, "record_id": record.id, "styles": list(paths)},
        )
        return paths

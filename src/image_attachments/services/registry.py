"""Per-record-type registry of attachment configurations."""

from collections.abc import Iterator, Mapping
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from image_attachments.models.attachment import AttachmentSpec
from image_attachments.models.errors import ConfigurationError
from image_attachments.utils.constants import ERROR_CODE_INVALID_ATTACHMENT_CONFIG

logger = Logger(UTC=True)


class StyleRegistry:
    """Immutable lookup of attachment specs by attachment name.

    Unknown names are programmer errors and fail fast with
    ConfigurationError instead of returning a default.
    """

    def __init__(self, specs: list[AttachmentSpec] | None = None) -> None:
        self._specs: dict[str, AttachmentSpec] = {}

        for spec in specs or []:
            if spec.name in self._specs:
                raise ConfigurationError(
                    message=f"Attachment '{spec.name}' is configured twice",
                    error_code=ERROR_CODE_INVALID_ATTACHMENT_CONFIG,
                    details={"attachment": spec.name},
                )
            self._specs[spec.name] = spec

    @classmethod
    def from_config(cls, config: Mapping[str, Mapping[str, Any]]) -> "StyleRegistry":
        """Build a registry from plain configuration data.

        Example:
            StyleRegistry.from_config({
                "avatar": {
                    "path": "uploads/user/avatar",
                    "styles": {"small": 100, "medium": 500, "large": 1000},
                    "defaults": {"small": ".png"},
                }
            })

        Raises:
            ConfigurationError: If any attachment configuration is invalid
        """
        specs: list[AttachmentSpec] = []

        for name, attachment in config.items():
            try:
                specs.append(AttachmentSpec.model_validate({**attachment, "name": name}))
            except ValidationError as exc:
                logger.error(
                    "Invalid attachment configuration",
                    extra={"attachment": name, "errors": exc.errors()},
                )
                raise ConfigurationError(
                    message=f"Invalid configuration for attachment '{name}'",
                    error_code=ERROR_CODE_INVALID_ATTACHMENT_CONFIG,
                    details={"attachment": name},
                ) from exc

        return cls(specs)

    def get(self, name: str) -> AttachmentSpec:
        """Return the configuration of an attachment.

        Raises:
            ConfigurationError: If the attachment is not configured
        """
        try:
            return self._specs[name]
        except KeyError:
            raise ConfigurationError(
                message=f"Attachment '{name}' is not configured",
                details={"attachment": name, "configured": sorted(self._specs)},
            ) from None

    def styles(self, name: str) -> dict[str, int]:
        """Return the configured style -> width map of an attachment."""
        return dict(self.get(name).styles)

    def names(self) -> list[str]:
        return list(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[AttachmentSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

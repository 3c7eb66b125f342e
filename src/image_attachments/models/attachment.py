"""Attachment configuration and update result models."""

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)

from image_attachments.utils.constants import ORIGINAL_STYLE, PATH_SEPARATOR


class AttachmentSpec(BaseModel):
    """Configuration of a single image attachment on an owning record type.

    Mirrors the configuration surface:
    {
        "path": "uploads/user/avatar",
        "styles": {"small": 100, "medium": 500},
        "defaults": {"small": ".png"}      # optional
    }
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: StrictStr = Field(..., min_length=1, description="Attachment name")
    base_path: StrictStr = Field(
        ...,
        alias="path",
        min_length=1,
        description="Relative folder the partitioned id is appended to",
    )
    styles: dict[str, PositiveInt] = Field(
        ..., description="Style name mapped to target width in pixels"
    )
    defaults: dict[str, str] | None = Field(
        None, description="Style name mapped to the default file suffix"
    )

    @field_validator("base_path")
    @classmethod
    def validate_base_path(cls, value: str) -> str:
        path = value.strip().rstrip(PATH_SEPARATOR)
        if not path:
            raise ValueError("path must not be empty")
        return path

    @field_validator("styles")
    @classmethod
    def validate_styles(cls, value: dict[str, int]) -> dict[str, int]:
        if not value:
            raise ValueError("At least one style must be configured")

        if ORIGINAL_STYLE in value:
            raise ValueError(f"Style name '{ORIGINAL_STYLE}' is reserved")

        for style in value:
            if not style or PATH_SEPARATOR in style:
                raise ValueError(f"Invalid style name '{style}'")

        return value

    @model_validator(mode="after")
    def validate_defaults(self) -> "AttachmentSpec":
        if self.defaults:
            unknown = sorted(set(self.defaults) - set(self.styles))
            if unknown:
                raise ValueError(
                    f"Defaults configured for unknown styles: {', '.join(unknown)}"
                )
        return self


class UpdateStatus(str, Enum):
    """Overall outcome of an attachment update."""

    UPDATED = "updated"
    UPDATED_WITH_ORPHANS = "updated_with_orphans"
    FAILED = "failed"


class StyleOutcome(BaseModel):
    """What happened to a single style (or the original) during an update."""

    style: StrictStr = Field(..., description="Style name or 'original'")
    path: StrictStr = Field(..., description="Relative path of the new file")
    written: StrictBool = Field(..., description="Whether the new file was stored")
    previous_removed: StrictBool | None = Field(
        None,
        description="Whether the previous file was deleted; None if not attempted",
    )


class AttachmentUpdateResult(BaseModel):
    """Structured result of an attachment update."""

    attachment: StrictStr = Field(..., description="Attachment name")
    filename: StrictStr = Field(..., description="Generated filename")
    previous_filename: StrictStr | None = Field(
        None, description="Filename that was current before the update"
    )
    saved: StrictBool = Field(..., description="Whether the owning record was persisted")
    outcomes: list[StyleOutcome] = Field(default_factory=list)

    @property
    def status(self) -> UpdateStatus:
        if not self.saved:
            return UpdateStatus.FAILED

        if any(outcome.previous_removed is False for outcome in self.outcomes):
            return UpdateStatus.UPDATED_WITH_ORPHANS

        return UpdateStatus.UPDATED

    @property
    def success(self) -> bool:
        return self.status is not UpdateStatus.FAILED

    @property
    def orphaned_paths(self) -> list[str]:
        """Paths of previous files that could not be removed."""
        if self.previous_filename is None:
            return []

        return [
            outcome.path.rsplit(PATH_SEPARATOR, 1)[0]
            + PATH_SEPARATOR
            + self.previous_filename
            for outcome in self.outcomes
            if outcome.previous_removed is False
        ]

    def __bool__(self) -> bool:
        return self.success

    def summary(self) -> dict[str, Any]:
        """Compact representation for structured logging."""
        return {
            "attachment": self.attachment,
            "new_filename": self.filename,
            "status": self.status.value,
            "written": sum(1 for outcome in self.outcomes if outcome.written),
            "orphaned": len(self.orphaned_paths),
        }

"""Capability interface of records that own image attachments."""

from typing import Protocol

from image_attachments.models.attachment import AttachmentSpec


class OwningRecord(Protocol):
    """Minimal record protocol consumed by attachment services.

    Any record type exposing these members can own attachments;
    no base class is required.
    """

    @property
    def id(self) -> int: ...

    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: str | None) -> None: ...

    def save(self) -> bool: ...

    def attachment_spec(self, name: str) -> AttachmentSpec: ...

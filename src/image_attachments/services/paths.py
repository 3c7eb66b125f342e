"""Relative storage paths of attachment files.

Layout for an attachment on a record:

    <base_path>/<partitioned id>/<style>/<filename>
    <base_path>/<partitioned id>/original/<filename>
    <base_path>/defaults/<style><suffix>
"""

from image_attachments.models.attachment import AttachmentSpec
from image_attachments.repositories.record import OwningRecord
from image_attachments.utils.constants import DEFAULTS_FOLDER, PATH_SEPARATOR
from image_attachments.utils.partition import partition_id


def image_attachment_base_folder(record: OwningRecord, name: str) -> str:
    """Folder holding every style folder of an attachment, e.g. 'uploads/avatar/000/000/001/'."""
    spec = record.attachment_spec(name)
    return f"{spec.base_path}{PATH_SEPARATOR}{partition_id(record.id)}{PATH_SEPARATOR}"


def path_for_style(record: OwningRecord, style: str, name: str) -> str:
    """Folder of a single style, e.g. 'uploads/avatar/000/000/001/small/'."""
    return f"{image_attachment_base_folder(record, name)}{style}{PATH_SEPARATOR}"


def default_path(spec: AttachmentSpec, style: str) -> str | None:
    """Path of the fallback file of a style, or None if it has no default."""
    if not spec.defaults or style not in spec.defaults:
        return None

    return (
        f"{spec.base_path}{PATH_SEPARATOR}{DEFAULTS_FOLDER}{PATH_SEPARATOR}"
        f"{style}{spec.defaults[style]}"
    )

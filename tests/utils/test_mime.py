import pytest

from image_attachments.models.errors import InvalidMimeTypeError
from image_attachments.utils.constants import ALLOWED_MIME_TYPES
from image_attachments.utils.mime import (
    ensure_valid_image_type,
    extract_file_extension,
    is_valid_image_type,
)


class TestIsValidImageType:
    @pytest.mark.parametrize("mime_type", ALLOWED_MIME_TYPES)
    def test_allowed_types(self, mime_type: str) -> None:
        assert is_valid_image_type(mime_type) is True

    @pytest.mark.parametrize(
        "mime_type",
        ["application/pdf", "image/svg+xml", "text/plain", "", "IMAGE/PNG", "image/Png"],
    )
    def test_rejected_types(self, mime_type: str) -> None:
        assert is_valid_image_type(mime_type) is False


class TestEnsureValidImageType:
    def test_valid_type_passes(self) -> None:
        ensure_valid_image_type("image/webp")

    def test_invalid_type_raises_with_details(self) -> None:
        with pytest.raises(InvalidMimeTypeError) as exc:
            ensure_valid_image_type("application/pdf")

        assert exc.value.error_code == "INVALID_MIME_TYPE"
        assert exc.value.details["mime_type"] == "application/pdf"
        assert "image/png" in exc.value.details["allowed"]


class TestExtractFileExtension:
    @pytest.mark.parametrize(
        ("mime_type", "extension"),
        [
            ("image/jpeg", "jpeg"),
            ("image/jpg", "jpg"),
            ("image/png", "png"),
            ("image/tiff", "tiff"),
        ],
    )
    def test_extension_is_subtype(self, mime_type: str, extension: str) -> None:
        assert extract_file_extension(mime_type) == extension

    @pytest.mark.parametrize("mime_type", ["png", "image/", ""])
    def test_missing_subtype_raises(self, mime_type: str) -> None:
        with pytest.raises(InvalidMimeTypeError):
            extract_file_extension(mime_type)

"""Pillow-backed implementation of ImageProcessor."""

import io
from typing import Any

from aws_lambda_powertools import Logger
from PIL import Image, UnidentifiedImageError

from image_attachments.models.errors import ImageProcessingError
from image_attachments.repositories.image_processor import ImageProcessor
from image_attachments.utils.constants import DEFAULT_JPEG_QUALITY, FALLBACK_IMAGE_FORMAT

logger = Logger(UTC=True)


class PillowImageProcessor(ImageProcessor):
    """Width-constrained resizing that re-encodes in the source format."""

    def __init__(self, jpeg_quality: int = DEFAULT_JPEG_QUALITY) -> None:
        self.jpeg_quality = jpeg_quality

    def resize(
        self,
        content: bytes,
        target_width: int,
        *,
        preserve_aspect: bool = True,
        no_upscale: bool = True,
    ) -> bytes:
        if target_width <= 0:
            raise ValueError(f"Target width must be positive, got {target_width}")

        try:
            with Image.open(io.BytesIO(content)) as img:
                img.load()
                image_format = img.format or FALLBACK_IMAGE_FORMAT
                resized = self._resize(img, target_width, preserve_aspect, no_upscale)
                return self._encode(resized, image_format)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as exc:
            logger.exception("Failed to resize image", extra={"target_width": target_width})
            raise ImageProcessingError(
                message="Unable to process image content",
                details={"target_width": target_width, "size": len(content)},
            ) from exc

    @staticmethod
    def _resize(
        img: Image.Image,
        target_width: int,
        preserve_aspect: bool,
        no_upscale: bool,
    ) -> Image.Image:
        width, height = img.size

        if width == target_width or (no_upscale and width <= target_width):
            return img

        new_height = max(1, round(height * target_width / width)) if preserve_aspect else height
        return img.resize((target_width, new_height), resample=Image.Resampling.LANCZOS)

    def _encode(self, img: Image.Image, image_format: str) -> bytes:
        save_kwargs: dict[str, Any] = {}

        if image_format == "JPEG":
            save_kwargs.update({"quality": self.jpeg_quality, "optimize": True})
            if img.mode not in ("RGB", "L"):
                img = img.convert("RGB")

        buffer = io.BytesIO()
        img.save(buffer, format=image_format, **save_kwargs)
        return buffer.getvalue()

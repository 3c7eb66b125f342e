"""Abstract contract for image resizing."""

from abc import ABC, abstractmethod


class ImageProcessor(ABC):
    """Contract for producing resized image variants.

    Implementations could be Pillow, libvips, an external service, etc.
    """

    @abstractmethod
    def resize(
        self,
        content: bytes,
        target_width: int,
        *,
        preserve_aspect: bool = True,
        no_upscale: bool = True,
    ) -> bytes:
        """Resize an image to a target width.

        Args:
            content: Encoded source image
            target_width: Desired width in pixels
            preserve_aspect: Scale height proportionally
            no_upscale: Leave images narrower than the target unchanged

        Returns:
            Encoded resized image

        Raises:
            ImageProcessingError: If the content cannot be decoded or encoded
        """

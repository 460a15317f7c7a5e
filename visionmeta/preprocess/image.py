"""
Downsampling of oversized images before analysis.
Files at or under the size threshold are forwarded untouched so the vision
model sees full detail; larger ones are re-encoded as a capped JPEG.
"""
import io
from typing import Optional, Tuple
from PIL import Image
from PIL.ImageFile import ImageFile
import logging

from ..core.interfaces import AnalysisPayload, CompressionConfig, MediaAsset

logger = logging.getLogger(__name__)

ImageFile.LOAD_TRUNCATED_IMAGES = True
Image.MAX_IMAGE_PIXELS = 1_000_000_000

ORIENTATION_TAG = 0x0112

_TRANSFORMS = {
    2: lambda img: img.transpose(Image.Transpose.FLIP_LEFT_RIGHT),
    3: lambda img: img.rotate(180, expand=True),
    4: lambda img: img.transpose(Image.Transpose.FLIP_TOP_BOTTOM),
    5: lambda img: img.rotate(-90, expand=True).transpose(Image.Transpose.FLIP_LEFT_RIGHT),
    6: lambda img: img.rotate(-90, expand=True),
    7: lambda img: img.rotate(90, expand=True).transpose(Image.Transpose.FLIP_LEFT_RIGHT),
    8: lambda img: img.rotate(90, expand=True),
}


def apply_exif_orientation(img: Image.Image) -> Image.Image:
    """Return img rotated/flipped according to its EXIF Orientation tag."""
    try:
        orientation = img.getexif().get(ORIENTATION_TAG)
    except Exception as e:
        logger.warning(f"Error reading orientation: {e}")
        return img

    transform = _TRANSFORMS.get(orientation)
    return transform(img) if transform else img


def fit_within(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    """
    Scale (width, height) so neither edge exceeds max_dimension.

    Aspect ratio is preserved and results are floored to whole pixels.
    """
    if width > max_dimension or height > max_dimension:
        scale = min(max_dimension / width, max_dimension / height)
        return max(1, int(width * scale)), max(1, int(height * scale))
    return width, height


class ImageCompressor:
    """Prepares still images for analysis."""

    def __init__(self, config: Optional[CompressionConfig] = None):
        self.config = config or CompressionConfig()

    def needs_compression(self, size: int) -> bool:
        return size > self.config.size_threshold

    def prepare(self, asset: MediaAsset) -> AnalysisPayload:
        """
        Return the payload to send for analysis.

        Oversized files are compressed; if that fails the original bytes are
        sent anyway.
        """
        if not self.needs_compression(asset.size):
            logger.debug(f"File size {asset.size} is within threshold. Sending original.")
            return AnalysisPayload(asset.data, asset.mime_type, "original")

        logger.warning(
            f"File size {asset.size} > {self.config.size_threshold}. Triggering compression for {asset.filename}."
        )
        try:
            data = self.compress(asset.data)
        except Exception as e:
            logger.warning(f"Compression failed for {asset.filename}, falling back to original: {e}")
            return AnalysisPayload(asset.data, asset.mime_type, "original")

        return AnalysisPayload(data, "image/jpeg", "compressed")

    def compress(self, data: bytes) -> bytes:
        """Decode, cap the longer edge, flatten on white and re-encode as JPEG."""
        with Image.open(io.BytesIO(data)) as img:
            img = apply_exif_orientation(img)
            original_size = img.size
            width, height = fit_within(img.width, img.height, self.config.max_dimension)

            if img.mode in ("P", "PA") or "transparency" in img.info:
                img = img.convert("RGBA")
            if img.size != (width, height):
                img = img.resize((width, height), Image.Resampling.LANCZOS)

            canvas = Image.new("RGB", (width, height), (255, 255, 255))
            if img.mode in ("RGBA", "LA"):
                canvas.paste(img.convert("RGB"), mask=img.split()[-1])
            else:
                canvas.paste(img.convert("RGB"))

        buffer = io.BytesIO()
        canvas.save(buffer, format="JPEG", quality=self.config.quality, optimize=True)

        logger.info(
            f"Compression applied: {original_size[0]}x{original_size[1]} -> {width}x{height}"
        )
        return buffer.getvalue()

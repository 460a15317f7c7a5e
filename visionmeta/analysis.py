"""
Analysis preparation - turns an uploaded asset into the payload sent to the
vision model: the original image, a compressed copy, or a video storyboard.
"""
import asyncio
from typing import Optional
import logging

from .core.formats import is_video
from .core.interfaces import AnalysisConfig, AnalysisPayload, IAnalysisPreparer, MediaAsset
from .preprocess.image import ImageCompressor
from .preprocess.storyboard import StoryboardGenerator

logger = logging.getLogger(__name__)


class AnalysisPreparer(IAnalysisPreparer):
    """
    Routes assets through the image or video preprocessing path.

    Example:
        preparer = AnalysisPreparer()
        payload = await preparer.prepare(MediaAsset.from_path("clip.mp4"))
        print(payload.mime_type, payload.source)
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()
        self.compressor = ImageCompressor(self.config.compression)
        self.storyboard = StoryboardGenerator(self.config.storyboard)

    async def prepare(self, asset: MediaAsset) -> AnalysisPayload:
        """
        Prepare asset for analysis.

        Raises:
            DecodeFailure: if a video cannot be turned into a storyboard
        """
        if is_video(asset.mime_type, asset.filename):
            logger.info(f"Processing video storyboard for analysis: {asset.filename}")
            data = await self.storyboard.generate_from_bytes(asset.data, asset.filename)
            return AnalysisPayload(data, "image/jpeg", "storyboard")

        return self.compressor.prepare(asset)


async def prepare_for_analysis(
    file_bytes: bytes,
    mime_type: str,
    filename: str,
    config: Optional[AnalysisConfig] = None
) -> str:
    """
    Convenience function returning the base64 analysis payload.

    Args:
        file_bytes: Original file contents
        mime_type: Declared MIME type (may be empty)
        filename: Original filename
        config: Preprocessing configuration

    Returns:
        Base64 string without a data-URL prefix
    """
    asset = MediaAsset(data=file_bytes, mime_type=mime_type or "", filename=filename)
    payload = await AnalysisPreparer(config).prepare(asset)
    return payload.to_base64()


def prepare_for_analysis_sync(
    file_bytes: bytes,
    mime_type: str,
    filename: str,
    config: Optional[AnalysisConfig] = None
) -> str:
    """Run prepare_for_analysis in a fresh event loop."""
    return asyncio.run(prepare_for_analysis(file_bytes, mime_type, filename, config))

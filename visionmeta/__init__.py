"""
VisionMeta - Metadata embedding and media preprocessing for stock assets.

Writes a title, description and keyword list into the metadata containers
that marketplaces and asset managers read:
- JPEG: EXIF 0th IFD plus an XMP APP1 segment
- PNG: XMP iTXt chunk
- SVG: XMP inside <metadata>
- EPS: XMP as PostScript comments
- MP4/MOV: trailing XMP uuid box

It also prepares media for a vision model: oversized images are downsampled
and videos become a single 2x2 storyboard JPEG.

Example usage:
    from visionmeta import MetadataRecord, embed_metadata, prepare_for_analysis

    payload = await prepare_for_analysis(data, "video/mp4", "clip.mp4")

    record = MetadataRecord(
        title="City skyline at dusk",
        description="A calm evening view",
        keywords=["city", "skyline", "dusk"],
    )
    tagged = embed_metadata(data, "image/jpeg", "photo.jpg", record)
"""

from .core.interfaces import (
    MetadataRecord,
    MediaAsset,
    VideoDimensions,
    StoryboardFrame,
    AnalysisPayload,
    PassThroughReason,
    Embedded,
    PassThrough,
    InjectionResult,
    EmbedConfig,
    CompressionConfig,
    StoryboardConfig,
    AnalysisConfig,
)
from .core.errors import (
    VisionMetaError,
    UnsupportedFormat,
    MalformedContainer,
    InjectionFailure,
    DecodeFailure,
)
from .core.formats import MediaFormat, resolve_format
from .xmp import generate_xmp_packet, escape_xml_text
from .inject import (
    JpegInjector,
    PngInjector,
    SvgInjector,
    EpsInjector,
    VideoInjector,
)
from .embedder import MetadataEmbedder, embed_metadata
from .batch import BatchEmbedder, BatchItemResult, AssetPair, pair_vector_assets
from .preprocess import ImageCompressor, StoryboardGenerator
from .analysis import AnalysisPreparer, prepare_for_analysis, prepare_for_analysis_sync
from .video import VideoInfo

__version__ = "1.0.0"

__all__ = [
    # Entry points
    "embed_metadata",
    "generate_xmp_packet",
    "prepare_for_analysis",
    "prepare_for_analysis_sync",

    # Core types
    "MetadataRecord",
    "MediaAsset",
    "VideoDimensions",
    "StoryboardFrame",
    "AnalysisPayload",
    "PassThroughReason",
    "Embedded",
    "PassThrough",
    "InjectionResult",

    # Configuration
    "EmbedConfig",
    "CompressionConfig",
    "StoryboardConfig",
    "AnalysisConfig",

    # Errors
    "VisionMetaError",
    "UnsupportedFormat",
    "MalformedContainer",
    "InjectionFailure",
    "DecodeFailure",

    # Embedding
    "MediaFormat",
    "resolve_format",
    "escape_xml_text",
    "MetadataEmbedder",
    "JpegInjector",
    "PngInjector",
    "SvgInjector",
    "EpsInjector",
    "VideoInjector",

    # Batch
    "BatchEmbedder",
    "BatchItemResult",
    "AssetPair",
    "pair_vector_assets",

    # Preprocessing
    "AnalysisPreparer",
    "ImageCompressor",
    "StoryboardGenerator",
    "VideoInfo",
]

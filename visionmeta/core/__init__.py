"""
Core module - Data types, configuration, errors and format tables for visionmeta.
"""
from .interfaces import (
    DEFAULT_PRODUCT,

    # Data classes
    MetadataRecord,
    MediaAsset,
    VideoDimensions,
    StoryboardFrame,
    AnalysisPayload,

    # Injection results
    PassThroughReason,
    Embedded,
    PassThrough,
    InjectionResult,

    # Configuration
    EmbedConfig,
    CompressionConfig,
    StoryboardConfig,
    AnalysisConfig,

    # Abstract interfaces
    IMetadataInjector,
    IVideoInfoProvider,
    IAnalysisPreparer,
)
from .errors import (
    VisionMetaError,
    UnsupportedFormat,
    MalformedContainer,
    InjectionFailure,
    DecodeFailure,
)
from .formats import MediaFormat, resolve_format, is_video, is_vector

__all__ = [
    "DEFAULT_PRODUCT",

    # Data classes
    "MetadataRecord",
    "MediaAsset",
    "VideoDimensions",
    "StoryboardFrame",
    "AnalysisPayload",

    # Injection results
    "PassThroughReason",
    "Embedded",
    "PassThrough",
    "InjectionResult",

    # Configuration
    "EmbedConfig",
    "CompressionConfig",
    "StoryboardConfig",
    "AnalysisConfig",

    # Abstract interfaces
    "IMetadataInjector",
    "IVideoInfoProvider",
    "IAnalysisPreparer",

    # Errors
    "VisionMetaError",
    "UnsupportedFormat",
    "MalformedContainer",
    "InjectionFailure",
    "DecodeFailure",

    # Formats
    "MediaFormat",
    "resolve_format",
    "is_video",
    "is_vector",
]

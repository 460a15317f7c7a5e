"""
Centralized MIME type and extension tables.

Used by: embedder, analysis
"""
from enum import Enum
from pathlib import Path
from typing import Optional


class MediaFormat(Enum):
    JPEG = "jpeg"
    PNG = "png"
    SVG = "svg"
    EPS = "eps"
    VIDEO = "video"


MIME_FORMATS = {
    'image/jpeg': MediaFormat.JPEG,
    'image/png': MediaFormat.PNG,
    'image/svg+xml': MediaFormat.SVG,
}

EXTENSION_FORMATS = {
    '.jpg': MediaFormat.JPEG,
    '.jpeg': MediaFormat.JPEG,
    '.png': MediaFormat.PNG,
    '.svg': MediaFormat.SVG,
    '.eps': MediaFormat.EPS,
    '.mp4': MediaFormat.VIDEO,
    '.mov': MediaFormat.VIDEO,
}

# Extensions the analysis pipeline treats as video when the MIME type is missing
ANALYSIS_VIDEO_EXTENSIONS = {'.mp4', '.mov', '.avi', '.webm'}

VECTOR_EXTENSIONS = {'.eps', '.svg'}


def resolve_format(mime_type: Optional[str], filename: str) -> Optional[MediaFormat]:
    """Resolve the injector format: MIME type first, extension second."""
    mime = (mime_type or "").lower()

    if mime in MIME_FORMATS:
        return MIME_FORMATS[mime]
    if mime.startswith("video/"):
        return MediaFormat.VIDEO

    return EXTENSION_FORMATS.get(Path(filename).suffix.lower())


def is_video(mime_type: Optional[str], filename: str) -> bool:
    """Check if an asset should go through the video storyboard path."""
    if (mime_type or "").lower().startswith("video/"):
        return True
    return Path(filename).suffix.lower() in ANALYSIS_VIDEO_EXTENSIONS


def is_vector(filename: str) -> bool:
    """Check if filename is a vector file (EPS/SVG)."""
    return Path(filename).suffix.lower() in VECTOR_EXTENSIONS

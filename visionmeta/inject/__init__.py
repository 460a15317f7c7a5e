"""
Format-specific metadata injectors.
"""
from .base import BaseInjector
from .jpeg import JpegInjector
from .png import PngInjector, IHDR_END_OFFSET
from .svg import SvgInjector
from .eps import EpsInjector
from .video import VideoInjector, XMP_UUID

__all__ = [
    "BaseInjector",
    "JpegInjector",
    "PngInjector",
    "SvgInjector",
    "EpsInjector",
    "VideoInjector",
    "IHDR_END_OFFSET",
    "XMP_UUID",
]

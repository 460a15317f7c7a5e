"""
Video probing for visionmeta.
"""
from .info import VideoInfo

__all__ = [
    "VideoInfo",
]

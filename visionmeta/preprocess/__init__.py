"""
Media preprocessing for analysis: image downsampling and video storyboards.
"""
from .image import ImageCompressor, fit_within, apply_exif_orientation
from .storyboard import (
    StoryboardGenerator,
    StoryboardComposer,
    FrameExtractor,
    fit_frame_size,
    capture_timestamps,
    plan_frames,
)

__all__ = [
    # Images
    "ImageCompressor",
    "fit_within",
    "apply_exif_orientation",

    # Video storyboards
    "StoryboardGenerator",
    "StoryboardComposer",
    "FrameExtractor",
    "fit_frame_size",
    "capture_timestamps",
    "plan_frames",
]

"""
Video storyboard generation using ffmpeg.
Captures four frames across the clip and tiles them into one 2x2 JPEG that
stands in for the video during still-image analysis.
Follows Facade Pattern - orchestrates probing, frame capture and composition.
"""
import asyncio
import io
import math
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import logging

from PIL import Image

from ..core.errors import DecodeFailure
from ..core.interfaces import StoryboardConfig, StoryboardFrame
from ..video.info import VideoInfo

logger = logging.getLogger(__name__)


def fit_frame_size(width: int, height: int, max_size: int) -> Tuple[int, int]:
    """
    Scale frame dimensions so the longer edge is at most max_size.

    Landscape frames are capped on width, everything else on height.
    """
    w, h = float(width), float(height)

    if w > h:
        if w > max_size:
            h *= max_size / w
            w = max_size
    elif h > max_size:
        w *= max_size / h
        h = max_size

    return max(1, int(w)), max(1, int(h))


def capture_timestamps(duration: float, capture_points: Sequence[float]) -> List[float]:
    """Seconds at which each frame is captured, as fractions of duration."""
    return [duration * point for point in capture_points]


def plan_frames(
    duration: float,
    frame_width: int,
    frame_height: int,
    config: StoryboardConfig
) -> List[StoryboardFrame]:
    """Pair each capture timestamp with its cell origin on the composite."""
    columns = config.columns
    return [
        StoryboardFrame(
            index=i,
            timestamp=timestamp,
            x=(i % columns) * frame_width,
            y=(i // columns) * frame_height,
        )
        for i, timestamp in enumerate(capture_timestamps(duration, config.capture_points))
    ]


class FrameExtractor:
    """Decodes single frames from a video with ffmpeg. Single Responsibility."""

    async def extract_frame(
        self,
        video_path: Path,
        timestamp: float,
        width: int,
        height: int
    ) -> Image.Image:
        """
        Seek to timestamp and decode one frame scaled to width x height.

        Raises:
            DecodeFailure: if ffmpeg is missing, fails, or yields no frame
        """
        cmd = [
            "ffmpeg", "-v", "error",
            "-ss", f"{timestamp:.3f}",
            "-i", str(video_path),
            "-frames:v", "1",
            "-vf", f"scale={width}:{height}",
            "-f", "rawvideo", "-pix_fmt", "rgb24",
            "pipe:1"
        ]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except FileNotFoundError:
            raise DecodeFailure("ffmpeg not found. Ensure ffmpeg is installed and in PATH.")

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            raise DecodeFailure(
                f"Frame extraction at {timestamp:.2f}s failed (exit code {process.returncode}): "
                f"{stderr.decode(errors='replace').strip()}"
            )

        expected = width * height * 3
        if len(stdout) < expected:
            raise DecodeFailure(f"No frame decoded at {timestamp:.2f}s ({len(stdout)}/{expected} bytes)")

        logger.debug(f"Extracted frame at {timestamp:.2f}s")
        return Image.frombytes("RGB", (width, height), stdout[:expected])


class StoryboardComposer:
    """Tiles captured frames onto one canvas and encodes it. Single Responsibility."""

    def __init__(self, config: Optional[StoryboardConfig] = None):
        self.config = config or StoryboardConfig()

    def new_canvas(self, frame_width: int, frame_height: int) -> Image.Image:
        columns = self.config.columns
        rows = math.ceil(len(self.config.capture_points) / columns)
        return Image.new("RGB", (frame_width * columns, frame_height * rows), color="black")

    def draw(
        self,
        canvas: Image.Image,
        image: Image.Image,
        frame: StoryboardFrame,
        frame_width: int,
        frame_height: int
    ) -> None:
        if image.size != (frame_width, frame_height):
            image = image.resize((frame_width, frame_height), Image.Resampling.LANCZOS)
        canvas.paste(image.convert("RGB"), (frame.x, frame.y))
        logger.debug(f"Added frame {frame.index} at ({frame.x}, {frame.y})")

    def encode(self, canvas: Image.Image) -> bytes:
        buffer = io.BytesIO()
        canvas.save(buffer, format="JPEG", quality=self.config.quality)
        return buffer.getvalue()


class StoryboardGenerator:
    """
    Turns a video into a single storyboard JPEG.
    Facade that orchestrates video info, frame capture, and composition.
    """

    def __init__(
        self,
        config: Optional[StoryboardConfig] = None,
        frame_extractor: Optional[FrameExtractor] = None
    ):
        self.config = config or StoryboardConfig()
        self.frame_extractor = frame_extractor or FrameExtractor()
        self.composer = StoryboardComposer(self.config)

    async def generate(self, video_path: Path) -> bytes:
        """
        Build the storyboard for a video file.

        Returns:
            JPEG bytes of the composite

        Raises:
            DecodeFailure: if the video cannot be probed or a frame cannot be decoded
        """
        video_path = Path(video_path)
        info = VideoInfo(video_path)
        await info.load()

        duration = info.duration
        if duration <= 0:
            raise DecodeFailure(f"Could not determine duration of '{video_path.name}'")

        dims = info.dimensions
        if dims.display_width <= 0 or dims.display_height <= 0:
            raise DecodeFailure(f"Could not determine frame size of '{video_path.name}'")

        frame_width, frame_height = fit_frame_size(
            dims.display_width, dims.display_height, self.config.max_frame_size
        )
        frames = plan_frames(duration, frame_width, frame_height, self.config)
        canvas = self.composer.new_canvas(frame_width, frame_height)

        # One decoder position at a time, so captures run in order
        for frame in frames:
            image = await self.frame_extractor.extract_frame(
                video_path, frame.timestamp, frame_width, frame_height
            )
            self.composer.draw(canvas, image, frame, frame_width, frame_height)

        data = self.composer.encode(canvas)
        logger.info(
            f"Storyboard for {video_path.name}: {len(frames)} frames of {frame_width}x{frame_height}"
        )
        return data

    async def generate_from_bytes(self, data: bytes, filename: str) -> bytes:
        """Write data to a temporary file named like filename and build its storyboard."""
        suffix = Path(filename).suffix or ".mp4"
        temp_file = tempfile.NamedTemporaryFile(suffix=suffix, delete=False)
        temp_path = Path(temp_file.name)

        try:
            with temp_file:
                temp_file.write(data)
            return await self.generate(temp_path)
        except DecodeFailure:
            raise
        except (OSError, ValueError) as e:
            raise DecodeFailure(f"Failed to process video frames of '{filename}': {e}") from e
        finally:
            temp_path.unlink(missing_ok=True)

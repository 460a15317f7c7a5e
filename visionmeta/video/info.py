"""
Video information extraction using ffprobe.
Follows Single Responsibility Principle - only handles video metadata extraction.
"""
import asyncio
import json
from pathlib import Path
from typing import Optional, Tuple
import logging

from ..core.errors import DecodeFailure
from ..core.interfaces import IVideoInfoProvider, VideoDimensions

logger = logging.getLogger(__name__)


class VideoInfo(IVideoInfoProvider):
    """
    Reads duration and frame geometry of a video file with ffprobe.
    Loading is async so the storyboard pipeline never blocks the event loop.
    """

    def __init__(self, input_path: Path):
        self.input_path = Path(input_path)
        self._format_data: Optional[dict] = None
        self._stream_data: Optional[dict] = None
        self._loaded = False

    async def load(self) -> None:
        """Load video metadata using ffprobe asynchronously."""
        if self._loaded:
            return

        self._validate_input()

        cmd = [
            "ffprobe", "-v", "quiet", "-print_format", "json",
            "-show_format", "-show_streams",
            str(self.input_path)
        ]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
            stdout, stderr = await process.communicate()
        except FileNotFoundError:
            raise DecodeFailure("ffprobe not found. Ensure ffprobe is installed and in PATH.")

        if process.returncode != 0:
            self._handle_ffprobe_error(process.returncode, stdout, stderr)

        try:
            self._parse_output(stdout.decode().strip())
        except json.JSONDecodeError as e:
            raise DecodeFailure(f"Failed to parse ffprobe output for '{self.input_path.name}': {e}") from e

        self._loaded = True
        logger.debug(f"Probed {self.input_path.name}: {self.duration:.2f}s, {self.width}x{self.height}")

    def _validate_input(self) -> None:
        """Validate input file exists and is a file."""
        if not self.input_path.exists():
            raise DecodeFailure(f"Video file does not exist: {self.input_path}")
        if not self.input_path.is_file():
            raise DecodeFailure(f"Path is not a file: {self.input_path}")

    def _handle_ffprobe_error(self, returncode: int, stdout: bytes, stderr: bytes) -> None:
        """Raise DecodeFailure with whatever ffprobe printed."""
        error_details = []
        stderr_text = stderr.decode(errors="replace").strip()
        stdout_text = stdout.decode(errors="replace").strip()
        if stderr_text:
            error_details.append(f"stderr: {stderr_text}")
        if stdout_text:
            error_details.append(f"stdout: {stdout_text}")

        error_msg = f"ffprobe failed for '{self.input_path.name}' (exit code {returncode})"
        if error_details:
            error_msg += f" - {', '.join(error_details)}"
        else:
            error_msg += " - File may be corrupted or not a valid video."

        raise DecodeFailure(error_msg)

    def _parse_output(self, output: str) -> None:
        """Parse ffprobe JSON output."""
        if not output:
            raise DecodeFailure(f"ffprobe returned empty output for '{self.input_path.name}'")

        data = json.loads(output)

        if "format" not in data:
            raise DecodeFailure("Invalid ffprobe output: 'format' key not found")

        video_stream = next(
            (s for s in data.get("streams", []) if s.get("codec_type") == "video"),
            None
        )
        if video_stream is None:
            raise DecodeFailure(f"No video stream found in '{self.input_path.name}'")

        self._format_data = data["format"]
        self._stream_data = video_stream

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("VideoInfo not loaded. Call load() first.")

    @property
    def duration(self) -> float:
        """Video duration in seconds (container first, stream as fallback)."""
        self._ensure_loaded()
        for source in (self._format_data, self._stream_data):
            try:
                value = float(source.get("duration", 0))
            except (TypeError, ValueError):
                continue
            if value > 0:
                return value
        return 0.0

    @property
    def width(self) -> int:
        """Video width with SAR correction."""
        self._ensure_loaded()
        width = int(self._stream_data.get("width", 0))
        sar = self._get_sample_aspect_ratio()
        # ffprobe reports 0:1 when the SAR is unknown
        if sar[0] > 0 and sar[1] > 0 and sar[0] != sar[1]:
            width = int(width * sar[0] / sar[1])
        return width

    @property
    def height(self) -> int:
        self._ensure_loaded()
        return int(self._stream_data.get("height", 0))

    @property
    def rotation(self) -> int:
        """Rotation in degrees, from the display matrix or the legacy rotate tag."""
        self._ensure_loaded()

        for entry in self._stream_data.get("side_data_list", []) or []:
            if (
                isinstance(entry, dict)
                and entry.get("side_data_type") == "Display Matrix"
                and "rotation" in entry
            ):
                try:
                    return (-int(entry["rotation"])) % 360
                except (ValueError, TypeError):
                    pass

        try:
            rotation = self._stream_data.get("tags", {}).get("rotate")
            if rotation not in (None, ""):
                return int(rotation) % 360
        except (ValueError, TypeError):
            pass

        return 0

    @property
    def dimensions(self) -> VideoDimensions:
        """Video dimensions with rotation-aware display dimensions."""
        width, height = self.width, self.height

        if self.rotation in (90, 270):
            display_width, display_height = height, width
        else:
            display_width, display_height = width, height

        return VideoDimensions(
            width=width,
            height=height,
            display_width=display_width,
            display_height=display_height,
            rotation=self.rotation
        )

    def _get_sample_aspect_ratio(self) -> Tuple[int, int]:
        sar = self._stream_data.get("sample_aspect_ratio", "1:1")
        try:
            num, den = sar.split(":")
            return int(num), int(den)
        except (ValueError, AttributeError):
            return 1, 1

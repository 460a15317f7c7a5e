"""
Tests for ffprobe-backed video information.

Probing real files requires ffmpeg and ffprobe; those tests are skipped when
the binaries are not installed.
"""
import asyncio
import json
import shutil
from unittest.mock import AsyncMock, Mock, patch

import pytest

from visionmeta import DecodeFailure, VideoInfo


def _probe_output(stream=None, fmt=None) -> str:
    stream = {"codec_type": "video", "width": 1920, "height": 1080, **(stream or {})}
    return json.dumps({
        "format": {"duration": "12.5", **(fmt or {})},
        "streams": [{"codec_type": "audio"}, stream],
    })


def _loaded_info(temp_dir, stream=None, fmt=None) -> VideoInfo:
    video_path = temp_dir / "clip.mp4"
    video_path.touch()
    info = VideoInfo(video_path)
    info._parse_output(_probe_output(stream, fmt))
    info._loaded = True
    return info


class TestVideoInfo:
    """Tests for VideoInfo class."""

    def test_creation(self, temp_dir):
        video_path = temp_dir / "test.mp4"
        video_path.touch()

        info = VideoInfo(video_path)

        assert info.input_path == video_path
        assert info._loaded is False

    def test_ensure_loaded_raises_when_not_loaded(self, temp_dir):
        video_path = temp_dir / "test.mp4"
        video_path.touch()

        info = VideoInfo(video_path)

        with pytest.raises(RuntimeError, match="not loaded"):
            _ = info.duration

    def test_validate_nonexistent_file(self, temp_dir):
        info = VideoInfo(temp_dir / "nonexistent.mp4")

        with pytest.raises(DecodeFailure, match="does not exist"):
            info._validate_input()

    def test_validate_directory_raises(self, temp_dir):
        info = VideoInfo(temp_dir)

        with pytest.raises(DecodeFailure, match="not a file"):
            info._validate_input()


class TestParseOutput:
    """Tests for ffprobe output parsing."""

    def test_picks_video_stream(self, temp_dir):
        info = _loaded_info(temp_dir)

        assert info.duration == 12.5
        assert info.width == 1920
        assert info.height == 1080

    def test_stream_duration_fallback(self, temp_dir):
        info = _loaded_info(temp_dir, stream={"duration": "4.0"}, fmt={"duration": "N/A"})

        assert info.duration == 4.0

    def test_unknown_duration(self, temp_dir):
        info = _loaded_info(temp_dir, fmt={"duration": "N/A"})

        assert info.duration == 0.0

    def test_empty_output(self, temp_dir):
        info = VideoInfo(temp_dir / "clip.mp4")

        with pytest.raises(DecodeFailure, match="empty output"):
            info._parse_output("")

    def test_missing_format(self, temp_dir):
        info = VideoInfo(temp_dir / "clip.mp4")

        with pytest.raises(DecodeFailure, match="'format' key not found"):
            info._parse_output(json.dumps({"streams": []}))

    def test_no_video_stream(self, temp_dir):
        info = VideoInfo(temp_dir / "clip.mp4")

        with pytest.raises(DecodeFailure, match="No video stream"):
            info._parse_output(json.dumps({"format": {}, "streams": [{"codec_type": "audio"}]}))


class TestGeometry:
    """Tests for SAR and rotation handling."""

    def test_sar_correction(self, temp_dir):
        info = _loaded_info(temp_dir, stream={"width": 720, "height": 576, "sample_aspect_ratio": "16:15"})

        assert info.width == 768

    def test_unknown_sar_ignored(self, temp_dir):
        info = _loaded_info(temp_dir, stream={"sample_aspect_ratio": "0:1"})

        assert info.width == 1920

    def test_display_matrix_rotation(self, temp_dir):
        info = _loaded_info(temp_dir, stream={
            "side_data_list": [{"side_data_type": "Display Matrix", "rotation": -90}],
        })

        dims = info.dimensions

        assert info.rotation == 90
        assert (dims.display_width, dims.display_height) == (1080, 1920)

    def test_rotate_tag(self, temp_dir):
        info = _loaded_info(temp_dir, stream={"tags": {"rotate": "270"}})

        assert info.dimensions.rotation == 270
        assert info.dimensions.display_width == 1080

    def test_no_rotation(self, temp_dir):
        dims = _loaded_info(temp_dir).dimensions

        assert (dims.display_width, dims.display_height) == (1920, 1080)


class TestLoad:
    """Tests for VideoInfo.load() with a mocked ffprobe."""

    def _process(self, returncode=0, stdout=b"", stderr=b""):
        process = Mock()
        process.returncode = returncode
        process.communicate = AsyncMock(return_value=(stdout, stderr))
        return process

    def test_load_parses_output(self, temp_dir):
        video_path = temp_dir / "clip.mp4"
        video_path.touch()
        process = self._process(stdout=_probe_output().encode())

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as exec_mock:
            info = VideoInfo(video_path)
            asyncio.run(info.load())
            asyncio.run(info.load())

        assert exec_mock.call_count == 1
        assert exec_mock.call_args[0][0] == "ffprobe"
        assert info.duration == 12.5

    def test_ffprobe_error(self, temp_dir):
        video_path = temp_dir / "clip.mp4"
        video_path.touch()
        process = self._process(returncode=1, stderr=b"moov atom not found")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(DecodeFailure, match="moov atom not found"):
                asyncio.run(VideoInfo(video_path).load())

    def test_ffprobe_missing(self, temp_dir):
        video_path = temp_dir / "clip.mp4"
        video_path.touch()

        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError())):
            with pytest.raises(DecodeFailure, match="ffprobe not found"):
                asyncio.run(VideoInfo(video_path).load())

    def test_invalid_json(self, temp_dir):
        video_path = temp_dir / "clip.mp4"
        video_path.touch()
        process = self._process(stdout=b"{not json")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(DecodeFailure, match="Failed to parse"):
                asyncio.run(VideoInfo(video_path).load())


@pytest.mark.skipif(shutil.which("ffprobe") is None, reason="ffprobe not installed")
class TestRealProbe:
    """Probes a non-video file with the real ffprobe."""

    def test_garbage_file_fails(self, temp_dir):
        video_path = temp_dir / "broken.mp4"
        video_path.write_bytes(b"this is not a video")

        with pytest.raises(DecodeFailure):
            asyncio.run(VideoInfo(video_path).load())

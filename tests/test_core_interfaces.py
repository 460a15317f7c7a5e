"""
Tests for core interfaces and data types.
"""
import base64
from dataclasses import FrozenInstanceError

import pytest

from visionmeta.core.interfaces import (
    AnalysisConfig,
    AnalysisPayload,
    CompressionConfig,
    EmbedConfig,
    Embedded,
    MediaAsset,
    MetadataRecord,
    PassThrough,
    PassThroughReason,
    StoryboardConfig,
    VideoDimensions,
)


class TestMetadataRecord:
    """Tests for MetadataRecord dataclass."""

    def test_creation(self, record):
        assert record.title == "City skyline at dusk"
        assert len(record.keywords) == 50

    def test_is_frozen(self, record):
        with pytest.raises(FrozenInstanceError):
            record.title = "other"

    def test_keywords_joined(self):
        record = MetadataRecord("t", "d", ["a", "b", "a"])

        assert record.keywords_joined() == "a; b; a"
        assert record.keywords_joined(",") == "a,b,a"

    def test_priority_keywords(self, record):
        assert record.priority_keywords() == record.keywords[:10]
        assert record.priority_keywords(3) == ["city", "skyline", "dusk"]
        assert record.priority_keywords(-1) == []

    def test_from_dict_with_list(self):
        record = MetadataRecord.from_dict({
            "title": "  Sunset  ",
            "description": "Orange sky",
            "keywords": [" sun ", "", "sky", "sun"],
        })

        assert record.title == "Sunset"
        assert record.keywords == ["sun", "sky", "sun"]

    def test_from_dict_with_string(self):
        record = MetadataRecord.from_dict({"title": "x", "keywords": "a, b,,c "})

        assert record.description == ""
        assert record.keywords == ["a", "b", "c"]

    def test_from_dict_missing_keys(self):
        record = MetadataRecord.from_dict({})

        assert record == MetadataRecord("", "", [])


class TestMediaAsset:
    """Tests for MediaAsset dataclass."""

    def test_properties(self):
        asset = MediaAsset(b"12345", "image/jpeg", "Photo.Final.JPG")

        assert asset.extension == ".jpg"
        assert asset.stem == "Photo.Final"
        assert asset.size == 5

    def test_from_path_guesses_mime(self, temp_dir):
        path = temp_dir / "logo.png"
        path.write_bytes(b"\x89PNG")

        asset = MediaAsset.from_path(path)

        assert asset.mime_type == "image/png"
        assert asset.filename == "logo.png"
        assert asset.data == b"\x89PNG"

    def test_from_path_unknown_extension(self, temp_dir):
        path = temp_dir / "data.zzz"
        path.write_bytes(b"")

        assert MediaAsset.from_path(path).mime_type == ""

    def test_from_path_explicit_mime(self, temp_dir):
        path = temp_dir / "clip.bin"
        path.write_bytes(b"")

        assert MediaAsset.from_path(str(path), "video/mp4").mime_type == "video/mp4"


class TestInjectionResults:
    """Tests for Embedded and PassThrough."""

    def test_embedded_flag(self):
        assert Embedded(b"x", "image/png").embedded is True

    def test_pass_through_flag(self):
        result = PassThrough(b"x", "image/gif", PassThroughReason.UNSUPPORTED_FORMAT)

        assert result.embedded is False
        assert result.detail == ""


class TestVideoDimensions:
    """Tests for VideoDimensions dataclass."""

    def test_display_defaults_to_coded_size(self):
        dims = VideoDimensions(width=1920, height=1080)

        assert dims.display_width == 1920
        assert dims.display_height == 1080
        assert dims.rotation == 0

    def test_explicit_display_size(self):
        dims = VideoDimensions(width=1920, height=1080, display_width=1080, display_height=1920, rotation=90)

        assert dims.display_width == 1080
        assert dims.display_height == 1920


class TestAnalysisPayload:
    """Tests for AnalysisPayload."""

    def test_to_base64(self):
        payload = AnalysisPayload(b"\x00\xffdata", "image/jpeg", "original")

        encoded = payload.to_base64()

        assert not encoded.startswith("data:")
        assert base64.b64decode(encoded) == b"\x00\xffdata"


class TestConfigs:
    """Tests for configuration defaults."""

    def test_embed_config_defaults(self):
        config = EmbedConfig()

        assert config.software == "VisionMeta AI Tagger"
        assert config.keyword_separator == "; "
        assert config.max_workers == 10

    def test_compression_config_defaults(self):
        config = CompressionConfig()

        assert config.size_threshold == 9 * 1024 * 1024
        assert config.max_dimension == 3840
        assert config.quality == 92

    def test_storyboard_config_defaults(self):
        config = StoryboardConfig()

        assert config.max_frame_size == 800
        assert config.capture_points == (0.10, 0.35, 0.60, 0.85)
        assert config.columns == 2
        assert config.quality == 85

    def test_analysis_config_nests_defaults(self):
        first, second = AnalysisConfig(), AnalysisConfig()

        assert first.compression == CompressionConfig()
        assert first.compression is not second.compression

"""
Pytest configuration and fixtures for VisionMeta tests.
"""
import io
import shutil
import struct
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from visionmeta import MetadataRecord


SKYLINE_KEYWORDS = ["city", "skyline", "dusk"] + [f"keyword{i:02d}" for i in range(47)]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="visionmeta_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def record() -> MetadataRecord:
    """The skyline record with 50 keywords."""
    return MetadataRecord(
        title="City skyline at dusk",
        description="A calm evening view",
        keywords=list(SKYLINE_KEYWORDS),
    )


@pytest.fixture
def tricky_record() -> MetadataRecord:
    """A record whose text needs XML escaping and non-ASCII handling."""
    return MetadataRecord(
        title="Fish & Chips <fresh>",
        description="Café terrace in Zürich, \"golden hour\"",
        keywords=["food & drink", "café", "a<b", "café"],
    )


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A small baseline JPEG as written by Pillow (SOI, JFIF APP0, ...)."""
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), color="blue").save(buffer, "JPEG", quality=90)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """A small RGB PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 30), color="green").save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def transparent_png_bytes() -> bytes:
    """A fully transparent RGBA PNG."""
    buffer = io.BytesIO()
    Image.new("RGBA", (400, 200), color=(255, 0, 0, 0)).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def svg_bytes() -> bytes:
    """An SVG document without a metadata element."""
    return (
        b'<?xml version="1.0" encoding="UTF-8"?>\n'
        b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">\n'
        b'  <rect width="10" height="10" fill="red"/>\n'
        b'</svg>\n'
    )


@pytest.fixture
def eps_bytes() -> bytes:
    """An EPS with a DSC header followed by non-UTF-8 binary data."""
    return (
        b"%!PS-Adobe-3.0 EPSF-3.0\n"
        b"%%BoundingBox: 0 0 10 10\n"
        b"%%Title: test\n"
        b"%%EndComments\n"
        b"newpath 0 0 moveto 10 10 lineto stroke\n"
        b"%%BeginBinary: 6\n"
        + bytes([0xC5, 0xD0, 0xD3, 0xC6, 0xFF, 0x00])
        + b"\n%%EndBinary\n%%EOF\n"
    )


@pytest.fixture
def mp4_bytes() -> bytes:
    """A minimal ISO-BMFF buffer: ftyp box followed by an empty mdat box."""
    ftyp_payload = b"isom" + struct.pack(">I", 0x200) + b"isomiso2mp41"
    ftyp = struct.pack(">I", 8 + len(ftyp_payload)) + b"ftyp" + ftyp_payload
    mdat = struct.pack(">I", 8) + b"mdat"
    return ftyp + mdat

"""
PNG metadata injection via an iTXt chunk carrying the XMP packet.
"""
import struct

from ..binary.crc32 import crc32
from ..core.errors import MalformedContainer
from ..core.interfaces import MediaAsset, MetadataRecord
from .base import BaseInjector

PNG_SIGNATURE_LENGTH = 8
CHUNK_LENGTH_FIELD = 4
CHUNK_TYPE_FIELD = 4
CHUNK_CRC_FIELD = 4
IHDR_DATA_LENGTH = 13

# IHDR is always the first chunk, so this is where it ends in every PNG
IHDR_END_OFFSET = (
    PNG_SIGNATURE_LENGTH + CHUNK_LENGTH_FIELD + CHUNK_TYPE_FIELD + IHDR_DATA_LENGTH + CHUNK_CRC_FIELD
)

XMP_KEYWORD = b"XML:com.adobe.xmp"
ITXT = b"iTXt"


def build_itxt_data(xmp: bytes) -> bytes:
    """
    Build iTXt chunk data.

    Layout: keyword, NUL, compression flag (0), compression method (0),
    empty language tag, NUL, empty translated keyword, NUL, UTF-8 text.
    """
    return XMP_KEYWORD + b"\x00" + b"\x00" + b"\x00" + b"\x00" + b"\x00" + xmp


def build_chunk(chunk_type: bytes, chunk_data: bytes) -> bytes:
    """Length (BE) + type + data + CRC32(type + data) (BE)."""
    return (
        struct.pack(">I", len(chunk_data))
        + chunk_type
        + chunk_data
        + struct.pack(">I", crc32(chunk_type + chunk_data))
    )


class PngInjector(BaseInjector):
    """Inserts an XMP iTXt chunk right after IHDR."""

    output_mime_type = "image/png"

    def _inject(self, asset: MediaAsset, record: MetadataRecord) -> bytes:
        data = asset.data
        if data[:2] != b"\x89\x50":
            raise MalformedContainer("Invalid PNG signature")
        if len(data) < IHDR_END_OFFSET:
            raise MalformedContainer(f"PNG truncated before end of IHDR ({len(data)} bytes)")

        xmp = self.xmp_packet(record, "image/png").encode("utf-8")
        chunk = build_chunk(ITXT, build_itxt_data(xmp))

        return data[:IHDR_END_OFFSET] + chunk + data[IHDR_END_OFFSET:]

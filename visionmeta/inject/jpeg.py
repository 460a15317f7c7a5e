"""
JPEG metadata injection: EXIF 0th IFD (via piexif) plus an XMP APP1 segment.
"""
import struct
from typing import List, Tuple
import logging

import piexif

from ..core.errors import InjectionFailure, MalformedContainer
from ..core.interfaces import MediaAsset, MetadataRecord
from .base import BaseInjector

logger = logging.getLogger(__name__)

SOI = b"\xff\xd8"
APP1_MARKER = b"\xff\xe1"

APP0 = 0xE0
APP1 = 0xE1
SOS = 0xDA
EOI = 0xD9

EXIF_HEADER = b"Exif\x00\x00"
XMP_HEADER = b"http://ns.adobe.com/xap/1.0/\x00"

MAX_SEGMENT_LENGTH = 0xFFFF


def to_ucs2(text: str) -> bytes:
    """Encode text as NUL-terminated little-endian UCS-2, the Windows XP* tag format."""
    return text.encode("utf-16-le") + b"\x00\x00"


def build_app1_segment(payload: bytes) -> bytes:
    """
    Wrap payload in an APP1 segment.

    The length field counts itself and the payload, not the 2 marker bytes.
    """
    length = len(payload) + 2
    if length > MAX_SEGMENT_LENGTH:
        raise InjectionFailure(f"APP1 payload too large ({len(payload)} bytes)")
    return APP1_MARKER + struct.pack(">H", length) + payload


def split_header_segments(data: bytes) -> Tuple[List[bytes], bytes]:
    """
    Split the marker segments that follow SOI.

    Walking stops at start-of-scan, end-of-image, or anything that does not
    look like a complete segment.

    Returns:
        (segments, remainder) where data == SOI + b"".join(segments) + remainder
    """
    segments = []
    offset = len(SOI)

    while offset + 4 <= len(data):
        if data[offset] != 0xFF:
            break
        marker = data[offset + 1]
        if marker in (SOS, EOI):
            break

        length = struct.unpack(">H", data[offset + 2:offset + 4])[0]
        end = offset + 2 + length
        if length < 2 or end > len(data):
            break

        segments.append(data[offset:end])
        offset = end

    return segments, data[offset:]


def _is_app1(segment: bytes, header: bytes) -> bool:
    return segment[1] == APP1 and segment[4:4 + len(header)] == header


class JpegInjector(BaseInjector):
    """Writes EXIF and XMP APP1 segments into a JPEG."""

    output_mime_type = "image/jpeg"

    def _inject(self, asset: MediaAsset, record: MetadataRecord) -> bytes:
        with_exif = self.insert_exif(asset.data, self.build_exif_segment(record))

        xmp = self.xmp_packet(record, "image/jpeg").encode("utf-8")
        xmp_segment = build_app1_segment(XMP_HEADER + xmp)

        if with_exif[:2] != SOI:
            logger.warning(f"Invalid JPEG signature during XMP injection for {asset.filename}")
            return with_exif

        return self.insert_xmp(with_exif, xmp_segment)

    def build_exif_segment(self, record: MetadataRecord) -> bytes:
        """Serialize the 0th IFD and wrap it as an EXIF APP1 segment."""
        zeroth = {
            piexif.ImageIFD.ImageDescription: f"{record.title} - {record.description}".encode("utf-8"),
            piexif.ImageIFD.XPTitle: to_ucs2(record.title),
            piexif.ImageIFD.XPComment: to_ucs2(record.description),
            piexif.ImageIFD.XPKeywords: to_ucs2(record.keywords_joined(self.config.keyword_separator)),
            piexif.ImageIFD.Software: self.config.software.encode("utf-8"),
        }
        exif_bytes = piexif.dump({"0th": zeroth, "Exif": {}, "GPS": {}})
        return build_app1_segment(exif_bytes)

    @staticmethod
    def insert_exif(data: bytes, exif_segment: bytes) -> bytes:
        """
        Splice an EXIF segment using the usual EXIF placement rules.

        Existing EXIF segments are dropped. The new one goes right after SOI,
        or after a leading JFIF APP0 segment.
        """
        if data[:2] != SOI:
            raise MalformedContainer("Given data isn't JPEG (missing SOI marker)")

        segments, remainder = split_header_segments(data)
        kept = [s for s in segments if not _is_app1(s, EXIF_HEADER)]

        position = 1 if kept and kept[0][1] == APP0 else 0
        kept.insert(position, exif_segment)

        return SOI + b"".join(kept) + remainder

    @staticmethod
    def insert_xmp(data: bytes, xmp_segment: bytes) -> bytes:
        """Drop any existing XMP APP1 segment and insert the new one right after SOI."""
        segments, remainder = split_header_segments(data)
        kept = [s for s in segments if not _is_app1(s, XMP_HEADER)]

        return SOI + xmp_segment + b"".join(kept) + remainder

"""
Video (MP4/MOV) metadata injection via a trailing ISO-BMFF uuid box.
Existing boxes are left untouched; readers that honour top-level boxes after
the movie data pick the XMP up.
"""
import struct

from ..core.errors import InjectionFailure
from ..core.interfaces import MediaAsset, MetadataRecord
from .base import BaseInjector

# Adobe XMP UUID: BE7ACFCB-97A9-42E8-9C71-999491E3AFAC
XMP_UUID = bytes.fromhex("BE7ACFCB97A942E89C71999491E3AFAC")

BOX_HEADER_SIZE = 8
MAX_BOX_SIZE = 0xFFFFFFFF


def build_uuid_box(payload: bytes, extended_type: bytes = XMP_UUID) -> bytes:
    """size (4, BE) + 'uuid' + extended type (16) + payload; size covers the whole box."""
    box_size = BOX_HEADER_SIZE + len(extended_type) + len(payload)
    if box_size > MAX_BOX_SIZE:
        raise InjectionFailure(f"uuid box too large for a 32-bit size field ({box_size} bytes)")
    return struct.pack(">I", box_size) + b"uuid" + extended_type + payload


class VideoInjector(BaseInjector):
    """Appends an XMP uuid box. Failures are raised, not swallowed."""

    output_mime_type = "video/mp4"
    fail_silently = False

    def result_mime_type(self, asset: MediaAsset) -> str:
        return asset.mime_type or self.output_mime_type

    def _inject(self, asset: MediaAsset, record: MetadataRecord) -> bytes:
        xmp = self.xmp_packet(record, self.result_mime_type(asset)).encode("utf-8")
        return asset.data + build_uuid_box(xmp)

"""
EPS metadata injection as a block of PostScript comments.
Works on raw bytes: EPS files may carry binary previews after the header.
"""
from ..binary.scanner import find, find_any
from ..core.interfaces import MediaAsset, MetadataRecord
from ..xmp.packet import XMP_BOM, XMP_PACKET_ID
from .base import BaseInjector

END_COMMENTS = "%%EndComments"
PS_HEADER = "%!PS-Adobe"

HEADER_SEARCH_LIMIT = 1024
NEWLINE_SCAN_WINDOW = 256

CR = 0x0D
LF = 0x0A


def find_insert_offset(data: bytes) -> int:
    """
    Pick where the comment block goes.

    1. Right after %%EndComments.
    2. After the line holding %!PS-Adobe (first 1024 bytes), or right after
       the token when no line terminator follows within the scan window.
    3. Start of file.
    """
    end_comments = find(data, END_COMMENTS)
    if end_comments is not None:
        return end_comments + len(END_COMMENTS)

    header = find(data, PS_HEADER, limit=HEADER_SEARCH_LIMIT)
    if header is None:
        return 0

    newline = find_any(data, (LF, CR), start=header, end=header + NEWLINE_SCAN_WINDOW)
    if newline is None:
        return header + len(PS_HEADER)

    if data[newline] == CR and newline + 1 < len(data) and data[newline + 1] == LF:
        return newline + 2
    return newline + 1


def build_comment_block(xmp: str) -> bytes:
    """Prefix each XMP line with '% ' and wrap it in xml packet markers."""
    commented = "\n".join(f"% {line}" for line in xmp.split("\n"))
    return (
        f'\n%begin_xml_packet: w begin="{XMP_BOM}" id="{XMP_PACKET_ID}"\n'
        f"{commented}\n"
        f"%end_xml_packet\n"
    ).encode("utf-8")


class EpsInjector(BaseInjector):
    """Inserts the XMP packet as PostScript comments after the DSC header."""

    output_mime_type = "application/postscript"

    def result_mime_type(self, asset: MediaAsset) -> str:
        return asset.mime_type or self.output_mime_type

    def _inject(self, asset: MediaAsset, record: MetadataRecord) -> bytes:
        data = asset.data
        offset = find_insert_offset(data)
        block = build_comment_block(self.xmp_packet(record, "application/postscript"))
        return data[:offset] + block + data[offset:]

"""
XMP packet generation.
"""
from .packet import generate_xmp_packet, escape_xml_text, XMP_PACKET_ID, XMP_BOM

__all__ = [
    "generate_xmp_packet",
    "escape_xml_text",
    "XMP_PACKET_ID",
    "XMP_BOM",
]

"""
SVG metadata injection by patching the document text.
"""
import re

from ..core.interfaces import MediaAsset, MetadataRecord
from .base import BaseInjector

_METADATA_ELEMENT = re.compile(r"(<metadata(?:\s[^>]*)?>)(.*?)(</metadata>)", re.DOTALL)
_EMPTY_METADATA_ELEMENT = re.compile(r"<metadata(?:\s[^>]*)?/>")

SVG_CLOSE = "</svg>"


class SvgInjector(BaseInjector):
    """Places the XMP packet inside the SVG <metadata> element."""

    output_mime_type = "image/svg+xml"

    def _inject(self, asset: MediaAsset, record: MetadataRecord) -> bytes:
        text = asset.data.decode("utf-8")
        xmp = self.xmp_packet(record, "image/svg+xml")
        return self.patch(text, xmp).encode("utf-8")

    @staticmethod
    def patch(text: str, xmp: str) -> str:
        """
        Return text with xmp as the content of its metadata element.

        The first existing <metadata> element is rewritten in place; otherwise
        a new element goes before the last </svg>, or at the end of the text.
        """
        # Callables keep backslashes in the packet literal
        patched, count = _METADATA_ELEMENT.subn(
            lambda m: f"{m.group(1)}{xmp}{m.group(3)}", text, count=1
        )
        if count:
            return patched

        patched, count = _EMPTY_METADATA_ELEMENT.subn(
            lambda m: f"<metadata>{xmp}</metadata>", text, count=1
        )
        if count:
            return patched

        close = text.rfind(SVG_CLOSE)
        if close != -1:
            return f"{text[:close]}<metadata>{xmp}</metadata>{text[close:]}"

        return f"{text}\n<metadata>{xmp}</metadata>"

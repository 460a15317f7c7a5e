"""
XMP packet generation.
Renders a MetadataRecord into the Dublin Core / Photoshop XMP document that
every injector embeds.
"""
from ..core.interfaces import DEFAULT_PRODUCT, MetadataRecord

XMP_PACKET_ID = "W5M0MpCehiHzreSzNTczkc9d"
XMP_BOM = "\ufeff"

_KEYWORD_INDENT = "\n          "


def escape_xml_text(text: str) -> str:
    """Escape &, < and > for XML element content. Nothing else is touched."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def generate_xmp_packet(
    record: MetadataRecord,
    mime_type: str = "image/jpeg",
    toolkit: str = DEFAULT_PRODUCT
) -> str:
    """
    Render record as a complete <?xpacket ...?> document.

    Args:
        record: Metadata to render
        mime_type: Value written to dc:format
        toolkit: Value written to x:xmptk

    Returns:
        XMP packet string, including the BOM in the begin attribute
    """
    title = escape_xml_text(record.title)
    description = escape_xml_text(record.description)
    keywords = _KEYWORD_INDENT.join(
        f"<rdf:li>{escape_xml_text(kw)}</rdf:li>" for kw in record.keywords
    )

    return f"""<?xpacket begin="{XMP_BOM}" id="{XMP_PACKET_ID}"?>
<x:xmpmeta xmlns:x="adobe:ns:meta/" x:xmptk="{toolkit}">
  <rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">
    <rdf:Description rdf:about=""
        xmlns:dc="http://purl.org/dc/elements/1.1/"
        xmlns:photoshop="http://ns.adobe.com/photoshop/1.0/"
        xmlns:Iptc4xmpCore="http://iptc.org/std/Iptc4xmpCore/1.0/xmlns/">
      <dc:format>{mime_type}</dc:format>
      <dc:title>
        <rdf:Alt>
          <rdf:li xml:lang="x-default">{title}</rdf:li>
        </rdf:Alt>
      </dc:title>
      <dc:description>
        <rdf:Alt>
          <rdf:li xml:lang="x-default">{description}</rdf:li>
        </rdf:Alt>
      </dc:description>
      <dc:subject>
        <rdf:Bag>
          {keywords}
        </rdf:Bag>
      </dc:subject>
      <photoshop:Headline>{title}</photoshop:Headline>
    </rdf:Description>
  </rdf:RDF>
</x:xmpmeta>
<?xpacket end="w"?>"""

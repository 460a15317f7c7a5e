"""
Shared injector behaviour.
Follows Template Method Pattern - subclasses build the new buffer, the base
class turns failures into explicit pass-through results.
"""
from abc import abstractmethod
from typing import Optional
import logging

from ..core.errors import InjectionFailure, MalformedContainer, VisionMetaError
from ..core.interfaces import (
    EmbedConfig,
    Embedded,
    IMetadataInjector,
    InjectionResult,
    MediaAsset,
    MetadataRecord,
    PassThrough,
    PassThroughReason,
)
from ..xmp.packet import generate_xmp_packet

logger = logging.getLogger(__name__)


class BaseInjector(IMetadataInjector):
    """
    Base class for format-specific injectors.

    Still-image formats never raise: a failed signature check or any error
    while building the container returns the original bytes. Subclasses that
    must surface failures set `fail_silently = False`.
    """

    output_mime_type = "application/octet-stream"
    fail_silently = True

    def __init__(self, config: Optional[EmbedConfig] = None):
        self.config = config or EmbedConfig()

    def inject(self, asset: MediaAsset, record: MetadataRecord) -> InjectionResult:
        """Embed record into asset, returning Embedded or PassThrough."""
        mime_type = self.result_mime_type(asset)

        try:
            data = self._inject(asset, record)
        except MalformedContainer as e:
            if not self.fail_silently:
                raise
            logger.warning(f"Skipping metadata for {asset.filename}: {e}")
            return PassThrough(asset.data, mime_type, PassThroughReason.MALFORMED_CONTAINER, str(e))
        except Exception as e:
            if not self.fail_silently:
                if isinstance(e, VisionMetaError):
                    raise
                raise InjectionFailure(f"Failed to embed metadata in '{asset.filename}': {e}") from e
            logger.error(f"Error embedding metadata in {asset.filename}: {e}")
            return PassThrough(asset.data, mime_type, PassThroughReason.INJECTION_FAILURE, str(e))

        logger.debug(f"Embedded metadata in {asset.filename} ({asset.size} -> {len(data)} bytes)")
        return Embedded(data, mime_type)

    def result_mime_type(self, asset: MediaAsset) -> str:
        """MIME type declared for the output buffer."""
        return self.output_mime_type

    def xmp_packet(self, record: MetadataRecord, mime_type: str) -> str:
        return generate_xmp_packet(record, mime_type, self.config.xmp_toolkit)

    @abstractmethod
    def _inject(self, asset: MediaAsset, record: MetadataRecord) -> bytes:
        """Build the new buffer. Raise MalformedContainer on a bad signature."""
        pass

"""
MetadataEmbedder - routes assets to the matching format injector.
Follows Facade Pattern for a single mutation entry point.
"""
from typing import Dict, Optional
import logging

from .core.errors import UnsupportedFormat
from .core.formats import MediaFormat, resolve_format
from .core.interfaces import (
    EmbedConfig,
    IMetadataInjector,
    InjectionResult,
    MediaAsset,
    MetadataRecord,
    PassThrough,
    PassThroughReason,
)
from .inject import EpsInjector, JpegInjector, PngInjector, SvgInjector, VideoInjector

logger = logging.getLogger(__name__)


class MetadataEmbedder:
    """
    Embeds a MetadataRecord into any supported asset.

    Example:
        embedder = MetadataEmbedder()
        result = embedder.embed(MediaAsset.from_path("photo.jpg"), record)
        Path("out.jpg").write_bytes(result.data)
    """

    def __init__(self, config: Optional[EmbedConfig] = None):
        self.config = config or EmbedConfig()
        self.injectors: Dict[MediaFormat, IMetadataInjector] = {
            MediaFormat.JPEG: JpegInjector(self.config),
            MediaFormat.PNG: PngInjector(self.config),
            MediaFormat.SVG: SvgInjector(self.config),
            MediaFormat.EPS: EpsInjector(self.config),
            MediaFormat.VIDEO: VideoInjector(self.config),
        }

    def injector_for(self, asset: MediaAsset) -> IMetadataInjector:
        """Return the injector for asset, raising UnsupportedFormat if there is none."""
        media_format = resolve_format(asset.mime_type, asset.filename)
        if media_format is None:
            raise UnsupportedFormat(
                f"No injector for '{asset.filename}' ({asset.mime_type or 'unknown type'})"
            )
        return self.injectors[media_format]

    def embed(self, asset: MediaAsset, record: MetadataRecord) -> InjectionResult:
        """
        Embed record into asset.

        Unknown formats pass through unchanged. Still-image failures pass
        through too; video failures raise InjectionFailure.
        """
        try:
            injector = self.injector_for(asset)
        except UnsupportedFormat as e:
            logger.debug(f"Passing through {asset.filename}: {e}")
            return PassThrough(asset.data, asset.mime_type, PassThroughReason.UNSUPPORTED_FORMAT, str(e))

        logger.debug(f"Routing {asset.filename} to {type(injector).__name__}")
        return injector.inject(asset, record)


def embed_metadata(
    file_bytes: bytes,
    mime_type: str,
    filename: str,
    metadata: MetadataRecord,
    config: Optional[EmbedConfig] = None
) -> bytes:
    """
    Convenience function to embed metadata and get the resulting bytes.

    Args:
        file_bytes: Original file contents
        mime_type: Declared MIME type (may be empty)
        filename: Original filename, used for extension routing
        metadata: Record to embed
        config: Embedding configuration

    Returns:
        New buffer, or file_bytes unchanged when nothing could be embedded
    """
    asset = MediaAsset(data=file_bytes, mime_type=mime_type or "", filename=filename)
    return MetadataEmbedder(config).embed(asset, metadata).data

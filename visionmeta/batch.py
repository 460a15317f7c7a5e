"""
Batch metadata embedding with a bounded worker pool.
Also pairs raster previews with the vector files (EPS/SVG) uploaded next to
them, so one record is written into both.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import time

from natsort import natsorted

from .core.errors import VisionMetaError
from .core.formats import is_vector
from .core.interfaces import EmbedConfig, MediaAsset, MetadataRecord
from .embedder import MetadataEmbedder

logger = logging.getLogger(__name__)


@dataclass
class AssetPair:
    """A primary asset and the vector file sharing its basename, if any."""
    primary: MediaAsset
    vector: Optional[MediaAsset] = None

    @property
    def assets(self) -> List[MediaAsset]:
        return [self.primary] if self.vector is None else [self.primary, self.vector]


@dataclass
class BatchItemResult:
    """Outcome of embedding one asset in a batch."""
    asset: MediaAsset
    data: bytes
    embedded: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def pair_vector_assets(assets: Sequence[MediaAsset]) -> List[AssetPair]:
    """
    Group assets by case-insensitive basename.

    Each non-vector asset takes at most one vector with the same stem. A
    vector is shared by every asset with its stem (a.jpg and a.png both
    get a.eps). Vectors left without a partner become standalone pairs.
    """
    vectors: Dict[str, MediaAsset] = {}
    primaries: List[MediaAsset] = []

    for asset in assets:
        if is_vector(asset.filename):
            vectors.setdefault(asset.stem.lower(), asset)
        else:
            primaries.append(asset)

    pairs = []
    used = set()
    for asset in primaries:
        key = asset.stem.lower()
        vector = vectors.get(key)
        if vector is not None:
            used.add(key)
        pairs.append(AssetPair(asset, vector))

    pairs.extend(AssetPair(vector) for key, vector in vectors.items() if key not in used)

    return natsorted(pairs, key=lambda pair: pair.primary.filename)


def _embed_single(embedder: MetadataEmbedder, asset: MediaAsset, record: MetadataRecord) -> BatchItemResult:
    """Worker function: embed one asset, keeping the original bytes on fatal errors."""
    try:
        result = embedder.embed(asset, record)
        return BatchItemResult(asset, result.data, embedded=result.embedded)
    except VisionMetaError as e:
        return BatchItemResult(asset, asset.data, error=str(e))


class BatchEmbedder:
    """
    Embeds metadata into many assets concurrently.

    Example:
        batch = BatchEmbedder(EmbedConfig(max_workers=4))
        results = batch.embed_pairs([(pair, record) for pair in pairs])
    """

    def __init__(self, config: Optional[EmbedConfig] = None):
        self.config = config or EmbedConfig()
        self.embedder = MetadataEmbedder(self.config)

    def embed_pairs(self, jobs: Sequence[Tuple[AssetPair, MetadataRecord]]) -> List[BatchItemResult]:
        """Embed each record into its pair's primary asset and paired vector."""
        expanded = [(asset, record) for pair, record in jobs for asset in pair.assets]
        return self.embed_all(expanded)

    def embed_all(self, jobs: Sequence[Tuple[MediaAsset, MetadataRecord]]) -> List[BatchItemResult]:
        """
        Embed every (asset, record) job.

        Returns:
            One result per job, in submission order
        """
        total = len(jobs)
        if not total:
            return []

        start_time = time.time()
        results: List[Optional[BatchItemResult]] = [None] * total
        max_workers = max(1, min(self.config.max_workers, total))
        processed = 0
        errors = 0

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(_embed_single, self.embedder, asset, record): index
                for index, (asset, record) in enumerate(jobs)
            }

            for future in as_completed(futures):
                index = futures[future]
                asset = jobs[index][0]
                try:
                    item = future.result()
                except Exception as e:
                    item = BatchItemResult(asset, asset.data, error=f"worker: {e}")

                results[index] = item
                processed += 1

                if item.error:
                    errors += 1
                    logger.error(f"Embedding failed for {asset.filename}: {item.error}")

                if processed % 100 == 0 or processed == total:
                    logger.info(f"Progress: {processed}/{total} ({processed/total*100:.1f}%)")

        elapsed = time.time() - start_time
        logger.info(f"Embedded metadata in {total} files in {elapsed:.2f}s")
        if errors:
            logger.warning(f"Completed with {errors} errors")

        return results

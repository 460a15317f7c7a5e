"""
Example: Embedding Metadata with VisionMeta

This example demonstrates how to:
- Embed a title, description and keywords into a single file
- Pair raster previews with their EPS/SVG vectors
- Tag a whole folder concurrently
"""
import logging
import sys
from pathlib import Path

from visionmeta import (
    BatchEmbedder,
    EmbedConfig,
    MediaAsset,
    MetadataEmbedder,
    MetadataRecord,
    pair_vector_assets,
)

SUPPORTED = {".jpg", ".jpeg", ".png", ".svg", ".eps", ".mp4", ".mov"}


def embed_single_file(path: Path, record: MetadataRecord, output_dir: Path):
    """Embed metadata into one file and report what happened."""
    result = MetadataEmbedder().embed(MediaAsset.from_path(path), record)

    output_path = output_dir / path.name
    output_path.write_bytes(result.data)

    if result.embedded:
        print(f"Tagged {path.name} -> {output_path}")
    else:
        print(f"Copied {path.name} unchanged ({result.reason.value}: {result.detail})")


def embed_folder(folder: Path, record: MetadataRecord, output_dir: Path):
    """Tag every supported file in a folder, vectors together with their previews."""
    assets = [
        MediaAsset.from_path(p) for p in sorted(folder.iterdir())
        if p.suffix.lower() in SUPPORTED
    ]
    pairs = pair_vector_assets(assets)

    for pair in pairs:
        if pair.vector:
            print(f"Pair: {pair.primary.filename} + {pair.vector.filename}")

    batch = BatchEmbedder(EmbedConfig(max_workers=4))
    results = batch.embed_pairs([(pair, record) for pair in pairs])

    for item in results:
        (output_dir / item.asset.filename).write_bytes(item.data)
        status = "ok" if item.embedded else (item.error or "unchanged")
        print(f"  {item.asset.filename}: {status}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) < 2:
        print("Usage: python embed_metadata.py <file-or-folder> [output-dir]")
        sys.exit(1)

    source = Path(sys.argv[1])
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("tagged")
    output_dir.mkdir(parents=True, exist_ok=True)

    record = MetadataRecord.from_dict({
        "title": "City skyline at dusk",
        "description": "A calm evening view over the downtown towers",
        "keywords": "city, skyline, dusk, downtown, towers, evening, urban",
    })

    if source.is_dir():
        embed_folder(source, record, output_dir)
    else:
        embed_single_file(source, record, output_dir)


if __name__ == "__main__":
    main()

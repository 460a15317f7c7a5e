"""
Example: Preparing Media for a Vision Model

This example demonstrates how to:
- Forward small images untouched
- Downsample images larger than the size threshold
- Turn a video into a 2x2 storyboard JPEG
"""
import asyncio
import base64
import logging
import sys
from pathlib import Path

from visionmeta import AnalysisConfig, AnalysisPreparer, MediaAsset, StoryboardConfig, prepare_for_analysis


async def describe_payload(path: Path):
    """Prepare one file and show what would be sent."""
    preparer = AnalysisPreparer(AnalysisConfig(storyboard=StoryboardConfig(max_frame_size=640)))
    payload = await preparer.prepare(MediaAsset.from_path(path))

    print(f"{path.name}: {payload.source}, {payload.mime_type}, {len(payload.data)} bytes")

    if payload.source == "storyboard":
        storyboard_path = path.with_name(f"{path.stem}_storyboard.jpg")
        storyboard_path.write_bytes(payload.data)
        print(f"  Storyboard saved to {storyboard_path}")


async def as_base64(path: Path):
    """Use the one-call entry point and return the base64 payload."""
    asset = MediaAsset.from_path(path)
    encoded = await prepare_for_analysis(asset.data, asset.mime_type, asset.filename)
    print(f"  Base64 payload: {len(encoded)} chars, decodes to {len(base64.b64decode(encoded))} bytes")
    return encoded


async def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) < 2:
        print("Usage: python prepare_for_analysis.py <file> [<file> ...]")
        sys.exit(1)

    for arg in sys.argv[1:]:
        path = Path(arg)
        await describe_payload(path)
        await as_base64(path)


if __name__ == "__main__":
    asyncio.run(main())

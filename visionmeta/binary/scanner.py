"""
Binary-safe pattern search.
Containers such as EPS and JPEG mix text headers with binary regions, so
offsets are always computed on the raw bytes, never on decoded text.
"""
from typing import Iterable, Optional, Union


def _to_bytes(pattern: Union[str, bytes]) -> bytes:
    if isinstance(pattern, str):
        # One byte per character, like the header tokens of the formats we scan
        return pattern.encode("latin-1")
    return bytes(pattern)


def find(
    haystack: bytes,
    pattern: Union[str, bytes],
    limit: Optional[int] = None,
    start: int = 0
) -> Optional[int]:
    """
    Find the first occurrence of pattern in haystack.

    Args:
        haystack: Buffer to search
        pattern: Byte sequence, or a string converted byte-per-character
        limit: Only report matches lying entirely within haystack[:limit]
        start: Offset to start searching from

    Returns:
        Offset of the first match, or None if not found
    """
    needle = _to_bytes(pattern)
    end = len(haystack) if limit is None else min(len(haystack), limit)

    index = haystack.find(needle, start, end)
    return index if index >= 0 else None


def find_any(
    haystack: bytes,
    values: Iterable[int],
    start: int = 0,
    end: Optional[int] = None
) -> Optional[int]:
    """Return the offset of the first byte in haystack[start:end] that is one of values."""
    wanted = frozenset(values)
    stop = len(haystack) if end is None else min(len(haystack), end)

    for offset in range(start, stop):
        if haystack[offset] in wanted:
            return offset
    return None

"""
Table-driven reflected CRC-32 (polynomial 0xEDB88320), as used by PNG chunks.
"""

POLYNOMIAL = 0xEDB88320


def _build_table():
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (POLYNOMIAL ^ (c >> 1)) if c & 1 else (c >> 1)
        table.append(c)
    return tuple(table)


# Built once at import, read-only afterwards
CRC_TABLE = _build_table()


def crc32(data: bytes) -> int:
    """Compute the CRC-32 of data as an unsigned 32-bit integer."""
    crc = 0xFFFFFFFF
    table = CRC_TABLE
    for byte in data:
        crc = (crc >> 8) ^ table[(crc ^ byte) & 0xFF]
    return crc ^ 0xFFFFFFFF

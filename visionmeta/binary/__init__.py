"""
Low-level byte utilities: pattern scanning and CRC-32.
"""
from .scanner import find, find_any
from .crc32 import crc32, CRC_TABLE

__all__ = [
    "find",
    "find_any",
    "crc32",
    "CRC_TABLE",
]

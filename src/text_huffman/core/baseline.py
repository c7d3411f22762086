"""Generic byte compressors used as a size baseline next to Huffman."""

from __future__ import annotations

import zlib

import zstandard as zstd

BASELINE_IDS: tuple[str, ...] = ("zlib", "zstd")


def _zlib_size(data: bytes, level: int = 9) -> int:
    return len(zlib.compress(data, level))


def _zstd_size(data: bytes, level: int = 19) -> int:
    # frame "tight": niente content size, niente checksum
    c = zstd.ZstdCompressor(level=level, write_content_size=False, write_checksum=False)
    return len(c.compress(data))


def compressed_size(name: str, data: bytes) -> int:
    """Size in bytes of ``data`` compressed by the named baseline."""
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes")
    key = name.strip().lower()
    if key == "zlib":
        return _zlib_size(bytes(data))
    if key == "zstd":
        return _zstd_size(bytes(data))
    raise ValueError(f"baseline non supportata: {name!r} (attese: {', '.join(BASELINE_IDS)})")

"""Compression wrapper applied to the encoded stream before it is stored.

The wrapper knows nothing about document structure; it takes and returns
opaque byte buffers.
"""

import gzip
import zlib

from compact_markup.shared import CompressionError

DEFAULT_LEVEL = 9


def compress(data: bytes, level: int = DEFAULT_LEVEL) -> bytes:
    """Gzip ``data`` at the given level (0-9)."""
    if not (0 <= level <= 9):
        raise ValueError("level must be between 0 and 9")
    # mtime=0 keeps the output identical for identical input
    return gzip.compress(data, compresslevel=level, mtime=0)


def decompress(data: bytes) -> bytes:
    """Reverse ``compress``.

    Raises:
        CompressionError: If ``data`` is not a complete gzip stream
    """
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise CompressionError(f"cannot decompress stream: {e}") from e

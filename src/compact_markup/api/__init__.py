"""Public pipeline API."""

from .pipeline import MarkupCodec, pack, pack_file, unpack, unpack_file

__all__ = [
    "MarkupCodec",
    "pack",
    "pack_file",
    "unpack",
    "unpack_file",
]

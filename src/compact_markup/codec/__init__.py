"""Binary codec layer.

Key Components:
    BinaryEncoder: Document tree to compact byte stream
    BinaryDecoder: Compact byte stream to document tree
    compress, decompress: Opaque gzip wrapper for storage
"""

from .compression import compress, decompress
from .decoder import BinaryDecoder, decode_document
from .encoder import BinaryEncoder, encode_document

__all__ = [
    "BinaryDecoder",
    "BinaryEncoder",
    "compress",
    "decode_document",
    "decompress",
    "encode_document",
]

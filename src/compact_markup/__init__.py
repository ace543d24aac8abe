"""Compact Markup.

Lossless conversion of angle-bracket markup into a dense tagged byte stream and
back: parse text into an immutable tree, encode the tree with small integer
codes for known vocabulary, and render decoded trees back to markup.

Progressive API Disclosure:
- Level 1: Simple functions - parse_markup(), render(), pack(), unpack()
- Level 2: Configured pipeline - MarkupCodec class with PipelineConfig
- Level 3: Individual layers - MarkupParser, BinaryEncoder, BinaryDecoder
"""

__version__ = "0.1.0"
__author__ = "Compact Markup Team"

from .api import MarkupCodec, pack, pack_file, unpack, unpack_file
from .codec import BinaryDecoder, BinaryEncoder, decode_document, encode_document
from .parsing import MarkupParser, parse_markup
from .shared import (
    CompactMarkupError,
    DecodeError,
    EncodeError,
    ParseError,
    PipelineConfig,
)
from .tree import Attribute, Comment, Document, Element, Text, render
from .vocabulary import ExtensionRegistry

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse_markup",
    "render",
    "encode_document",
    "decode_document",
    "pack",
    "unpack",
    "pack_file",
    "unpack_file",

    # Level 2: Configured pipeline
    "MarkupCodec",
    "PipelineConfig",
    "ExtensionRegistry",

    # Level 3: Individual layers
    "MarkupParser",
    "BinaryEncoder",
    "BinaryDecoder",

    # Document model
    "Document",
    "Element",
    "Attribute",
    "Text",
    "Comment",

    # Errors
    "CompactMarkupError",
    "ParseError",
    "EncodeError",
    "DecodeError",
]

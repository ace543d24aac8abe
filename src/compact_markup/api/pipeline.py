"""End-to-end pipeline between markup text and stored binary form.

Progressive disclosure:
- Level 1: module functions ``pack``, ``unpack``, ``pack_file``, ``unpack_file``
- Level 2: ``MarkupCodec`` with a ``PipelineConfig`` and optional
  ``ExtensionRegistry`` shared across calls
"""

import time
from pathlib import Path
from typing import Optional, Union

from compact_markup.codec import BinaryDecoder, BinaryEncoder, compress, decompress
from compact_markup.parsing import MarkupParser
from compact_markup.shared import EncodeResult, PipelineConfig, get_logger
from compact_markup.tree import Document, render
from compact_markup.vocabulary import ExtensionRegistry

PathLike = Union[str, Path]
MarkupInput = Union[str, Document]

# Markup files are treated as single-byte text so that every byte survives the
# trip through the parser and the one-byte-per-character string encoding.
FILE_ENCODING = "latin-1"
MS_PER_SECOND = 1000


class MarkupCodec:
    """Configured parse/encode/compress pipeline and its inverse.

    Examples:
        >>> codec = MarkupCodec()
        >>> codec.unpack_to_markup(codec.pack("<p>Hi</p>"))
        '<p>Hi</p>'
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        extensions: Optional[ExtensionRegistry] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.extensions = extensions
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "pipeline")

        self.parser = MarkupParser(self.config.parser, correlation_id)
        self.encoder = BinaryEncoder(self.config.codec, extensions, correlation_id)
        self.decoder = BinaryDecoder(self.config.codec, correlation_id)

    def parse(self, text: str) -> Document:
        return self.parser.parse(text)

    def render(self, document: Document) -> str:
        return render(document)

    def encode(self, document: Document) -> EncodeResult:
        """Encode without the compression wrapper."""
        return self.encoder.encode(document)

    def decode(self, data: bytes) -> Document:
        """Decode a raw (uncompressed) stream."""
        return self.decoder.decode(data)

    def pack_with_result(self, source: MarkupInput) -> EncodeResult:
        """Parse (if needed), encode and compress ``source``.

        The returned result's ``data`` is the stored form; its metrics describe
        the whole pipeline, from markup characters to stored bytes.
        """
        start_time = time.time()
        if isinstance(source, Document):
            result = self.encode(source)
        else:
            result = self.encode(self.parse(source))
            # whitespace and quoting as written, not as rendered
            result.metrics.input_size = len(source)
        if self.config.compression.enabled:
            result.data = compress(result.data, self.config.compression.level)

        result.metrics.output_size = len(result.data)
        result.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        self.logger.info(
            "Packed document",
            extra={
                "input_size": result.metrics.input_size,
                "output_size": len(result.data),
                "compressed": self.config.compression.enabled,
            },
        )
        return result

    def pack(self, source: MarkupInput) -> bytes:
        """Stored form of ``source`` (markup text or a document)."""
        return self.pack_with_result(source).data

    def unpack(self, data: bytes) -> Document:
        """Document from a stored form produced by ``pack``."""
        if self.config.compression.enabled:
            data = decompress(data)
        return self.decode(data)

    def unpack_to_markup(self, data: bytes) -> str:
        return self.render(self.unpack(data))

    def pack_file(self, source: PathLike, destination: PathLike) -> EncodeResult:
        """Read markup from ``source`` and write its stored form to ``destination``."""
        source_path = Path(source)
        destination_path = Path(destination)
        with source_path.open(encoding=FILE_ENCODING, newline="") as file:
            text = file.read()
        result = self.pack_with_result(text)
        destination_path.write_bytes(result.data)
        self.logger.info(
            "Wrote packed file",
            extra={"source": str(source_path), "destination": str(destination_path)},
        )
        return result

    def unpack_file(self, source: PathLike, destination: PathLike) -> Document:
        """Read a stored form from ``source`` and write markup to ``destination``."""
        source_path = Path(source)
        destination_path = Path(destination)
        document = self.unpack(source_path.read_bytes())
        # newline="" keeps line endings exactly as they were parsed
        with destination_path.open("w", encoding=FILE_ENCODING, newline="") as file:
            file.write(render(document))
        self.logger.info(
            "Wrote unpacked file",
            extra={"source": str(source_path), "destination": str(destination_path)},
        )
        return document


def pack(source: MarkupInput, config: Optional[PipelineConfig] = None) -> bytes:
    """Parse, encode and compress markup in one call."""
    return MarkupCodec(config).pack(source)


def unpack(data: bytes, config: Optional[PipelineConfig] = None) -> Document:
    """Decompress and decode a stored document."""
    return MarkupCodec(config).unpack(data)


def pack_file(
    source: PathLike, destination: PathLike, config: Optional[PipelineConfig] = None
) -> EncodeResult:
    return MarkupCodec(config).pack_file(source, destination)


def unpack_file(
    source: PathLike, destination: PathLike, config: Optional[PipelineConfig] = None
) -> Document:
    return MarkupCodec(config).unpack_file(source, destination)

"""Binary encoder for document trees.

Stream layout, pre-order with no header or length prefix::

    text     = 0x03 string
    comment  = 0x02 string
    element  = code [string if CUSTOM] attribute* 0x02 node* 0x00
    attribute= code [string if CUSTOM] (0x00 | 0x01 string)
    string   = one byte per character, 0x00

Known identifiers are written as their registry code; anything else uses the
CUSTOM code followed by the identifier itself, so the stream is
self-describing.
"""

import time
from typing import List, Optional

from compact_markup.shared import (
    CodecConfig,
    CodecMetrics,
    DiagnosticEntry,
    DiagnosticSeverity,
    EncodeError,
    EncodeResult,
    get_logger,
)
from compact_markup.tree import Attribute, Comment, Document, Element, Node, Text, render
from compact_markup.vocabulary import (
    AttributeType,
    ElementType,
    ExtensionRegistry,
    VocabularyKind,
)

STRING_TERMINATOR = 0
CHILDREN_TERMINATOR = 0
VALUE_ABSENT = 0
VALUE_PRESENT = 1


class BinaryEncoder:
    """Encodes documents into the compact binary stream.

    Custom identifiers are reported once per ``encode`` call as advisory
    diagnostics. When an ``ExtensionRegistry`` is supplied, only identifiers
    that registry has not seen before are reported, and the registry records
    them for later listing.
    """

    def __init__(
        self,
        config: Optional[CodecConfig] = None,
        extensions: Optional[ExtensionRegistry] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or CodecConfig()
        self.extensions = extensions
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "binary_encoder")
        self._reset_state()

    def _reset_state(self) -> None:
        self.buffer = bytearray()
        self.node_count = 0
        self.custom_elements: List[str] = []
        self.custom_attributes: List[str] = []
        self.diagnostics: List[DiagnosticEntry] = []

    def encode(self, document: Document) -> EncodeResult:
        """Encode ``document`` into bytes.

        Raises:
            EncodeError: If a string cannot be represented in the stream
        """
        start_time = time.time()
        self._reset_state()

        for node in document.nodes:
            self._encode_node(node)

        data = bytes(self.buffer)
        metrics = CodecMetrics(
            processing_time_ms=(time.time() - start_time) * 1000,
            # markup characters the tree renders to
            input_size=len(render(document)),
            output_size=len(data),
            node_count=self.node_count,
        )
        self.logger.debug(
            "Encoding completed",
            extra={
                "node_count": self.node_count,
                "output_size": len(data),
                "custom_identifiers": len(self.custom_elements) + len(self.custom_attributes),
            },
        )
        return EncodeResult(
            data=data,
            custom_elements=list(self.custom_elements),
            custom_attributes=list(self.custom_attributes),
            diagnostics=list(self.diagnostics),
            metrics=metrics,
        )

    def _encode_string(self, value: str) -> None:
        try:
            encoded = value.encode("latin-1")
        except UnicodeEncodeError:
            if self.config.string_errors == "strict":
                raise EncodeError(
                    "string contains characters outside the single-byte range: "
                    f"{value[:40]!r}"
                ) from None
            encoded = bytes(ord(char) & 0xFF for char in value)
        if STRING_TERMINATOR in encoded:
            raise EncodeError(f"string would contain a zero byte: {value[:40]!r}")
        self.buffer += encoded
        self.buffer.append(STRING_TERMINATOR)

    def _note_custom(self, kind: VocabularyKind, name: str) -> None:
        seen = self.custom_elements if kind is VocabularyKind.ELEMENT else self.custom_attributes
        if name in seen:
            return
        seen.append(name)

        if self.extensions is not None and not self.extensions.register(kind, name):
            return
        if not self.config.report_custom_identifiers:
            return

        label = f"<{name}>" if kind is VocabularyKind.ELEMENT else f"'{name}'"
        message = f"custom {kind.name.lower()} {label} encoded"
        self.logger.warning(message, extra={"identifier": name, "kind": kind.name})
        self.diagnostics.append(DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message=message,
            component="binary_encoder",
            details={"identifier": name, "kind": kind.name},
            correlation_id=self.correlation_id,
        ))

    def _encode_attribute(self, attribute: Attribute) -> None:
        attribute_type = attribute.attribute_type
        self.buffer.append(attribute_type.code)
        if attribute_type is AttributeType.CUSTOM:
            self._encode_string(attribute.name)
            self._note_custom(VocabularyKind.ATTRIBUTE, attribute.name)
        if attribute.value is None:
            self.buffer.append(VALUE_ABSENT)
        else:
            self.buffer.append(VALUE_PRESENT)
            self._encode_string(attribute.value)

    def _encode_node(self, node: Node) -> None:
        self.node_count += 1
        if isinstance(node, Text):
            self.buffer.append(ElementType.TEXT.code)
            self._encode_string(node.value)
        elif isinstance(node, Comment):
            self.buffer.append(ElementType.COMMENT.code)
            self._encode_string(node.value)
        elif isinstance(node, Element):
            element_type = node.element_type
            self.buffer.append(element_type.code)
            if element_type is ElementType.CUSTOM:
                self._encode_string(node.name)
                self._note_custom(VocabularyKind.ELEMENT, node.name)
            for attribute in node.attributes:
                self._encode_attribute(attribute)
            self.buffer.append(AttributeType.CONTENT.code)
            for child in node.children:
                self._encode_node(child)
            self.buffer.append(CHILDREN_TERMINATOR)
        else:
            raise EncodeError(f"cannot encode {type(node).__name__}")


def encode_document(
    document: Document,
    extensions: Optional[ExtensionRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> bytes:
    """Encode a document with the given (or default) codec configuration."""
    return BinaryEncoder(config, extensions).encode(document).data

"""Binary decoder, the exact mirror of ``BinaryEncoder``.

The decoder performs no recovery: an unknown code or a stream that ends early
aborts with ``DecodeError``.
"""

import time
from typing import List, Optional

from compact_markup.shared import CodecConfig, DecodeError, get_logger
from compact_markup.tree import Attribute, Comment, Document, Element, Node, Text
from compact_markup.vocabulary import (
    AttributeType,
    ElementType,
    UnknownCodeError,
    attribute_type_for_code,
    element_type_for_code,
)

from .encoder import CHILDREN_TERMINATOR, STRING_TERMINATOR, VALUE_ABSENT, VALUE_PRESENT


class BinaryDecoder:
    """Decodes a compact binary stream into a document."""

    def __init__(
        self,
        config: Optional[CodecConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or CodecConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "binary_decoder")
        self._reset_state(b"")

    def _reset_state(self, data: bytes) -> None:
        self.data = bytes(data)
        self.index = 0
        self.depth = 0

    def decode(self, data: bytes) -> Document:
        """Decode ``data`` into a document.

        Raises:
            DecodeError: On an unrecognized code or a truncated stream
        """
        start_time = time.time()
        self._reset_state(data)

        nodes: List[Node] = []
        while self._peek() is not None:
            nodes.append(self._decode_node())

        self.logger.debug(
            "Decoding completed",
            extra={
                "input_size": len(self.data),
                "root_nodes": len(nodes),
                "processing_time_ms": (time.time() - start_time) * 1000,
            },
        )
        return Document(tuple(nodes))

    def _peek(self) -> Optional[int]:
        if self.index < len(self.data):
            return self.data[self.index]
        return None

    def _consume(self) -> int:
        if self.index >= len(self.data):
            raise DecodeError("truncated stream", offset=self.index)
        byte = self.data[self.index]
        self.index += 1
        return byte

    def _decode_string(self) -> str:
        end = self.data.find(STRING_TERMINATOR, self.index)
        if end == -1:
            raise DecodeError("truncated stream: unterminated string", offset=len(self.data))
        value = self.data[self.index:end].decode("latin-1")
        self.index = end + 1
        return value

    def _decode_attribute(self) -> Attribute:
        offset = self.index
        code = self._consume()
        try:
            attribute_type = attribute_type_for_code(code)
        except UnknownCodeError:
            raise DecodeError(f"unrecognized code {code} for attribute", offset=offset) from None
        if attribute_type is AttributeType.CUSTOM:
            name = self._decode_string()
        else:
            name = attribute_type.identifier

        flag_offset = self.index
        flag = self._consume()
        if flag == VALUE_ABSENT:
            value = None
        elif flag == VALUE_PRESENT:
            value = self._decode_string()
        else:
            raise DecodeError(
                f"unrecognized code {flag} for attribute value flag", offset=flag_offset
            )
        try:
            return Attribute(name, value)
        except ValueError as e:
            raise DecodeError(f"invalid attribute: {e}", offset=offset) from e

    def _decode_node(self) -> Node:
        offset = self.index
        code = self._consume()
        if code == ElementType.TEXT.code:
            return Text(self._decode_string())
        if code == ElementType.COMMENT.code:
            return Comment(self._decode_string())

        try:
            element_type = element_type_for_code(code)
        except UnknownCodeError:
            raise DecodeError(f"unrecognized code {code} for element", offset=offset) from None
        if element_type is ElementType.CUSTOM:
            name = self._decode_string()
        else:
            name = element_type.identifier

        attributes: List[Attribute] = []
        while True:
            next_byte = self._peek()
            if next_byte is None:
                raise DecodeError("truncated stream in attribute list", offset=self.index)
            if next_byte == AttributeType.CONTENT.code:
                self.index += 1
                break
            attributes.append(self._decode_attribute())

        self.depth += 1
        if self.depth > self.config.max_depth:
            raise DecodeError(
                f"maximum nesting depth of {self.config.max_depth} exceeded", offset=offset
            )
        children: List[Node] = []
        while True:
            next_byte = self._peek()
            if next_byte is None:
                raise DecodeError(f"truncated stream in children of <{name}>", offset=self.index)
            if next_byte == CHILDREN_TERMINATOR:
                self.index += 1
                break
            children.append(self._decode_node())
        self.depth -= 1

        try:
            return Element(name, tuple(attributes), tuple(children))
        except (TypeError, ValueError) as e:
            raise DecodeError(f"invalid element: {e}", offset=offset) from e


def decode_document(data: bytes, config: Optional[CodecConfig] = None) -> Document:
    """Decode a byte stream with the given (or default) codec configuration."""
    return BinaryDecoder(config).decode(data)
